""" Public API for the :mod:`tseries` package.

Truncated power series in one and several variables, with recurrence
based ``power``, ``square`` and ``sqrt``.
"""

from .algorithms.polynomial.base import get_num_vars, get_order, set_variables
from .algorithms.polynomial.homogeneous import HomogeneousPolynomial
from .algorithms.power.dispatch import power
from .algorithms.power.sqrt import sqrt
from .algorithms.power.square import square, square_inplace
from .algorithms.power.squaring import power_by_squaring, power_inplace
from .algorithms.series.functions import exp, log
from .algorithms.series.taylor1 import Taylor1
from .algorithms.series.taylorn import TaylorN
from .utils.exceptions import DomainError, TableError, TSeriesError

__all__ = [
    "Taylor1",
    "TaylorN",
    "HomogeneousPolynomial",
    "set_variables",
    "get_order",
    "get_num_vars",
    "power",
    "square",
    "sqrt",
    "power_by_squaring",
    "power_inplace",
    "square_inplace",
    "exp",
    "log",
    "DomainError",
    "TableError",
    "TSeriesError",
]
