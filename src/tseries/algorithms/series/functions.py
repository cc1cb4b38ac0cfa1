"""
tseries.algorithms.series.functions
===================================

Exponential and logarithm of truncated series. They are only needed by
the dispatcher to define series-valued and complex exponents,
``a**b = exp(b * log(a))``.
"""

import numpy as np

from tseries.algorithms.polynomial.algebra import division_dtype, run_kernel
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.adapter import (coeff_exp, coeff_log, iszero,
                                              zeros_like)
from tseries.algorithms.series.algebra import _series_exp, _series_log
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.exceptions import DomainError


def _seeded_taylorn(a: TaylorN, c0) -> TaylorN:
    out = TaylorN(0 * c0, a.order, a.tables)
    out.coeffs[0] = HomogeneousPolynomial(c0, 0, a.tables)
    return out


def exp(a):
    """
    Exponential of a series.

    Parameters
    ----------
    a : Taylor1 or TaylorN
        Series, possibly nested.

    Returns
    -------
    Taylor1 or TaylorN
        ``exp(a)`` with the order of `a`.
    """
    if isinstance(a, TaylorN):
        out = _seeded_taylorn(a, coeff_exp(a.constant_term()))
        run_kernel(_series_exp, out.coeffs, a.coeffs)
        return out
    if isinstance(a, Taylor1):
        c0 = coeff_exp(a.coeffs[0])
        c = zeros_like(a.coeffs, dtype=division_dtype(a.coeffs, c0))
        c[0] = c0
        run_kernel(_series_exp, c, a.coeffs)
        return Taylor1(c, a.order)
    raise TypeError(f"exp is not defined for {type(a).__name__}")


def log(a):
    """
    Natural logarithm of a series.

    Raises
    ------
    DomainError
        If the constant term of `a` vanishes.
    """
    if isinstance(a, TaylorN):
        a0 = a.constant_term()
        if a0 == 0:
            raise DomainError(
                "The 0-th order TaylorN coefficient must be non-zero in order to expand `log` around 0.")
        out = _seeded_taylorn(a, coeff_log(a0))
        run_kernel(_series_log, out.coeffs, a.coeffs, a0)
        return out
    if isinstance(a, Taylor1):
        a0 = a.coeffs[0]
        if iszero(a0):
            raise DomainError(
                "The 0-th order Taylor1 coefficient must be non-zero in order to expand `log` around 0.")
        c0 = coeff_log(a0)
        c = zeros_like(a.coeffs, dtype=division_dtype(a.coeffs, c0))
        c[0] = c0
        run_kernel(_series_log, c, a.coeffs, a0)
        return Taylor1(c, a.order)
    raise TypeError(f"log is not defined for {type(a).__name__}")
