"""
Scalar helpers for the leading-coefficient operations.

The series recurrences only need ``+ - * /`` on coefficients; the seed of
each recurrence (``a0**r``, ``sqrt(a0)``, ``exp(a0)``, ``log(a0)``) is
evaluated here. mpmath scalars are evaluated with mpmath at the working
precision set in :mod:`tseries.utils.config`, exact rationals stay exact
whenever the result is representable.
"""

import cmath
import math
import numbers
from fractions import Fraction

import mpmath as mp
import numpy as np

from tseries.utils.config import MPMATH_DPS
from tseries.utils.exceptions import DomainError


def with_precision(precision: int = None):
    """
    Context manager for setting mpmath precision.

    Parameters
    ----------
    precision : int, optional
        Number of decimal places. If None, uses MPMATH_DPS from config.
    """
    if precision is None:
        precision = MPMATH_DPS
    return mp.workdps(precision)


def is_mpmath(x) -> bool:
    return isinstance(x, (mp.mpf, mp.mpc))


def is_complex(x) -> bool:
    return isinstance(x, (complex, np.complexfloating, mp.mpc))


def is_exact(x) -> bool:
    """True for integers and rationals (``int``, ``Fraction``, numpy integers)."""
    return isinstance(x, numbers.Rational) and not isinstance(x, bool)


def is_integer_value(r) -> bool:
    """True when the real number `r` has no fractional part."""
    if isinstance(r, numbers.Integral):
        return True
    if isinstance(r, numbers.Real):
        return float(r).is_integer()
    return False


def _as_fraction(x) -> Fraction:
    if isinstance(x, numbers.Integral):
        return Fraction(int(x))
    return Fraction(x)


def _exact_sqrt(x: numbers.Rational):
    q = _as_fraction(x)
    num = math.isqrt(q.numerator)
    den = math.isqrt(q.denominator)
    if num * num == q.numerator and den * den == q.denominator:
        return Fraction(num, den)
    return None


def scalar_sqrt(x):
    """
    Square root of a scalar coefficient.

    Parameters
    ----------
    x : number
        Real, complex, rational or mpmath scalar.

    Returns
    -------
    number
        sqrt(x). Perfect-square rationals return a ``Fraction``.

    Raises
    ------
    DomainError
        If `x` is a negative real number.
    """
    if is_mpmath(x):
        if isinstance(x, mp.mpf) and x < 0:
            raise DomainError(f"Square root of negative real number {x}")
        with with_precision():
            return mp.sqrt(x)
    if isinstance(x, (np.complexfloating, np.floating)):
        if not is_complex(x) and x < 0:
            raise DomainError(f"Square root of negative real number {x}")
        return np.sqrt(x)
    if isinstance(x, complex):
        return cmath.sqrt(x)
    if x < 0:
        raise DomainError(f"Square root of negative real number {x}")
    if is_exact(x):
        exact = _exact_sqrt(x)
        if exact is not None:
            return exact
    return math.sqrt(x)


def scalar_power(x, r):
    """
    Raise a scalar coefficient to a real exponent.

    Parameters
    ----------
    x : number
        Base.
    r : int or float
        Exponent.

    Returns
    -------
    number
        x**r, evaluated with mpmath when `x` is an mpmath scalar.

    Raises
    ------
    DomainError
        Negative real base with a non-integer exponent, or a zero base with
        a negative exponent.
    """
    if is_mpmath(x):
        with with_precision():
            if isinstance(x, mp.mpf) and x < 0 and not is_integer_value(r):
                raise DomainError(f"Negative base {x} raised to non-integer power {r}")
            if x == 0 and r < 0:
                raise DomainError(f"Zero raised to negative power {r}")
            return mp.power(x, r)
    if x == 0 and r < 0:
        raise DomainError(f"Zero raised to negative power {r}")
    if not is_complex(x) and x < 0 and not is_integer_value(r):
        raise DomainError(f"Negative base {x} raised to non-integer power {r}")
    if isinstance(r, numbers.Integral) and is_exact(x):
        return _as_fraction(x) ** int(r)
    return x ** r


def scalar_exp(x):
    """Exponential of a scalar coefficient."""
    if is_mpmath(x):
        with with_precision():
            return mp.exp(x)
    if isinstance(x, (np.floating, np.complexfloating)):
        return np.exp(x)
    if isinstance(x, complex):
        return cmath.exp(x)
    return math.exp(x)


def scalar_log(x):
    """
    Natural logarithm of a scalar coefficient.

    Raises
    ------
    DomainError
        If `x` is zero or a negative real number.
    """
    if x == 0:
        raise DomainError("Logarithm of zero")
    if is_mpmath(x):
        if isinstance(x, mp.mpf) and x < 0:
            raise DomainError(f"Logarithm of negative real number {x}")
        with with_precision():
            return mp.log(x)
    if isinstance(x, np.complexfloating):
        return np.log(x)
    if isinstance(x, complex):
        return cmath.log(x)
    if x < 0:
        raise DomainError(f"Logarithm of negative real number {x}")
    if isinstance(x, np.floating):
        return np.log(x)
    return math.log(x)
