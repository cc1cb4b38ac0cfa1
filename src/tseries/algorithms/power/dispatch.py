"""
tseries.algorithms.power.dispatch
=================================

Entry point for ``a ** e`` on every series shape.

The exponent decides the algorithm: integer exponents of series with exact
coefficients use power by squaring (and an exact inverse for negative
exponents), ``0.5`` uses the square-root recurrence, other real exponents
use the real-power recurrence, and series-valued or complex exponents are
expanded as ``exp(e * log(a))``.
"""

import numbers
from fractions import Fraction

from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.adapter import coeffs_exact, is_series
from tseries.algorithms.power.real import real_power
from tseries.algorithms.power.square import square
from tseries.algorithms.power.sqrt import sqrt
from tseries.algorithms.power.squaring import power_by_squaring
from tseries.algorithms.series.functions import exp, log
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.exceptions import DomainError
from tseries.utils.log_config import logger
from tseries.utils.scalars import is_complex, is_integer_value


def _exact(a) -> bool:
    if isinstance(a, TaylorN):
        return all(coeffs_exact(p.coeffs) for p in a.coeffs)
    return coeffs_exact(a.coeffs)


def _power_homogeneous(a: HomogeneousPolynomial, e):
    if not is_integer_value(e) or e < 0:
        raise DomainError(
            f"Homogeneous polynomials can only be raised to non-negative integer powers, got {e}")
    return power_by_squaring(a, int(e))


def power(a, e):
    """
    Raise a series or homogeneous polynomial to the power `e`.

    Parameters
    ----------
    a : Taylor1, TaylorN or HomogeneousPolynomial
        Base. Taylor1 coefficients may themselves be series.
    e : int, float, Fraction, complex or series
        Exponent.

    Returns
    -------
    Same type as `a`
        ``a**e``. The truncation order is that of `a`, except for square
        roots of univariate series with a vanishing constant term.

    Raises
    ------
    DomainError
        When ``a**e`` has no representation as a truncated series: a
        negative or fractional power of a homogeneous polynomial, a
        fractional or negative power of a series whose leading term is not
        at order 0 and does not allow factoring it out, an odd leading
        order under a square root.
    """
    if not is_series(a):
        raise TypeError(f"power is not defined for {type(a).__name__}")

    if is_series(e) or is_complex(e):
        if isinstance(a, HomogeneousPolynomial):
            raise DomainError("Homogeneous polynomials cannot be raised to series or complex powers")
        logger.debug("power: exp(e * log(a)) for exponent of type %s", type(e).__name__)
        return exp(e * log(a))

    if e == 0:
        return a.one()
    if e == 1:
        return a.copy()
    if e == 2:
        return square(a)

    if isinstance(a, HomogeneousPolynomial):
        return _power_homogeneous(a, e)

    if isinstance(e, Fraction):
        e = float(e)

    if isinstance(e, numbers.Integral):
        p = int(e)
        if _exact(a):
            logger.debug("power: exact power by squaring, p=%d", p)
            if p >= 0:
                return power_by_squaring(a, p)
            return 1 / power_by_squaring(a, -p)
        if isinstance(a, TaylorN) and p >= 0:
            logger.debug("power: power by squaring, p=%d", p)
            return power_by_squaring(a, p)
        e = float(p)

    if e == 0.5:
        return sqrt(a)
    logger.debug("power: real-exponent recurrence, r=%s", e)
    return real_power(a, e)
