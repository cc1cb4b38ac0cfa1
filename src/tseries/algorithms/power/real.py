"""
tseries.algorithms.power.real
=============================

Real exponents ``a**r`` through the power recurrence

.. math::

    k' a_{l_0} c_k = \\sum_{i=0}^{k'-1} \\big(r(k'-i) - i\\big) c_{i+l_{null}} a_{l_0+k'-i},

obtained by matching coefficients in ``a c' = r a' c``.

For a univariate series the leading factor ``t**l0`` is pulled out, so
a series with vanishing low-order terms can still be raised to ``r`` as
long as ``r * l0`` is an integer. A multivariate series has no single
leading monomial to factor out, so its constant term must be nonzero.
"""

from tseries.algorithms.polynomial.algebra import division_dtype, run_kernel
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.adapter import coeff_power, iszero, zeros_like
from tseries.algorithms.power.kernels import _pow_kernel
from tseries.algorithms.power.square import square
from tseries.algorithms.power.sqrt import sqrt
from tseries.algorithms.power.squaring import power_by_squaring
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.exceptions import DomainError
from tseries.utils.log_config import logger
from tseries.utils.scalars import is_integer_value


def _zero_taylor1(a: Taylor1, r: float) -> Taylor1:
    return Taylor1(zeros_like(a.coeffs, dtype=division_dtype(a.coeffs, r)), a.order)


def _pow_taylor1(a: Taylor1, r: float) -> Taylor1:
    l0 = a.findfirst()
    if l0 < 0:
        return _zero_taylor1(a, r)
    if not is_integer_value(r * l0):
        raise DomainError(
            "The 0-th order Taylor1 coefficient must be non-zero to raise the Taylor1 "
            f"polynomial to a non-integer exponent (leading order {l0}, exponent {r}).")

    lnull = int(r * l0)
    if lnull < 0:
        raise DomainError(
            f"Cannot raise a Taylor1 series with leading order {l0} to the negative power {r}: "
            "the result has a pole at 0.")
    if lnull > a.order:
        logger.debug("power: leading order %d beyond order %d, result is zero", lnull, a.order)
        return _zero_taylor1(a, r)

    # For positive integer r, a**r is a polynomial of degree r * findlast.
    kmax = a.order
    if r > 0 and is_integer_value(r):
        kmax = min(kmax, int(r) * a.findlast())

    a0 = a.coeffs[l0]
    c0 = coeff_power(a0, r)
    c = zeros_like(a.coeffs, dtype=division_dtype(a.coeffs, c0))
    c[lnull] = c0
    if c.dtype != object:
        r = float(r)
    run_kernel(_pow_kernel, c, a.coeffs, r, l0, lnull, kmax, a0)
    return Taylor1(c, a.order)


def _pow_taylorn(a: TaylorN, r: float) -> TaylorN:
    if r >= 0 and is_integer_value(r):
        return power_by_squaring(a, int(r))
    if r == 0.5:
        return sqrt(a)
    a0 = a.constant_term()
    if iszero(a0):
        raise DomainError(
            "The 0-th order TaylorN coefficient must be non-zero in order to expand `^` around 0.")
    c0 = coeff_power(a0, r)
    out = TaylorN(0 * c0, a.order, a.tables)
    out.coeffs[0] = HomogeneousPolynomial(c0, 0, a.tables)
    run_kernel(_pow_kernel, out.coeffs, a.coeffs, r, 0, 0, a.order, a0)
    return out


def real_power(a, r: float):
    """
    Raise a series to a real exponent.

    Parameters
    ----------
    a : Taylor1 or TaylorN
        Base. Taylor1 coefficients may themselves be series, in which case
        the leading coefficient is raised to `r` as an inner series.
    r : float
        Exponent.

    Returns
    -------
    Taylor1 or TaylorN
        ``a**r`` with the order of `a`. A univariate series whose leading
        output index lies beyond the order gives the zero series.
        The order is kept even when the leading index is above zero,
        rather than shrunk to ``r * order``; compare the order halving of
        :func:`~tseries.algorithms.power.sqrt.sqrt`.

    Raises
    ------
    DomainError
        If ``r * l0`` is not an integer or is negative for a univariate
        series, or the constant term of a multivariate series vanishes.
    """
    if r == 0:
        return a.one()
    if r == 1:
        return a.copy()
    if r == 2:
        return square(a)
    if isinstance(a, TaylorN):
        return _pow_taylorn(a, r)
    if isinstance(a, Taylor1):
        return _pow_taylor1(a, r)
    raise TypeError(f"Real power is not defined for {type(a).__name__}")
