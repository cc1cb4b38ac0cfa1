"""
tseries.algorithms.power.sqrt
=============================

Square root of truncated series.

For a univariate series whose first non-vanishing coefficient sits at an
even index ``2 l`` the root starts at index ``l``; when ``l > 0`` the
result only carries ``order // 2`` as its truncation order, since the
higher coefficients are not determined by the input.
"""

from tseries.algorithms.polynomial.algebra import division_dtype, run_kernel
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.adapter import coeff_sqrt, iszero, zeros_like
from tseries.algorithms.power.kernels import _sqrt_kernel
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.exceptions import DomainError
from tseries.utils.log_config import logger


def _sqrt_taylor1(a: Taylor1) -> Taylor1:
    l0nz = a.findfirst()
    if l0nz < 0:
        return Taylor1(zeros_like(a.coeffs, dtype=division_dtype(a.coeffs)), a.order)
    if l0nz % 2 == 1:
        raise DomainError(
            "First non-vanishing Taylor1 coefficient must correspond to an **even power** "
            "in order to expand `sqrt` around 0.")

    lnull = l0nz >> 1
    order = a.order if l0nz == 0 else a.order >> 1
    if l0nz > 0:
        logger.debug("sqrt: leading order %d, result truncated to order %d", l0nz, order)

    c0 = coeff_sqrt(a.coeffs[l0nz])
    c = zeros_like(a.coeffs, order + 1, dtype=division_dtype(a.coeffs, c0))
    c[lnull] = c0
    run_kernel(_sqrt_kernel, c, a.coeffs, lnull, c0)
    return Taylor1(c, order)


def _sqrt_taylorn(a: TaylorN) -> TaylorN:
    a0 = a.constant_term()
    if iszero(a0):
        raise DomainError(
            "The 0-th order TaylorN coefficient must be non-zero in order to expand `sqrt` around 0.")
    c0 = coeff_sqrt(a0)
    out = TaylorN(0 * c0, a.order, a.tables)
    out.coeffs[0] = HomogeneousPolynomial(c0, 0, a.tables)
    run_kernel(_sqrt_kernel, out.coeffs, a.coeffs, 0, c0)
    return out


def sqrt(a):
    """
    Square root of a truncated series.

    Parameters
    ----------
    a : Taylor1 or TaylorN
        Operand. Taylor1 coefficients may themselves be series, in which
        case the leading coefficient's root is taken on the inner series.

    Returns
    -------
    Taylor1 or TaylorN
        ``c`` with ``c * c == a`` up to the truncation order. A zero
        univariate series gives a zero series.

    Raises
    ------
    DomainError
        If the first nonzero univariate coefficient has an odd index, if a
        multivariate series has a vanishing constant term, or if the
        leading coefficient is a negative real number.
    """
    if isinstance(a, TaylorN):
        return _sqrt_taylorn(a)
    if isinstance(a, Taylor1):
        return _sqrt_taylor1(a)
    raise TypeError(f"sqrt is not defined for {type(a).__name__}")
