"""
tseries.algorithms.power.square
===============================

Squaring of truncated series and homogeneous polynomials.

The series recurrence sums only half of the Cauchy product and doubles it,
adding the middle term separately for even indices. For multivariate
series the middle term ``a_{k/2} * a_{k/2}`` is accumulated pair by pair
over unordered monomial pairs, which halves the work again.
"""

from tseries.algorithms.polynomial.algebra import result_dtype, run_kernel
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.adapter import coeff_square, zeros_like
from tseries.algorithms.power.kernels import _sqr_inplace_kernel, _sqr_kernel
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN


def _square_homogeneous(a: HomogeneousPolynomial) -> HomogeneousPolynomial:
    order = 2 * a.order
    if order > a.tables.order:
        # Not representable with the installed tables; truncated to zero.
        return HomogeneousPolynomial.zero(0, a.dtype, a.tables)
    out = HomogeneousPolynomial.zero(order, a.dtype, a.tables)
    return out.accsqr_(a)


def _square_taylor1(a: Taylor1) -> Taylor1:
    c = zeros_like(a.coeffs, dtype=result_dtype(a.coeffs, a.coeffs))
    c[0] = coeff_square(a.coeffs[0])
    run_kernel(_sqr_kernel, c, a.coeffs)
    return Taylor1(c, a.order)


def _square_taylorn(a: TaylorN) -> TaylorN:
    out = a.zero_like()
    out.coeffs[0] = _square_homogeneous(a.coeffs[0])
    run_kernel(_sqr_kernel, out.coeffs, a.coeffs)
    return out


def square(a):
    """
    Square of a truncated series or homogeneous polynomial.

    Parameters
    ----------
    a : Taylor1, TaylorN or HomogeneousPolynomial
        Operand. Taylor1 coefficients may themselves be series.

    Returns
    -------
    Taylor1, TaylorN or HomogeneousPolynomial
        ``a * a`` with the order of `a`. For a homogeneous polynomial the
        result has degree ``2 * a.order``, or is the degree-0 zero
        polynomial when that degree exceeds the maximum order.
    """
    if isinstance(a, HomogeneousPolynomial):
        return _square_homogeneous(a)
    if isinstance(a, TaylorN):
        return _square_taylorn(a)
    if isinstance(a, Taylor1):
        return _square_taylor1(a)
    raise TypeError(f"square is not defined for {type(a).__name__}")


def _square_inplace_taylorn(a: TaylorN) -> None:
    c = a.coeffs
    c0 = c[0].coeffs[0]
    for k in range(a.order, 0, -1):
        kodd = k % 2
        kend = (k - 2 + kodd) >> 1
        ck = c[k]
        ck.scale_(c0)
        for i in range(1, kend + 1):
            ck.mul_acc_(1, c[i], c[k - i])
        ck.scale_(2)
        if kodd == 0:
            ck.accsqr_(c[k >> 1])
    c[0].coeffs[0] = c0 * c0


def square_inplace(a) -> None:
    """
    Overwrite `a` with ``a * a``, reusing its coefficient storage.

    Indices are visited from the highest down to 0, so each one reads only
    entries that still hold the original value.

    Parameters
    ----------
    a : Taylor1 or TaylorN
        Series to square. An integer dtype stays integer.
    """
    if isinstance(a, TaylorN):
        _square_inplace_taylorn(a)
    elif isinstance(a, Taylor1):
        run_kernel(_sqr_inplace_kernel, a.coeffs)
    else:
        raise TypeError(f"square_inplace is not defined for {type(a).__name__}")