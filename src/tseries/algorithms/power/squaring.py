"""
tseries.algorithms.power.squaring
=================================

Non-negative integer powers by repeated squaring.

The exponent is consumed from its lowest set bit upward: runs of trailing
zero bits become successive squarings of the base, and every set bit after
the lowest multiplies the running result by the current base. Flat
univariate and multivariate series with ``p > 3`` take the in-place path,
which runs the same schedule on two preallocated buffers.
"""

from tseries.algorithms.polynomial.algebra import run_kernel
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.adapter import is_nested, unit_coeff
from tseries.algorithms.power.kernels import _mul_inplace_kernel
from tseries.algorithms.power.square import square, square_inplace
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.log_config import logger


def _trailing_zeros(p: int) -> int:
    return (p & -p).bit_length() - 1


def _supports_inplace(x) -> bool:
    if isinstance(x, TaylorN):
        return True
    return isinstance(x, Taylor1) and not is_nested(x.coeffs)


def power_by_squaring(x, p: int):
    """
    Raise `x` to the non-negative integer power `p`.

    Parameters
    ----------
    x : Taylor1, TaylorN or HomogeneousPolynomial
        Base. Taylor1 coefficients may themselves be series.
    p : int
        Exponent, ``p >= 0``.

    Returns
    -------
    Same type as `x`
        ``x**p`` with the order of `x`; exact coefficients stay exact.
    """
    assert p >= 0, f"power_by_squaring requires a non-negative exponent, got {p}"
    if p == 0:
        return x.one()
    if p == 1:
        return x.copy()
    if isinstance(x, HomogeneousPolynomial) and p * x.order > x.tables.order:
        # Degree not representable; same truncation as an overflowing product.
        return HomogeneousPolynomial.zero(0, x.dtype, x.tables)
    if p == 2:
        return square(x)
    if p == 3:
        return x * square(x)
    if _supports_inplace(x):
        logger.debug("power_by_squaring: in-place engine, p=%d, order=%d", p, x.order)
        result = x.zero_like()
        scratch = x.zero_like()
        power_inplace(result, x, scratch, p)
        return result

    t = _trailing_zeros(p) + 1
    p >>= t
    for _ in range(t - 1):
        x = square(x)
    result = x
    while p > 0:
        t = _trailing_zeros(p) + 1
        p >>= t
        for _ in range(t):
            x = square(x)
        result = result * x
    return result


def _check_buffers(result, a, scratch) -> None:
    if result is a or result is scratch or a is scratch:
        raise ValueError("power_inplace needs three distinct series")
    for s in (result, scratch):
        if type(s) is not type(a):
            raise TypeError(f"Buffer type {type(s).__name__} does not match {type(a).__name__}")
        if s.order != a.order:
            raise ValueError(f"Buffer order {s.order} does not match series order {a.order}")
    if isinstance(a, Taylor1):
        for s in (result, a, scratch):
            if is_nested(s.coeffs):
                raise TypeError("power_inplace does not support nested Taylor1 series")
    elif not isinstance(a, TaylorN):
        raise TypeError(f"power_inplace is not defined for {type(a).__name__}")
    if result.dtype != a.dtype or scratch.dtype != a.dtype:
        raise ValueError(
            f"Buffer dtypes {result.dtype}, {scratch.dtype} do not match series dtype {a.dtype}")


def _assign(dst, src) -> None:
    """Copy the coefficients of `src` into the storage of `dst`."""
    if isinstance(dst, TaylorN):
        for d in range(dst.order + 1):
            dst.coeffs[d].coeffs[:] = src.coeffs[d].coeffs
    else:
        dst.coeffs[:] = src.coeffs


def _set_one(dst) -> None:
    if isinstance(dst, TaylorN):
        for d in range(dst.order + 1):
            dst.coeffs[d].coeffs[:] = 0
        dst.coeffs[0].coeffs[0] = 1
    else:
        unit = unit_coeff(dst.coeffs[0])
        dst.coeffs[:] = 0 * unit
        dst.coeffs[0] = unit


def _mul_inplace(y, x) -> None:
    """y <- y * x, reusing the storage of `y`."""
    if isinstance(y, TaylorN):
        x0 = x.coeffs[0].coeffs[0]
        for k in range(y.order, -1, -1):
            yk = y.coeffs[k]
            yk.scale_(x0)
            for i in range(k):
                yk.mul_acc_(1, y.coeffs[i], x.coeffs[k - i])
    else:
        run_kernel(_mul_inplace_kernel, y.coeffs, x.coeffs)


def power_inplace(result, a, scratch, p: int) -> None:
    """
    Write ``a**p`` into `result`, using `scratch` as the running base.

    No series is allocated per step: every squaring and multiplication
    overwrites `scratch` or `result` coefficient by coefficient.

    Parameters
    ----------
    result, scratch : Taylor1 or TaylorN
        Output and work buffers of the same type, order and dtype as `a`.
        Their previous contents are discarded.
    a : Taylor1 or TaylorN
        Base; left unchanged. Nested Taylor1 series are not supported.
    p : int
        Exponent, ``p >= 0``.

    Raises
    ------
    ValueError
        If the three series are not distinct or differ in order or dtype.
    TypeError
        For nested or unsupported series types.
    """
    assert p >= 0, f"power_inplace requires a non-negative exponent, got {p}"
    _check_buffers(result, a, scratch)
    if p == 0:
        _set_one(result)
        return

    t = _trailing_zeros(p) + 1
    p >>= t
    _assign(scratch, a)
    for _ in range(t - 1):
        square_inplace(scratch)
    _assign(result, scratch)
    while p > 0:
        t = _trailing_zeros(p) + 1
        p >>= t
        for _ in range(t):
            square_inplace(scratch)
        _mul_inplace(result, scratch)
