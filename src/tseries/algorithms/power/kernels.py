"""
tseries.algorithms.power.kernels
================================

Coefficient recurrences for squaring, square roots and real powers of
truncated series.

Conventions shared by every kernel:

* The output buffer ``c`` is freshly zero-filled by the caller and the
  seed coefficient (index 0, or the leading output index) is already set;
  the kernels fill the remaining indices in ascending order, each one
  reading only lower, already-final output indices and any input index.
* Coefficients only see ``+ - * /``. Native dtypes run compiled; object
  buffers (rationals, mpmath scalars, homogeneous polynomials, inner
  series) run the same source through
  :func:`~tseries.algorithms.polynomial.algebra.run_kernel`.
* ``x * x`` is written for squares so that homogeneous polynomials can
  route it to their halved pair-accumulation.
"""

import numpy as np
from numba import njit

from tseries.utils.config import CACHE, FASTMATH


@njit(fastmath=FASTMATH, cache=CACHE)
def _sqr_kernel(c: np.ndarray, a: np.ndarray) -> None:
    r"""
    c = a**2 for k >= 1, with c[0] = a[0]**2 already seeded:

    .. math::

        c_k = 2 \sum_{i=0}^{(k-1)/2} a_i a_{k-i}                \quad k \text{ odd}

        c_k = 2 \sum_{i=0}^{(k-2)/2} a_i a_{k-i} + a_{k/2}^2    \quad k \text{ even}
    """
    for k in range(1, c.shape[0]):
        kodd = k % 2
        kend = (k - 2 + kodd) >> 1
        acc = c[k]
        for i in range(kend + 1):
            acc = acc + a[i] * a[k - i]
        acc = 2 * acc
        if kodd == 0:
            h = k >> 1
            acc = acc + a[h] * a[h]
        c[k] = acc


@njit(fastmath=FASTMATH, cache=CACHE)
def _sqr_inplace_kernel(c: np.ndarray) -> None:
    """
    c <- c**2 in place.

    Runs from the highest index down to 0: index k reads only indices
    <= k, none of which has been overwritten yet, and c[0] is squared last.
    """
    for k in range(c.shape[0] - 1, 0, -1):
        kodd = k % 2
        kend = (k - 2 + kodd) >> 1
        acc = c[0] * c[k]
        for i in range(1, kend + 1):
            acc = acc + c[i] * c[k - i]
        acc = 2 * acc
        if kodd == 0:
            h = k >> 1
            acc = acc + c[h] * c[h]
        c[k] = acc
    c[0] = c[0] * c[0]


@njit(fastmath=FASTMATH, cache=CACHE)
def _mul_inplace_kernel(y: np.ndarray, x: np.ndarray) -> None:
    """y <- y * x in place, highest index first. `x` must not alias `y`."""
    for k in range(y.shape[0] - 1, -1, -1):
        acc = y[k] * x[0]
        for i in range(k):
            acc = acc + y[i] * x[k - i]
        y[k] = acc


@njit(fastmath=FASTMATH, cache=CACHE)
def _pow_kernel(c: np.ndarray, a: np.ndarray, r, l0: int, lnull: int, kmax: int, a0) -> None:
    r"""
    c = a**r for lnull < k <= kmax, with c[lnull] = a[l0]**r already seeded.

    With :math:`k' = k - l_{null}`,

    .. math::

        c_k = \frac{1}{k' a_{l_0}} \Big( r k' c_{l_{null}} a_{l_0+k'}
              + \sum_{i=1}^{k'-1} \big(r(k'-i) - i\big) c_{i+l_{null}} a_{l_0+k'-i} \Big)

    Terms whose input index exceeds the input order are omitted. `a0` is
    the divisor coefficient a[l0] (a scalar for multivariate input).
    """
    order = a.shape[0] - 1
    for k in range(lnull + 1, kmax + 1):
        kprime = k - lnull
        acc = c[k]
        if l0 + kprime <= order:
            acc = acc + r * kprime * c[lnull] * a[l0 + kprime]
        for i in range(1, kprime):
            if i + lnull > order or l0 + kprime - i > order:
                continue
            acc = acc + (r * (kprime - i) - i) * c[i + lnull] * a[l0 + kprime - i]
        c[k] = acc / (kprime * a0)


@njit(fastmath=FASTMATH, cache=CACHE)
def _sqrt_kernel(c: np.ndarray, a: np.ndarray, lnull: int, c0) -> None:
    r"""
    c = sqrt(a) for k > lnull, with c[lnull] = c0 = sqrt(a[2 lnull]) seeded.

    With :math:`k' = k - l_{null}` and :math:`k_{end} = \lfloor (k'-2+(k' \bmod 2))/2 \rfloor`,

    .. math::

        c_k = \frac{1}{2 c_{l_{null}}} \Big( a_{k+l_{null}}
              - 2 \sum_{i=i_{min}}^{i_{max}} c_i c_{k+l_{null}-i}
              - [k' \text{ even}]\, c_{k_{end}+l_{null}+1}^2 \Big)

    where :math:`i_{min} = \max(l_{null}+1, k+l_{null}-N)` and
    :math:`i_{max} = \min(l_{null}+k_{end}, N)`.
    """
    order = a.shape[0] - 1
    for k in range(lnull + 1, c.shape[0]):
        kprime = k - lnull
        kodd = kprime % 2
        kend = (kprime - 2 + kodd) >> 1
        imax = min(lnull + kend, order)
        imin = max(lnull + 1, k + lnull - order)
        acc = c[k]
        if k + lnull <= order:
            acc = acc + a[k + lnull]
        if kodd == 0:
            h = kend + lnull + 1
            acc = acc - c[h] * c[h]
        for i in range(imin, imax + 1):
            acc = acc - 2 * c[i] * c[k + lnull - i]
        c[k] = acc / (2 * c0)
