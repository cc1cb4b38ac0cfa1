import numpy as np
from numba import njit

from tseries.utils.config import CACHE, FASTMATH

# The kernels below fill a freshly zero-filled output buffer `c` in
# ascending index order. They only use + - * / on the coefficients, so the
# same source runs compiled (native dtypes) or interpreted through
# ``run_kernel`` (object buffers holding rationals or series).


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_add(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    for k in range(out.shape[0]):
        out[k] = a[k] + b[k]


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_sub(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    for k in range(out.shape[0]):
        out[k] = a[k] - b[k]


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_scale(a: np.ndarray, alpha, out: np.ndarray) -> None:
    for k in range(out.shape[0]):
        out[k] = alpha * a[k]


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_div_scalar(a: np.ndarray, alpha, out: np.ndarray) -> None:
    for k in range(out.shape[0]):
        out[k] = a[k] / alpha


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_mul(c: np.ndarray, a: np.ndarray, b: np.ndarray) -> None:
    """Cauchy product c = a * b truncated to len(c)."""
    for k in range(c.shape[0]):
        acc = c[k]
        for i in range(k + 1):
            acc = acc + a[i] * b[k - i]
        c[k] = acc


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_div(c: np.ndarray, a: np.ndarray, b: np.ndarray, l0: int, b0) -> None:
    """
    Quotient c = a / b where b[l0] = b0 is the first nonzero coefficient
    of b and a[0:l0] vanishes. Input terms beyond the order are omitted.
    """
    order = a.shape[0] - 1
    for k in range(c.shape[0]):
        acc = c[k]
        if k + l0 <= order:
            acc = acc + a[k + l0]
        for i in range(k):
            if k - i + l0 <= order:
                acc = acc - c[i] * b[k - i + l0]
        c[k] = acc / b0


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_exp(c: np.ndarray, a: np.ndarray) -> None:
    """
    c = exp(a) for k >= 1, with c[0] already seeded:

        c_k = (1/k) sum_{j=1}^{k} j a_j c_{k-j}
    """
    for k in range(1, c.shape[0]):
        acc = c[k]
        for j in range(1, k + 1):
            acc = acc + j * a[j] * c[k - j]
        c[k] = acc / k


@njit(fastmath=FASTMATH, cache=CACHE)
def _series_log(c: np.ndarray, a: np.ndarray, a0) -> None:
    """
    c = log(a) for k >= 1, with c[0] already seeded and a0 = a[0] != 0:

        c_k = (a_k - (1/k) sum_{j=1}^{k-1} j c_j a_{k-j}) / a_0
    """
    for k in range(1, c.shape[0]):
        acc = c[k]
        for j in range(1, k):
            acc = acc + j * c[j] * a[k - j]
        c[k] = (a[k] - acc / k) / a0
