import numpy as np
from numba import njit

from tseries.utils.config import CACHE, FASTMATH


def run_kernel(kernel, *args):
    """
    Call a compiled kernel, or its pure-Python source when any array
    argument holds Python objects (exact rationals, mpmath scalars, series).
    """
    for arg in args:
        if isinstance(arg, np.ndarray) and arg.dtype == object:
            return kernel.py_func(*args)
    return kernel(*args)


@njit(fastmath=FASTMATH, cache=CACHE)
def _poly_add(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    for i in range(a.shape[0]):
        out[i] = a[i] + b[i]


@njit(fastmath=FASTMATH, cache=CACHE)
def _poly_sub(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    for i in range(a.shape[0]):
        out[i] = a[i] - b[i]


@njit(fastmath=FASTMATH, cache=CACHE)
def _poly_scale(a: np.ndarray, alpha, out: np.ndarray) -> None:
    for i in range(a.shape[0]):
        out[i] = alpha * a[i]


@njit(fastmath=FASTMATH, cache=CACHE)
def _poly_div(a: np.ndarray, alpha, out: np.ndarray) -> None:
    for i in range(a.shape[0]):
        out[i] = a[i] / alpha


@njit(fastmath=FASTMATH, cache=CACHE)
def _poly_mul_acc(out: np.ndarray, alpha, p: np.ndarray, deg_p: int,
                  q: np.ndarray, deg_q: int, clmo, encode) -> None:
    """out += alpha * p * q, with deg(out) == deg_p + deg_q."""
    d_map = encode[deg_p + deg_q]
    kp = clmo[deg_p]
    kq = clmo[deg_q]
    for i in range(p.shape[0]):
        pi = p[i]
        if pi == 0:
            continue
        for j in range(q.shape[0]):
            qj = q[j]
            if qj == 0:
                continue
            out[d_map[kp[i] + kq[j]]] += alpha * pi * qj


@njit(fastmath=FASTMATH, cache=CACHE)
def _poly_accsqr(out: np.ndarray, a: np.ndarray, deg: int, clmo, encode) -> None:
    """
    out += a * a, visiting every unordered pair of monomials once.

    Cross terms (i != j) are doubled; pairs with an exactly vanishing
    coefficient are skipped.
    """
    d_map = encode[2 * deg]
    ka = clmo[deg]
    n = a.shape[0]
    for na in range(n):
        ca = a[na]
        if ca == 0:
            continue
        inda = ka[na]
        out[d_map[2 * inda]] += ca * ca
        for nb in range(na + 1, n):
            cb = a[nb]
            if cb == 0:
                continue
            out[d_map[inda + ka[nb]]] += 2 * ca * cb


def result_dtype(*items) -> np.dtype:
    """
    Coefficient dtype able to hold a combination of arrays and scalars.

    Any Python-object operand (``Fraction``, mpmath scalar, series) makes
    the result an ``object`` array.
    """
    dtypes = []
    for item in items:
        if isinstance(item, np.ndarray):
            dtypes.append(item.dtype)
        elif isinstance(item, (bool, int, float, complex, np.generic)):
            dtypes.append(np.asarray(item).dtype)
        else:
            dtypes.append(np.dtype(object))
    if any(dt == object for dt in dtypes):
        return np.dtype(object)
    return np.result_type(*dtypes)


def division_dtype(*items) -> np.dtype:
    """Like :func:`result_dtype`, but integer and boolean kinds become float64."""
    dt = result_dtype(*items)
    if dt.kind in "biu":
        return np.dtype(np.float64)
    return dt
