"""
tseries.algorithms.power.adapter
================================

Shape dispatch for the coefficient recurrences.

Every recurrence in :mod:`tseries.algorithms.power.kernels` is written once,
against coefficients that only need ``+ - * /``. What differs between the
flat, multivariate and nested shapes is how a single *coefficient* is
zeroed, set to the unit, or fed through the scalar operation that seeds a
recurrence (``a0**r``, ``sqrt(a0)``, ``exp(a0)``, ``log(a0)``). For scalar
coefficients these go to :mod:`tseries.utils.scalars`; for a coefficient
that is itself a series, they re-enter the public operations on the inner
series, which is what makes nesting work to arbitrary depth.
"""

import numpy as np

from tseries.algorithms.series.base import AbstractSeries
from tseries.utils.scalars import (is_exact, scalar_exp, scalar_log,
                                   scalar_power, scalar_sqrt)


def is_series(x) -> bool:
    return isinstance(x, AbstractSeries)


def is_nested(coeffs: np.ndarray) -> bool:
    """True when a coefficient array holds inner series."""
    return coeffs.dtype == object and coeffs.shape[0] > 0 and is_series(coeffs[0])


def iszero(x) -> bool:
    """Exact-zero test for a scalar or series coefficient."""
    if is_series(x):
        return x.iszero()
    return x == 0


def coeffs_exact(coeffs: np.ndarray) -> bool:
    """True when every coefficient is an integer or rational (recursively)."""
    if coeffs.dtype.kind in "iu":
        return True
    if coeffs.dtype != object:
        return False
    for c in coeffs:
        if is_series(c):
            if not coeffs_exact(c.coeffs):
                return False
        elif not is_exact(c):
            return False
    return True


def zero_coeff(x):
    """Zero of the same kind as coefficient `x`."""
    if is_series(x):
        return x.zero_like()
    return 0 * x


def unit_coeff(x):
    """Multiplicative unit of the same kind as coefficient `x`."""
    if is_series(x):
        return x.one()
    return 0 * x + 1


def zeros_like(coeffs: np.ndarray, n: int = None, dtype=None) -> np.ndarray:
    """
    Freshly zero-filled coefficient buffer shaped after `coeffs`.

    Native dtypes give ``np.zeros``; object buffers are filled element by
    element (inner zero series for nested input, ``0`` otherwise).
    """
    n = coeffs.shape[0] if n is None else n
    dtype = coeffs.dtype if dtype is None else np.dtype(dtype)
    if dtype != object:
        return np.zeros(n, dtype=dtype)
    out = np.empty(n, dtype=object)
    template = coeffs[0] if coeffs.shape[0] > 0 else 0
    for k in range(n):
        out[k] = template.zero_like() if is_series(template) else 0
    return out


def coeff_power(x, r):
    """x**r for the leading coefficient; inner series go through power()."""
    if is_series(x):
        from tseries.algorithms.power.dispatch import power
        return power(x, r)
    return scalar_power(x, r)


def coeff_square(x):
    if is_series(x):
        from tseries.algorithms.power.square import square
        return square(x)
    return x * x


def coeff_sqrt(x):
    if is_series(x):
        from tseries.algorithms.power.sqrt import sqrt
        return sqrt(x)
    return scalar_sqrt(x)


def coeff_exp(x):
    if is_series(x):
        from tseries.algorithms.series.functions import exp
        return exp(x)
    return scalar_exp(x)


def coeff_log(x):
    if is_series(x):
        from tseries.algorithms.series.functions import log
        return log(x)
    return scalar_log(x)


def copy_coeff(x):
    if is_series(x):
        return x.copy()
    return x


def clean_coeffs(coeffs: np.ndarray, tol: float) -> np.ndarray:
    """Copy of `coeffs` with entries of magnitude below `tol` set to zero."""
    if coeffs.dtype != object:
        out = coeffs.copy()
        out[np.abs(out) < tol] = 0
        return out
    out = np.empty(coeffs.shape[0], dtype=object)
    for k in range(coeffs.shape[0]):
        c = coeffs[k]
        if is_series(c):
            out[k] = c.clean(tol)
        else:
            out[k] = 0 * c if abs(c) < tol else c
    return out
