from fractions import Fraction

import numpy as np

from tseries.algorithms.polynomial.algebra import (division_dtype,
                                                   result_dtype, run_kernel)
from tseries.algorithms.power.adapter import (clean_coeffs, copy_coeff,
                                              is_series, iszero, unit_coeff,
                                              zeros_like)
from tseries.algorithms.series.algebra import (_series_add, _series_div,
                                               _series_div_scalar,
                                               _series_mul, _series_scale,
                                               _series_sub)
from tseries.algorithms.series.base import AbstractSeries
from tseries.utils.config import TOL
from tseries.utils.exceptions import DomainError


def _coeff_array(values) -> np.ndarray:
    """Copy `values` into a 1-D coefficient array, keeping series as objects."""
    if isinstance(values, np.ndarray):
        return values.copy() if values.ndim == 1 else values.ravel().copy()
    values = list(values)
    if any(is_series(v) for v in values) or not values:
        out = np.empty(len(values), dtype=object)
        for k, v in enumerate(values):
            out[k] = v
        return out
    return np.array(values)


def _to_fractions(coeffs: np.ndarray) -> np.ndarray:
    out = np.empty(coeffs.shape[0], dtype=object)
    for k in range(coeffs.shape[0]):
        out[k] = Fraction(int(coeffs[k]))
    return out


class Taylor1(AbstractSeries):
    """
    Univariate truncated power series ``sum_{k=0}^{order} c[k] t**k``.

    Parameters
    ----------
    coeffs : array_like or scalar
        Coefficients, lowest power first. Entries may be numbers, exact
        rationals, mpmath scalars or series (nesting).
    order : int, optional
        Truncation order. Defaults to ``len(coeffs) - 1``; shorter input is
        zero-padded, longer input truncated.
    """

    __slots__ = ("coeffs", "order")

    def __init__(self, coeffs, order: int = None):
        if is_series(coeffs) or np.isscalar(coeffs) or not hasattr(coeffs, "__len__"):
            coeffs = [coeffs]
        arr = _coeff_array(coeffs)
        if arr.shape[0] == 0:
            arr = np.zeros(1)
        if order is None:
            order = arr.shape[0] - 1
        if order < 0:
            raise ValueError(f"Order must be non-negative, got {order}")
        if arr.shape[0] < order + 1:
            pad = zeros_like(arr, order + 1 - arr.shape[0])
            arr = np.concatenate([arr, pad]) if arr.dtype != object else _concat_objects(arr, pad)
        self.coeffs = arr[:order + 1]
        self.order = order

    # -- factories ---------------------------------------------------------

    @classmethod
    def variable(cls, order: int, dtype=np.float64) -> "Taylor1":
        """The expansion variable ``t`` truncated at `order`."""
        c = np.zeros(order + 1, dtype=dtype)
        if order >= 1:
            c[1] = 1
        return cls(c, order)

    def zero_like(self) -> "Taylor1":
        return Taylor1(zeros_like(self.coeffs), self.order)

    def one(self) -> "Taylor1":
        """Identity series: unit constant term, all other coefficients zero."""
        c = zeros_like(self.coeffs)
        c[0] = unit_coeff(self.coeffs[0])
        return Taylor1(c, self.order)

    def copy(self) -> "Taylor1":
        if self.coeffs.dtype == object:
            c = np.empty(self.order + 1, dtype=object)
            for k in range(self.order + 1):
                c[k] = copy_coeff(self.coeffs[k])
            return Taylor1(c, self.order)
        return Taylor1(self.coeffs.copy(), self.order)

    # -- access ------------------------------------------------------------

    @property
    def dtype(self):
        return self.coeffs.dtype

    def __len__(self) -> int:
        return self.order + 1

    def __getitem__(self, k):
        return self.coeffs[k]

    def __setitem__(self, k, value):
        self.coeffs[k] = value

    def constant_term(self):
        c = self.coeffs[0]
        return c.constant_term() if is_series(c) else c

    def findfirst(self) -> int:
        """Index of the first nonzero coefficient, -1 for the zero series."""
        for k in range(self.order + 1):
            if not iszero(self.coeffs[k]):
                return k
        return -1

    def findlast(self) -> int:
        """Index of the last nonzero coefficient, -1 for the zero series."""
        for k in range(self.order, -1, -1):
            if not iszero(self.coeffs[k]):
                return k
        return -1

    def iszero(self) -> bool:
        return self.findfirst() == -1

    def clean(self, tol: float = TOL) -> "Taylor1":
        """Copy with coefficients of magnitude below `tol` set to zero."""
        return Taylor1(clean_coeffs(self.coeffs, tol), self.order)

    def truncate(self, order: int) -> "Taylor1":
        """Copy keeping coefficients up to `order` (zero-padded if larger)."""
        return Taylor1(self.copy().coeffs, order)

    # -- arithmetic --------------------------------------------------------

    def _fix_order(self, other: "Taylor1"):
        if other.order == self.order:
            return self, other
        order = min(self.order, other.order)
        return self.truncate(order), other.truncate(order)

    def _binary(self, other, kernel) -> "Taylor1":
        a, b = self._fix_order(other)
        out = zeros_like(a.coeffs, dtype=result_dtype(a.coeffs, b.coeffs))
        run_kernel(kernel, a.coeffs, b.coeffs, out)
        return Taylor1(out, a.order)

    def _constant(self, value) -> "Taylor1":
        c = zeros_like(self.coeffs, dtype=result_dtype(self.coeffs, value))
        c[0] = c[0] + value
        return Taylor1(c, self.order)

    def __add__(self, other):
        if isinstance(other, Taylor1):
            return self._binary(other, _series_add)
        return self._binary(self._constant(other), _series_add)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Taylor1):
            return self._binary(other, _series_sub)
        return self._binary(self._constant(other), _series_sub)

    def __rsub__(self, other):
        return self._constant(other) - self

    def __neg__(self):
        return self * -1

    def __pos__(self):
        return self.copy()

    def __mul__(self, other):
        if isinstance(other, Taylor1):
            a, b = self._fix_order(other)
            out = zeros_like(a.coeffs, dtype=result_dtype(a.coeffs, b.coeffs))
            run_kernel(_series_mul, out, a.coeffs, b.coeffs)
            return Taylor1(out, a.order)
        out = zeros_like(self.coeffs, dtype=result_dtype(self.coeffs, other))
        run_kernel(_series_scale, self.coeffs, other, out)
        return Taylor1(out, self.order)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, Taylor1):
            if self.coeffs.dtype.kind in "iu" and isinstance(other, int):
                return Taylor1(_to_fractions(self.coeffs), self.order) / other
            out = zeros_like(self.coeffs, dtype=division_dtype(self.coeffs, other))
            run_kernel(_series_div_scalar, self.coeffs, other, out)
            return Taylor1(out, self.order)
        a, b = self._fix_order(other)
        if a.coeffs.dtype.kind in "iu" and b.coeffs.dtype.kind in "iu":
            a = Taylor1(_to_fractions(a.coeffs), a.order)
            b = Taylor1(_to_fractions(b.coeffs), b.order)
        l0 = b.findfirst()
        if l0 == -1:
            raise DomainError("Division by the zero series")
        for k in range(min(l0, a.order + 1)):
            if not iszero(a.coeffs[k]):
                raise DomainError(
                    f"Cannot divide: the divisor's first non-zero coefficient is at order {l0} "
                    f"but the dividend has a non-zero coefficient at order {k}")
        out = zeros_like(a.coeffs, dtype=division_dtype(a.coeffs, b.coeffs))
        run_kernel(_series_div, out, a.coeffs, b.coeffs, l0, b.coeffs[l0])
        return Taylor1(out, a.order)

    def __rtruediv__(self, other):
        return self._constant(other) / self

    def __eq__(self, other):
        if isinstance(other, Taylor1):
            return self.order == other.order and all(
                x == y for x, y in zip(self.coeffs, other.coeffs))
        if isinstance(other, AbstractSeries):
            return NotImplemented
        return self.coeffs[0] == other and all(iszero(c) for c in self.coeffs[1:])

    def __repr__(self) -> str:
        return f"Taylor1({list(self.coeffs)!r}, order={self.order})"


def _concat_objects(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    out = np.empty(a.shape[0] + b.shape[0], dtype=object)
    out[:a.shape[0]] = a
    out[a.shape[0]:] = b
    return out
