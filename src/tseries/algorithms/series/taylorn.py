import numpy as np

from tseries.algorithms.polynomial.algebra import result_dtype, run_kernel
from tseries.algorithms.polynomial.base import IndexTables, get_tables
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.series.algebra import _series_div, _series_sub
from tseries.algorithms.series.base import AbstractSeries
from tseries.utils.config import TOL
from tseries.utils.exceptions import DomainError, TableError


class TaylorN(AbstractSeries):
    """
    Multivariate truncated power series, stored as one homogeneous
    polynomial per total degree ``0..order``.

    Parameters
    ----------
    coeffs : HomogeneousPolynomial, sequence of HomogeneousPolynomial or scalar
        Homogeneous parts. Missing degrees are filled with zeros; a scalar
        gives a constant series.
    order : int, optional
        Truncation order, at most the order of the index tables (default).
    """

    __slots__ = ("coeffs", "order", "tables")

    def __init__(self, coeffs, order: int = None, tables: IndexTables = None):
        if tables is None:
            tables = coeffs.tables if isinstance(coeffs, HomogeneousPolynomial) else get_tables()
        if order is None:
            order = tables.order
        if order > tables.order:
            raise TableError(f"Order {order} exceeds the maximum order {tables.order} of the index tables")
        if isinstance(coeffs, HomogeneousPolynomial):
            parts = [coeffs]
        elif isinstance(coeffs, (list, tuple, np.ndarray)):
            parts = list(coeffs)
        else:
            parts = [HomogeneousPolynomial(coeffs, 0, tables)]
        dtype = result_dtype(*[p.coeffs for p in parts]) if parts else np.dtype(np.float64)

        arr = np.empty(order + 1, dtype=object)
        for d in range(order + 1):
            arr[d] = HomogeneousPolynomial.zero(d, dtype, tables)
        for p in parts:
            if p.order > order:
                continue
            arr[p.order] = arr[p.order] + p
        self.coeffs = arr
        self.order = order
        self.tables = tables

    @classmethod
    def _from_parts(cls, parts: np.ndarray, order: int, tables: IndexTables) -> "TaylorN":
        s = cls.__new__(cls)
        s.coeffs = parts
        s.order = order
        s.tables = tables
        return s

    # -- factories ---------------------------------------------------------

    @classmethod
    def variable(cls, idx: int, order: int = None, dtype=np.float64) -> "TaylorN":
        """The series ``x_idx`` truncated at `order`."""
        tables = get_tables()
        p = HomogeneousPolynomial.variable(idx, tables)
        return cls(HomogeneousPolynomial(p.coeffs.astype(dtype), 1, tables), order, tables)

    def zero_like(self) -> "TaylorN":
        parts = np.empty(self.order + 1, dtype=object)
        for d in range(self.order + 1):
            parts[d] = self.coeffs[d].zero_like()
        return TaylorN._from_parts(parts, self.order, self.tables)

    def one(self) -> "TaylorN":
        """Identity series: unit constant term, all other parts zero."""
        s = self.zero_like()
        s.coeffs[0] = self.coeffs[0].one()
        return s

    def copy(self) -> "TaylorN":
        parts = np.empty(self.order + 1, dtype=object)
        for d in range(self.order + 1):
            parts[d] = self.coeffs[d].copy()
        return TaylorN._from_parts(parts, self.order, self.tables)

    # -- access ------------------------------------------------------------

    @property
    def dtype(self):
        return result_dtype(*[p.coeffs for p in self.coeffs])

    def __len__(self) -> int:
        return self.order + 1

    def __getitem__(self, d) -> HomogeneousPolynomial:
        return self.coeffs[d]

    def __setitem__(self, d, value: HomogeneousPolynomial):
        if value.order != d:
            raise ValueError(f"Part {d} must be homogeneous of degree {d}, got {value.order}")
        self.coeffs[d] = value

    def constant_term(self):
        return self.coeffs[0].coeffs[0]

    def iszero(self) -> bool:
        return all(p.iszero() for p in self.coeffs)

    def coefficient(self, exponents):
        """Coefficient of the monomial with the given exponents."""
        d = int(sum(exponents))
        if d > self.order:
            return 0
        return self.coeffs[d].coefficient(exponents)

    def clean(self, tol: float = TOL) -> "TaylorN":
        parts = np.empty(self.order + 1, dtype=object)
        for d in range(self.order + 1):
            parts[d] = self.coeffs[d].clean(tol)
        return TaylorN._from_parts(parts, self.order, self.tables)

    def truncate(self, order: int) -> "TaylorN":
        return TaylorN(list(self.copy().coeffs[:order + 1]), order, self.tables)

    # -- arithmetic --------------------------------------------------------

    def _fix_order(self, other: "TaylorN"):
        if other.order == self.order:
            return self, other
        order = min(self.order, other.order)
        return self.truncate(order), other.truncate(order)

    def _coerce(self, other):
        if isinstance(other, TaylorN):
            return other
        if isinstance(other, AbstractSeries):
            return NotImplemented
        return TaylorN(HomogeneousPolynomial(other, 0, self.tables), self.order, self.tables)

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        a, b = self._fix_order(other)
        parts = np.empty(a.order + 1, dtype=object)
        for d in range(a.order + 1):
            parts[d] = a.coeffs[d] + b.coeffs[d]
        return TaylorN._from_parts(parts, a.order, a.tables)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        a, b = self._fix_order(other)
        parts = np.empty(a.order + 1, dtype=object)
        run_kernel(_series_sub, a.coeffs, b.coeffs, parts)
        return TaylorN._from_parts(parts, a.order, a.tables)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __neg__(self):
        return self * -1

    def __pos__(self):
        return self.copy()

    def __mul__(self, other):
        if isinstance(other, TaylorN):
            a, b = self._fix_order(other)
            if object in (a.dtype, b.dtype):
                dtype = np.dtype(object)
            else:
                dtype = np.result_type(a.dtype, b.dtype)
            out = TaylorN(HomogeneousPolynomial.zero(0, dtype, a.tables), a.order, a.tables)
            for k in range(a.order + 1):
                for i in range(k + 1):
                    out.coeffs[k].mul_acc_(1, a.coeffs[i], b.coeffs[k - i])
            return out
        if isinstance(other, AbstractSeries):
            return NotImplemented
        parts = np.empty(self.order + 1, dtype=object)
        for d in range(self.order + 1):
            parts[d] = self.coeffs[d] * other
        return TaylorN._from_parts(parts, self.order, self.tables)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, AbstractSeries) and not isinstance(other, TaylorN):
            return NotImplemented
        if not isinstance(other, TaylorN):
            parts = np.empty(self.order + 1, dtype=object)
            for d in range(self.order + 1):
                parts[d] = self.coeffs[d] / other
            return TaylorN._from_parts(parts, self.order, self.tables)
        a, b = self._fix_order(other)
        b0 = b.constant_term()
        if b0 == 0:
            raise DomainError(
                "The 0-th order TaylorN coefficient of the divisor must be non-zero")
        c0 = a.constant_term() / b0
        out = TaylorN(0 * c0, a.order, a.tables)
        run_kernel(_series_div, out.coeffs, a.coeffs, b.coeffs, 0, b0)
        return out

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other / self

    def __eq__(self, other):
        if isinstance(other, TaylorN):
            return self.order == other.order and all(
                x == y for x, y in zip(self.coeffs, other.coeffs))
        if isinstance(other, AbstractSeries):
            return NotImplemented
        return self.constant_term() == other and all(p.iszero() for p in self.coeffs[1:])

    def __repr__(self) -> str:
        return f"TaylorN({list(self.coeffs)!r}, order={self.order})"
