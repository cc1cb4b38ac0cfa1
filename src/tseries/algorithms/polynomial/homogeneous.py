import numbers

import numpy as np

from tseries.algorithms.polynomial.algebra import (_poly_accsqr, _poly_add,
                                                   _poly_div, _poly_mul_acc,
                                                   _poly_scale, _poly_sub,
                                                   division_dtype,
                                                   result_dtype, run_kernel)
from tseries.algorithms.polynomial.base import (IndexTables,
                                                decode_multiindex,
                                                encode_multiindex, get_tables,
                                                make_poly)
from tseries.algorithms.power.adapter import clean_coeffs
from tseries.algorithms.series.base import AbstractSeries
from tseries.utils.config import TOL
from tseries.utils.exceptions import TableError


def _is_scalar(x) -> bool:
    return not isinstance(x, (AbstractSeries, np.ndarray))


class HomogeneousPolynomial(AbstractSeries):
    """
    Homogeneous polynomial of fixed degree in the variables of the
    installed index tables.

    Parameters
    ----------
    coeffs : array_like or scalar
        One coefficient per monomial, in the order of ``tables.clmo[order]``.
        A scalar is accepted for degree 0.
    order : int
        Degree of every monomial.
    tables : IndexTables, optional
        Defaults to the tables installed by
        :func:`~tseries.algorithms.polynomial.base.set_variables`.
    """

    __slots__ = ("coeffs", "order", "tables")

    def __init__(self, coeffs, order: int = 0, tables: IndexTables = None):
        if tables is None:
            tables = get_tables()
        if order < 0 or order > tables.order:
            raise TableError(f"Degree {order} exceeds the maximum order {tables.order} of the index tables")
        size = tables.size(order)
        if np.isscalar(coeffs) or not hasattr(coeffs, "__len__"):
            arr = np.zeros(size, dtype=result_dtype(coeffs))
            arr[0] = coeffs
        else:
            arr = np.array(coeffs)
            if arr.dtype != object and arr.dtype.kind not in "biufc":
                arr = arr.astype(object)
        if arr.shape != (size,):
            raise ValueError(f"Degree {order} polynomial needs {size} coefficients, got {arr.shape}")
        self.coeffs = arr
        self.order = order
        self.tables = tables

    # -- factories ---------------------------------------------------------

    @classmethod
    def zero(cls, order: int, dtype=np.float64, tables: IndexTables = None) -> "HomogeneousPolynomial":
        tables = tables if tables is not None else get_tables()
        return cls(make_poly(order, tables, dtype), order, tables)

    @classmethod
    def monomial(cls, exponents, coeff=1.0, tables: IndexTables = None) -> "HomogeneousPolynomial":
        """Single monomial ``coeff * x_0**k_0 * ... * x_{n-1}**k_{n-1}``."""
        tables = tables if tables is not None else get_tables()
        if len(exponents) != tables.num_vars:
            raise ValueError(f"Expected {tables.num_vars} exponents, got {len(exponents)}")
        degree = int(sum(exponents))
        p = cls.zero(degree, result_dtype(coeff), tables)
        pos = encode_multiindex(exponents, degree, tables.encode)
        if pos == -1:
            raise ValueError(f"Invalid multi-index {tuple(exponents)}")
        p.coeffs[pos] = coeff
        return p

    @classmethod
    def variable(cls, idx: int, tables: IndexTables = None) -> "HomogeneousPolynomial":
        tables = tables if tables is not None else get_tables()
        k = [0] * tables.num_vars
        k[idx] = 1
        return cls.monomial(k, 1.0, tables)

    def zero_like(self) -> "HomogeneousPolynomial":
        return HomogeneousPolynomial.zero(self.order, self.coeffs.dtype, self.tables)

    def one(self) -> "HomogeneousPolynomial":
        """Degree-0 unit polynomial."""
        return HomogeneousPolynomial(np.ones(1, dtype=self.coeffs.dtype), 0, self.tables)

    def copy(self) -> "HomogeneousPolynomial":
        return HomogeneousPolynomial(self.coeffs.copy(), self.order, self.tables)

    # -- access ------------------------------------------------------------

    @property
    def dtype(self):
        return self.coeffs.dtype

    def __len__(self) -> int:
        return self.coeffs.shape[0]

    def __getitem__(self, pos):
        return self.coeffs[pos]

    def __setitem__(self, pos, value):
        self.coeffs[pos] = value

    def coefficient(self, exponents):
        """Coefficient of the monomial with the given exponents."""
        pos = encode_multiindex(exponents, self.order, self.tables.encode)
        if pos == -1:
            raise ValueError(f"Invalid multi-index {tuple(exponents)} for degree {self.order}")
        return self.coeffs[pos]

    def terms(self):
        """Iterate over ``(exponents, coeff)`` of the nonzero monomials."""
        for pos in range(len(self)):
            c = self.coeffs[pos]
            if c != 0:
                yield tuple(decode_multiindex(pos, self.order, self.tables.num_vars, self.tables.clmo)), c

    def iszero(self) -> bool:
        return all(c == 0 for c in self.coeffs)

    def clean(self, tol: float = TOL) -> "HomogeneousPolynomial":
        """Copy with coefficients of magnitude below `tol` set to zero."""
        return HomogeneousPolynomial(clean_coeffs(self.coeffs, tol), self.order, self.tables)

    # -- in-place primitives ----------------------------------------------

    def _check_same(self, other: "HomogeneousPolynomial") -> None:
        if other.order != self.order:
            raise ValueError(f"Degree mismatch: {self.order} != {other.order}")

    def add_(self, other: "HomogeneousPolynomial") -> "HomogeneousPolynomial":
        """self += other"""
        self._check_same(other)
        run_kernel(_poly_add, self.coeffs, other.coeffs, self.coeffs)
        return self

    def sub_(self, other: "HomogeneousPolynomial") -> "HomogeneousPolynomial":
        """self -= other"""
        self._check_same(other)
        run_kernel(_poly_sub, self.coeffs, other.coeffs, self.coeffs)
        return self

    def scale_(self, alpha) -> "HomogeneousPolynomial":
        """self *= alpha"""
        run_kernel(_poly_scale, self.coeffs, alpha, self.coeffs)
        return self

    def div_(self, alpha) -> "HomogeneousPolynomial":
        """self /= alpha"""
        run_kernel(_poly_div, self.coeffs, alpha, self.coeffs)
        return self

    def mul_acc_(self, alpha, p: "HomogeneousPolynomial", q: "HomogeneousPolynomial") -> "HomogeneousPolynomial":
        """self += alpha * p * q (no allocation). Requires deg(self) == deg(p) + deg(q)."""
        if p.order + q.order != self.order:
            raise ValueError(f"Degree mismatch: {p.order} + {q.order} != {self.order}")
        run_kernel(_poly_mul_acc, self.coeffs, alpha, p.coeffs, p.order, q.coeffs, q.order,
                   self.tables.clmo, self.tables.encode)
        return self

    def accsqr_(self, a: "HomogeneousPolynomial") -> "HomogeneousPolynomial":
        """self += a * a (no allocation). Requires deg(self) == 2 * deg(a)."""
        if 2 * a.order != self.order:
            raise ValueError(f"Degree mismatch: 2 * {a.order} != {self.order}")
        run_kernel(_poly_accsqr, self.coeffs, a.coeffs, a.order, self.tables.clmo, self.tables.encode)
        return self

    # -- arithmetic --------------------------------------------------------

    def _new(self, order: int, dtype) -> "HomogeneousPolynomial":
        return HomogeneousPolynomial.zero(order, dtype, self.tables)

    def _as_poly(self, other):
        if isinstance(other, HomogeneousPolynomial):
            return other
        if _is_scalar(other) and other == 0:
            return HomogeneousPolynomial.zero(self.order, result_dtype(other), self.tables)
        if _is_scalar(other) and self.order == 0:
            return HomogeneousPolynomial(other, 0, self.tables)
        return NotImplemented

    def __add__(self, other):
        other = self._as_poly(other)
        if other is NotImplemented:
            return NotImplemented
        self._check_same(other)
        out = self._new(self.order, result_dtype(self.coeffs, other.coeffs))
        run_kernel(_poly_add, self.coeffs, other.coeffs, out.coeffs)
        return out

    __radd__ = __add__

    def __sub__(self, other):
        other = self._as_poly(other)
        if other is NotImplemented:
            return NotImplemented
        self._check_same(other)
        out = self._new(self.order, result_dtype(self.coeffs, other.coeffs))
        run_kernel(_poly_sub, self.coeffs, other.coeffs, out.coeffs)
        return out

    def __rsub__(self, other):
        other = self._as_poly(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __neg__(self):
        out = self._new(self.order, self.coeffs.dtype)
        run_kernel(_poly_scale, self.coeffs, -1, out.coeffs)
        return out

    def __pos__(self):
        return self.copy()

    def __mul__(self, other):
        if isinstance(other, HomogeneousPolynomial):
            order = self.order + other.order
            dtype = result_dtype(self.coeffs, other.coeffs)
            if order > self.tables.order:
                # Product degree not representable; truncated to zero.
                return self._new(0, dtype)
            out = self._new(order, dtype)
            if other is self:
                return out.accsqr_(self)
            return out.mul_acc_(1, self, other)
        if not _is_scalar(other):
            return NotImplemented
        out = self._new(self.order, result_dtype(self.coeffs, other))
        run_kernel(_poly_scale, self.coeffs, other, out.coeffs)
        return out

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, HomogeneousPolynomial):
            if other.order != 0:
                raise ValueError("Division only by degree-0 homogeneous polynomials")
            other = other.coeffs[0]
        if not _is_scalar(other):
            return NotImplemented
        out = self._new(self.order, division_dtype(self.coeffs, other))
        run_kernel(_poly_div, self.coeffs, other, out.coeffs)
        return out

    def __eq__(self, other):
        if isinstance(other, HomogeneousPolynomial):
            return self.order == other.order and all(x == y for x, y in zip(self.coeffs, other.coeffs))
        if isinstance(other, numbers.Number) or np.isscalar(other):
            if other == 0:
                return self.iszero()
            return self.order == 0 and self.coeffs[0] == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"HomogeneousPolynomial({self.coeffs!r}, order={self.order})"
