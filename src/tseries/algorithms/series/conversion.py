"""
tseries.algorithms.series.conversion
====================================

Conversion between truncated series and SymEngine expressions.

Used to inspect series symbolically and as an oracle in the tests.
Integer and rational SymEngine coefficients map to ``int`` and
``fractions.Fraction`` so exact series survive a round trip.
"""

import numbers
from fractions import Fraction

import mpmath as mp
import numpy as np
import symengine as se

from tseries.algorithms.polynomial.base import (encode_multiindex,
                                                get_tables)
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN


def _to_symengine_number(c) -> se.Basic:
    if isinstance(c, Fraction):
        return se.Rational(c.numerator, c.denominator)
    if isinstance(c, numbers.Integral):
        return se.Integer(int(c))
    if isinstance(c, mp.mpc):
        return se.sympify(complex(c))
    if isinstance(c, mp.mpf):
        return se.sympify(float(c))
    return se.sympify(c)


def _from_symengine_number(x: se.Basic):
    if isinstance(x, se.Integer):
        return int(x)
    if isinstance(x, se.Rational):
        return Fraction(str(x))
    ev = x.evalf()
    if isinstance(ev, (se.ComplexMPC, se.ComplexDouble)):
        return complex(ev)
    if ev.free_symbols:
        raise ValueError(f"Coefficient '{x}' is not numeric; substitute all parameters first")
    return float(ev)


def _coefficient_expr(c, inner_symbols):
    if isinstance(c, TaylorN):
        return taylorn_to_symengine(c, inner_symbols)
    if isinstance(c, Taylor1):
        if not inner_symbols:
            raise ValueError("Nested Taylor1 coefficients need a symbol for the inner series")
        return taylor1_to_symengine(c, inner_symbols[0], inner_symbols[1:])
    return _to_symengine_number(c)


def taylor1_to_symengine(series: Taylor1, symbol: se.Symbol, inner_symbols=()) -> se.Basic:
    """
    Expand a univariate series into a SymEngine polynomial in `symbol`.

    Parameters
    ----------
    series : Taylor1
        Series to convert.
    symbol : se.Symbol
        Expansion variable.
    inner_symbols : sequence of se.Symbol, optional
        Symbols for coefficients that are themselves series: the variables
        of an inner TaylorN, or the expansion variable of an inner Taylor1
        followed by those of deeper levels.
    """
    expr = se.Integer(0)
    for k in range(series.order + 1):
        c = series.coeffs[k]
        if isinstance(c, (Taylor1, TaylorN)):
            if c.iszero():
                continue
        elif c == 0:
            continue
        expr += _coefficient_expr(c, list(inner_symbols)) * symbol**k
    return se.expand(expr)


def taylorn_to_symengine(series, symbols) -> se.Basic:
    """Expand a TaylorN (or HomogeneousPolynomial) into a SymEngine polynomial."""
    if len(symbols) != series.tables.num_vars:
        raise ValueError(f"Expected {series.tables.num_vars} symbols, got {len(symbols)}")
    parts = [series] if isinstance(series, HomogeneousPolynomial) else series.coeffs
    expr = se.Integer(0)
    for part in parts:
        for k, c in part.terms():
            mon = se.Integer(1)
            for var, e in zip(symbols, k):
                if e:
                    mon *= var**int(e)
            expr += _to_symengine_number(c) * mon
    return se.expand(expr)


def _split_term(term: se.Basic, index: dict):
    """Split a monomial into (coefficient expression, exponent list)."""
    k = [0] * len(index)
    coeff = se.Integer(1)
    factors = term.args if isinstance(term, se.Mul) else (term,)
    for factor in factors:
        if isinstance(factor, se.Pow) and factor.args[0] in index:
            base, exp_obj = factor.args
            if not isinstance(exp_obj, se.Integer) or int(exp_obj) < 0:
                raise ValueError(f"Exponent in '{factor}' is not a non-negative integer")
            k[index[base]] += int(exp_obj)
        elif isinstance(factor, se.Symbol) and factor in index:
            k[index[factor]] += 1
        else:
            coeff *= factor
    return coeff, k


def _terms(expr: se.Basic):
    expanded = se.expand(expr)
    if isinstance(expanded, se.Add):
        return expanded.args
    if expanded == 0:
        return ()
    return (expanded,)


def _coeff_dtype(values):
    if any(isinstance(v, Fraction) for v in values):
        return object
    if any(isinstance(v, complex) for v in values):
        return np.complex128
    if all(isinstance(v, int) for v in values):
        return np.int64
    return np.float64


def symengine_to_taylorn(expr: se.Basic, symbols, order: int = None) -> TaylorN:
    """
    Build a TaylorN from a polynomial SymEngine expression.

    Parameters
    ----------
    expr : se.Basic
        Polynomial in `symbols` with numeric coefficients.
    symbols : sequence of se.Symbol
        One symbol per variable of the installed index tables.
    order : int, optional
        Truncation order; terms of higher total degree are dropped.
        Defaults to the maximum order of the tables.

    Returns
    -------
    TaylorN
        Integer coefficients give an ``int64`` series, rationals an exact
        ``object`` series.
    """
    tables = get_tables()
    if len(symbols) != tables.num_vars:
        raise ValueError(f"Expected {tables.num_vars} symbols, got {len(symbols)}")
    order = tables.order if order is None else order
    index = {s: i for i, s in enumerate(symbols)}

    entries = []
    for term in _terms(expr):
        coeff, k = _split_term(term, index)
        degree = sum(k)
        if degree > order:
            continue
        entries.append((degree, k, _from_symengine_number(coeff)))

    dtype = _coeff_dtype([v for _, _, v in entries])
    parts = [HomogeneousPolynomial.zero(d, dtype, tables) for d in range(order + 1)]
    for degree, k, value in entries:
        pos = encode_multiindex(k, degree, tables.encode)
        parts[degree].coeffs[pos] += value
    return TaylorN(parts, order, tables)


def symengine_to_taylor1(expr: se.Basic, symbol: se.Symbol, order: int) -> Taylor1:
    """Build a Taylor1 of the given order from a polynomial in `symbol`."""
    values = [0] * (order + 1)
    for term in _terms(expr):
        coeff, k = _split_term(term, {symbol: 0})
        if k[0] > order:
            continue
        values[k[0]] += _from_symengine_number(coeff)
    dtype = _coeff_dtype(values)
    if dtype is object:
        c = np.empty(order + 1, dtype=object)
        for i, v in enumerate(values):
            c[i] = Fraction(v)
        return Taylor1(c, order)
    return Taylor1(np.array(values, dtype=dtype), order)
