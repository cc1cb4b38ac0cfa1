import numpy as np
import pytest
import sympy as sp

from tseries.algorithms.polynomial.base import set_variables
from tseries.algorithms.power.real import real_power
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.exceptions import DomainError

NUM_VARS = 2
MAX_DEGREE = 5

t = sp.Symbol('t')


@pytest.fixture(autouse=True, scope="module")
def tables():
    return set_variables(NUM_VARS, MAX_DEGREE)


def _sympy_coeffs(expr, order):
    """Taylor coefficients of `expr` around t = 0 up to `order`."""
    ser = sp.series(expr, t, 0, order + 1).removeO()
    return [float(ser.coeff(t, k)) for k in range(order + 1)]


@pytest.mark.parametrize("r", [1.5, -0.5, -1.0, 1 / 3, 2.75, -2.0])
def test_real_power_matches_sympy(r):
    coeffs = [2.0, 1.0, -0.5, 0.25, 0.0, 0.0]
    order = len(coeffs) - 1
    a = Taylor1(coeffs)
    poly = sum(sp.nsimplify(c) * t**k for k, c in enumerate(coeffs))
    expected = _sympy_coeffs(poly ** sp.nsimplify(r), order)
    np.testing.assert_allclose(real_power(a, r).coeffs, expected, rtol=1e-12, atol=1e-12)


def test_leading_zeros_integer_scaled_index():
    """(t**2 (1 + t))**1.5 = t**3 (1 + t)**1.5"""
    a = Taylor1([0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.0])
    r = real_power(a, 1.5)
    expected = [0.0, 0.0, 0.0] + _sympy_coeffs((1 + t) ** sp.Rational(3, 2), 3)
    np.testing.assert_allclose(r.coeffs, expected, atol=1e-14)
    assert r.order == 6


def test_leading_index_beyond_order_gives_zero():
    a = Taylor1([0.0, 0.0, 1.0, 0.0])
    r = real_power(a, 2.5)
    assert r.iszero()
    assert r.order == 3


def test_non_integer_scaled_index_raises():
    with pytest.raises(DomainError, match="non-integer exponent"):
        real_power(Taylor1([0.0, 1.0, 0.0]), 1.5)


def test_negative_power_with_vanishing_constant_raises():
    with pytest.raises(DomainError):
        real_power(Taylor1([0.0, 1.0, 0.0]), -1.0)


def test_negative_base_fractional_power_raises():
    with pytest.raises(DomainError):
        real_power(Taylor1([-1.0, 1.0, 0.0]), 1.5)


def test_zero_series():
    r = real_power(Taylor1([0.0, 0.0, 0.0]), 1.5)
    assert r.iszero()


def test_integer_exponent_degree_cap():
    """Positive integer exponents stop at r * findlast"""
    a = Taylor1([1.0, 1.0, 0.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(real_power(a, 3.0).coeffs, [1.0, 3.0, 3.0, 1.0, 0.0, 0.0])
    b = Taylor1([0.1, 0.3, 0.7] + [0.0] * 8)
    r = real_power(b, 3.0)
    assert np.all(r.coeffs[7:] == 0.0)
    np.testing.assert_allclose(r.coeffs[:7], (b * b * b).coeffs[:7], rtol=1e-12, atol=1e-15)


def test_complex_coefficients():
    a = Taylor1([1.0 + 1.0j, 1.0, 0.0, 0.0])
    r = real_power(a, 0.25)
    b = real_power(r, 4.0)
    np.testing.assert_allclose(b.coeffs, a.coeffs, atol=1e-12)


def test_taylorn_real_power():
    x, y = TaylorN.variable(0), TaylorN.variable(1)
    a = 1 + x + y
    r = real_power(a, -1.0)
    # 1 / (1 + u) with u = x + y
    assert r.coefficient([1, 0]) == pytest.approx(-1.0)
    assert r.coefficient([1, 1]) == pytest.approx(2.0)
    assert r.coefficient([2, 1]) == pytest.approx(-3.0)
    s = real_power(a, 1.5)
    assert s.coefficient([2, 0]) == pytest.approx(1.5 * 0.5 / 2)


def test_taylorn_zero_constant_raises():
    x = TaylorN.variable(0)
    with pytest.raises(DomainError):
        real_power(x, 1.5)
    with pytest.raises(DomainError):
        real_power(x, -1.0)
    assert real_power(x, 3.0).coefficient([3, 0]) == 1.0
