from fractions import Fraction
from math import comb

import numpy as np
import pytest

from tseries.algorithms.polynomial.base import set_variables
from tseries.algorithms.power.square import square
from tseries.algorithms.power.squaring import power_by_squaring, power_inplace
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN

NUM_VARS = 2
MAX_DEGREE = 6


@pytest.fixture(autouse=True, scope="module")
def tables():
    return set_variables(NUM_VARS, MAX_DEGREE)


def _naive_power(a, p):
    result = a.one()
    for _ in range(p):
        result = result * a
    return result


@pytest.mark.parametrize("p", range(0, 12))
def test_binomial_coefficients(p):
    """(1 + t)**p has binomial coefficients, exactly, in integer arithmetic"""
    order = 8
    a = Taylor1([1, 1] + [0] * (order - 1))
    r = power_by_squaring(a, p)
    assert r.coeffs.dtype.kind == "i"
    np.testing.assert_array_equal(r.coeffs, [comb(p, k) for k in range(order + 1)])


@pytest.mark.parametrize("p", [4, 5, 6, 7, 8, 13])
def test_matches_repeated_multiplication(p):
    rng = np.random.default_rng(p)
    a = Taylor1(rng.uniform(-1.0, 1.0, 7))
    np.testing.assert_allclose(power_by_squaring(a, p).coeffs, _naive_power(a, p).coeffs,
                               rtol=1e-11, atol=1e-12)


def test_power_addition_property():
    """power(a, p) * power(a, q) == power(a, p + q) at the order of a"""
    a = Taylor1([0.5, -1.0, 2.0, 0.25, 0.0, 1.0])
    for p, q in [(0, 3), (2, 5), (4, 4), (1, 6)]:
        lhs = power_by_squaring(a, p) * power_by_squaring(a, q)
        rhs = power_by_squaring(a, p + q)
        np.testing.assert_allclose(lhs.coeffs, rhs.coeffs, rtol=1e-11, atol=1e-11)


def test_cube_is_product_with_square():
    a = Taylor1([0.3, -1.2, 2.5, 0.75, -0.4, 1.1])
    np.testing.assert_allclose(power_by_squaring(a, 3).coeffs, (a * square(a)).coeffs,
                               rtol=1e-14, atol=1e-14)


def test_power_zero_is_identity():
    for order in (0, 1, 5):
        a = Taylor1(np.arange(1.0, order + 2.0))
        r = power_by_squaring(a, 0)
        assert r == 1.0
        assert r.order == order


def test_exact_rational_powers():
    a = Taylor1([Fraction(1, 2), Fraction(1, 3), 0, 0, 0])
    r = power_by_squaring(a, 5)
    assert r.coeffs[0] == Fraction(1, 32)
    assert r.coeffs[1] == 5 * Fraction(1, 16) * Fraction(1, 3)
    assert all(isinstance(c, (int, Fraction)) for c in r.coeffs)


def test_negative_exponent_asserts():
    with pytest.raises(AssertionError):
        power_by_squaring(Taylor1([1.0, 1.0]), -1)


def test_taylorn_power():
    x, y = TaylorN.variable(0), TaylorN.variable(1)
    a = 1 + x + y
    for p in (3, 4, 5, 6):
        r = power_by_squaring(a, p)
        ref = _naive_power(a, p)
        for d in range(MAX_DEGREE + 1):
            np.testing.assert_allclose(r.coeffs[d].coeffs, ref.coeffs[d].coeffs, rtol=1e-12)
    r5 = power_by_squaring(a, 5)
    assert r5.coefficient([2, 3]) == pytest.approx(10.0)


def test_power_inplace_taylor1():
    a = Taylor1([1.0, 0.5, -0.25, 0.0, 0.1])
    result = a.zero_like()
    scratch = a.zero_like()
    before = a.coeffs.copy()
    storage = result.coeffs
    power_inplace(result, a, scratch, 6)
    assert result.coeffs is storage
    np.testing.assert_array_equal(a.coeffs, before)
    np.testing.assert_allclose(result.coeffs, _naive_power(a, 6).coeffs, rtol=1e-12)


def test_power_inplace_zero_exponent():
    a = Taylor1([3.0, 1.0, 1.0])
    result = Taylor1([9.0, 9.0, 9.0])
    power_inplace(result, a, a.zero_like(), 0)
    assert result == 1.0


def test_power_inplace_taylorn():
    x, y = TaylorN.variable(0), TaylorN.variable(1)
    a = 2 + x - y
    result = a.zero_like()
    scratch = a.zero_like()
    power_inplace(result, a, scratch, 7)
    ref = _naive_power(a, 7)
    for d in range(MAX_DEGREE + 1):
        np.testing.assert_allclose(result.coeffs[d].coeffs, ref.coeffs[d].coeffs, rtol=1e-12)


def test_power_inplace_buffer_contract():
    a = Taylor1([1.0, 1.0, 0.0])
    with pytest.raises(ValueError):
        power_inplace(a, a, a.zero_like(), 4)
    with pytest.raises(ValueError):
        power_inplace(Taylor1([0.0, 0.0]), a, a.zero_like(), 4)
    with pytest.raises(ValueError):
        power_inplace(Taylor1([0, 0, 0]), a, a.zero_like(), 4)
    with pytest.raises(AssertionError):
        power_inplace(a.zero_like(), a, a.zero_like(), -2)


def test_power_inplace_rejects_nested():
    inner = Taylor1([1.0, 1.0])
    a = Taylor1([inner, inner.copy()])
    with pytest.raises(TypeError):
        power_inplace(a.zero_like(), a, a.zero_like(), 4)


def test_nested_power_uses_allocating_path():
    """Nested series fall back to the allocating engine"""
    inner = Taylor1([1.0, 1.0, 0.0])
    a = Taylor1([inner, Taylor1([1.0, 0.0, 0.0]), Taylor1([0.0, 0.0, 0.0])])
    r = power_by_squaring(a, 4)
    ref = _naive_power(a, 4)
    for k in range(3):
        np.testing.assert_allclose(r.coeffs[k].coeffs, ref.coeffs[k].coeffs, rtol=1e-12)
