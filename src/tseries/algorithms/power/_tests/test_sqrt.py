from fractions import Fraction

import mpmath as mp
import numpy as np
import pytest

from tseries.algorithms.polynomial.base import set_variables
from tseries.algorithms.power.sqrt import sqrt
from tseries.algorithms.power.square import square
from tseries.algorithms.series.taylor1 import Taylor1
from tseries.algorithms.series.taylorn import TaylorN
from tseries.utils.exceptions import DomainError

NUM_VARS = 2
MAX_DEGREE = 6


@pytest.fixture(autouse=True, scope="module")
def tables():
    return set_variables(NUM_VARS, MAX_DEGREE)


def test_sqrt_of_square():
    """sqrt((1 + t)**2) == 1 + t"""
    a = Taylor1([1.0, 1.0, 0.0, 0.0])
    np.testing.assert_allclose(sqrt(square(a)).coeffs, a.coeffs)


def test_sqrt_one_plus_t():
    """Binomial series of (1 + t)**(1/2)"""
    a = Taylor1([1.0, 1.0, 0.0, 0.0, 0.0])
    np.testing.assert_allclose(sqrt(a).coeffs, [1.0, 1 / 2, -1 / 8, 1 / 16, -5 / 128])


def test_square_of_sqrt_roundtrip():
    rng = np.random.default_rng(3)
    coeffs = rng.standard_normal(7)
    coeffs[0] = 2.0 + abs(coeffs[0])
    a = Taylor1(coeffs)
    np.testing.assert_allclose(square(sqrt(a)).coeffs, a.coeffs, rtol=1e-12, atol=1e-12)


def test_sqrt_even_leading_order_halves_order():
    """sqrt(t**2) = t, with the order halved from 5 to 2"""
    a = Taylor1([0.0, 0.0, 1.0, 0.0, 0.0, 0.0])
    r = sqrt(a)
    assert r.order == 2
    np.testing.assert_allclose(r.coeffs, [0.0, 1.0, 0.0])


def test_sqrt_shifted_series():
    """sqrt(t**2 (1 + t)**2) = t (1 + t)"""
    a = Taylor1([0.0, 0.0, 1.0, 2.0, 1.0, 0.0, 0.0])
    r = sqrt(a)
    assert r.order == 3
    np.testing.assert_allclose(r.coeffs, [0.0, 1.0, 1.0, 0.0], atol=1e-15)


def test_sqrt_odd_leading_order_raises():
    with pytest.raises(DomainError, match="even power"):
        sqrt(Taylor1([0.0, 1.0, 0.0]))


def test_sqrt_negative_constant_raises():
    with pytest.raises(DomainError):
        sqrt(Taylor1([-1.0, 1.0]))


def test_sqrt_complex():
    a = Taylor1([-1.0 + 0j, 0.0, 0.0])
    np.testing.assert_allclose(sqrt(a).coeffs, [1j, 0.0, 0.0])


def test_sqrt_zero_series():
    z = sqrt(Taylor1([0.0, 0.0, 0.0]))
    assert z.iszero()
    assert z.order == 2


def test_sqrt_exact_perfect_square():
    a = Taylor1([Fraction(1, 4), Fraction(1, 1), 1])
    r = sqrt(a)
    assert list(r.coeffs) == [Fraction(1, 2), Fraction(1), Fraction(0)]


def test_sqrt_mpmath():
    with mp.workdps(30):
        a = Taylor1([mp.mpf(2), mp.mpf(0), mp.mpf(0)])
        r = sqrt(a)
        assert abs(r.coeffs[0] - mp.sqrt(2)) < mp.mpf(10) ** -25


def test_sqrt_taylorn():
    x, y = TaylorN.variable(0), TaylorN.variable(1)
    a = 1 + x + y
    r = sqrt(a)
    assert r.coefficient([0, 0]) == 1.0
    assert r.coefficient([1, 0]) == pytest.approx(0.5)
    assert r.coefficient([1, 1]) == pytest.approx(-0.25)
    back = square(r)
    for d in range(MAX_DEGREE + 1):
        np.testing.assert_allclose(back.coeffs[d].coeffs, a.coeffs[d].coeffs, atol=1e-13)


def test_sqrt_taylorn_zero_constant_raises():
    x = TaylorN.variable(0)
    with pytest.raises(DomainError):
        sqrt(x * x)
