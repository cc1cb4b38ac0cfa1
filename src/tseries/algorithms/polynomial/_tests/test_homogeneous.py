from fractions import Fraction

import numpy as np
import pytest

from tseries.algorithms.polynomial.base import set_variables
from tseries.algorithms.polynomial.homogeneous import HomogeneousPolynomial
from tseries.algorithms.power.dispatch import power
from tseries.algorithms.power.square import square
from tseries.utils.exceptions import DomainError, TableError

NUM_VARS = 3
MAX_DEGREE = 6


@pytest.fixture(autouse=True, scope="module")
def tables():
    return set_variables(NUM_VARS, MAX_DEGREE)


def _x(i):
    return HomogeneousPolynomial.variable(i)


def test_variable_and_monomial():
    x1 = _x(1)
    assert x1.order == 1
    assert x1.coefficient([0, 1, 0]) == 1.0
    assert x1.coefficient([1, 0, 0]) == 0.0
    m = HomogeneousPolynomial.monomial([2, 0, 1], 3.5)
    assert m.order == 3
    assert m.coefficient([2, 0, 1]) == 3.5
    assert list(m.terms()) == [((2, 0, 1), 3.5)]


def test_degree_beyond_tables():
    with pytest.raises(TableError):
        HomogeneousPolynomial.zero(MAX_DEGREE + 1)


def test_add_sub_scale():
    p = _x(0) + 2 * _x(1)
    q = _x(0) - _x(2)
    np.testing.assert_array_equal((p + q).coeffs, [2.0, 2.0, -1.0])
    np.testing.assert_array_equal((p - q).coeffs, [0.0, 2.0, 1.0])
    np.testing.assert_array_equal((-p).coeffs, [-1.0, -2.0, 0.0])
    np.testing.assert_array_equal((p / 2).coeffs, [0.5, 1.0, 0.0])
    with pytest.raises(ValueError):
        p + HomogeneousPolynomial.monomial([2, 0, 0])


def test_multiply():
    """(x0 + x1) * (x0 - x1) = x0**2 - x1**2"""
    p = _x(0) + _x(1)
    q = _x(0) - _x(1)
    r = p * q
    assert r.order == 2
    assert r.coefficient([2, 0, 0]) == 1.0
    assert r.coefficient([0, 2, 0]) == -1.0
    assert r.coefficient([1, 1, 0]) == 0.0


def test_square_matches_product():
    """Pair accumulation over unordered monomials equals the full product"""
    rng = np.random.default_rng(0)
    for degree in range(1, 4):
        p = HomogeneousPolynomial.zero(degree)
        p.coeffs[:] = rng.standard_normal(p.coeffs.shape[0])
        p.coeffs[1] = 0.0
        sq = square(p)
        full = HomogeneousPolynomial.zero(2 * degree).mul_acc_(1, p, p.copy())
        assert sq.order == 2 * degree
        np.testing.assert_allclose(sq.coeffs, full.coeffs, rtol=1e-13, atol=1e-13)


def test_square_degree_overflow():
    """Squaring beyond the maximum order gives the degree-0 zero polynomial"""
    p = HomogeneousPolynomial.monomial([4, 0, 0])
    sq = square(p)
    assert sq.order == 0
    assert sq.iszero()
    prod = p * p.copy()
    assert prod.order == 0
    assert prod.iszero()


def test_square_exact_coefficients():
    p = HomogeneousPolynomial.monomial([1, 0, 0], Fraction(1, 2)) + HomogeneousPolynomial.monomial(
        [0, 1, 0], Fraction(1, 3))
    sq = square(p)
    assert sq.coefficient([2, 0, 0]) == Fraction(1, 4)
    assert sq.coefficient([1, 1, 0]) == Fraction(1, 3)
    assert sq.coefficient([0, 2, 0]) == Fraction(1, 9)


def test_integer_powers():
    p = _x(0) + _x(1)
    p3 = power(p, 3)
    assert p3.order == 3
    assert p3.coefficient([3, 0, 0]) == 1.0
    assert p3.coefficient([2, 1, 0]) == 3.0
    assert p3.coefficient([1, 2, 0]) == 3.0
    p0 = p ** 0
    assert p0.order == 0
    assert p0.coeffs[0] == 1.0
    assert p ** 1 == p
    assert (p ** 4).coefficient([2, 2, 0]) == 6.0


def test_power_overflow_truncates():
    p = _x(2)
    assert (p ** 7).iszero()


def test_negative_and_fractional_powers_raise():
    p = _x(0)
    with pytest.raises(DomainError):
        power(p, -1)
    with pytest.raises(DomainError):
        power(p, 0.5)
    with pytest.raises(DomainError):
        power(p, 1.5)


def test_clean():
    p = _x(0) + 1e-16 * _x(1)
    np.testing.assert_array_equal(p.clean().coeffs, [1.0, 0.0, 0.0])


@pytest.mark.parametrize("degree, p", [(4, 3), (2, 5), (3, 3)])
def test_power_overflow_gives_degree_zero(degree, p):
    """Every overflowing power truncates to the same degree-0 zero polynomial"""
    base = HomogeneousPolynomial.monomial([degree, 0, 0], 2.0)
    r = power(base, p)
    assert r.order == 0
    assert r.iszero()
