import math
from fractions import Fraction

import mpmath as mp
import numpy as np
import pytest

from tseries.utils.exceptions import DomainError, TSeriesError
from tseries.utils.scalars import (is_exact, is_integer_value, scalar_exp,
                                   scalar_log, scalar_power, scalar_sqrt,
                                   with_precision)


def test_domain_error_is_value_error():
    """DomainError can be caught as ValueError and as the package base error"""
    with pytest.raises(ValueError):
        raise DomainError("x")
    with pytest.raises(TSeriesError):
        raise DomainError("x")


def test_is_exact():
    assert is_exact(3)
    assert is_exact(np.int64(3))
    assert is_exact(Fraction(1, 3))
    assert not is_exact(True)
    assert not is_exact(0.5)
    assert not is_exact(mp.mpf(1))


def test_is_integer_value():
    assert is_integer_value(2)
    assert is_integer_value(2.0)
    assert is_integer_value(Fraction(4, 2))
    assert not is_integer_value(2.5)
    assert not is_integer_value(1j)


def test_scalar_sqrt_exact():
    """Perfect squares stay exact, others fall back to floats"""
    assert scalar_sqrt(Fraction(9, 4)) == Fraction(3, 2)
    assert isinstance(scalar_sqrt(4), Fraction)
    assert math.isclose(scalar_sqrt(2), math.sqrt(2))


def test_scalar_sqrt_numpy_and_complex():
    assert scalar_sqrt(np.float64(16.0)) == 4.0
    assert scalar_sqrt(-4 + 0j) == 2j
    assert np.isclose(scalar_sqrt(np.complex128(-1)), 1j)


def test_scalar_sqrt_negative_raises():
    with pytest.raises(DomainError):
        scalar_sqrt(-1.0)
    with pytest.raises(DomainError):
        scalar_sqrt(np.float64(-2.0))
    with pytest.raises(DomainError):
        scalar_sqrt(mp.mpf(-1))


def test_scalar_sqrt_mpmath_precision():
    """mpmath square roots carry more digits than a double"""
    with with_precision(50):
        r = scalar_sqrt(mp.mpf(2))
        assert abs(r * r - 2) < mp.mpf(10) ** -45


def test_scalar_power():
    assert scalar_power(Fraction(2, 3), 2) == Fraction(4, 9)
    assert scalar_power(Fraction(2), -1) == Fraction(1, 2)
    assert math.isclose(scalar_power(4.0, 1.5), 8.0)
    assert scalar_power(-2.0, 3.0) == -8.0
    assert np.isclose(scalar_power(-1 + 0j, 0.5), 1j)


def test_scalar_power_domain():
    with pytest.raises(DomainError):
        scalar_power(-2.0, 0.5)
    with pytest.raises(DomainError):
        scalar_power(0.0, -1.0)
    with pytest.raises(DomainError):
        scalar_power(mp.mpf(-2), 0.5)


def test_scalar_exp_log():
    assert math.isclose(scalar_exp(1.0), math.e)
    assert math.isclose(scalar_log(math.e), 1.0)
    assert np.isclose(scalar_log(np.float64(1.0)), 0.0)
    with pytest.raises(DomainError):
        scalar_log(0.0)
    with pytest.raises(DomainError):
        scalar_log(-1.0)
    assert np.isclose(scalar_log(-1 + 0j), math.pi * 1j)
