from fractions import Fraction
import random

import pytest

from minpress.errors import ArithmeticOverflow, DivisionByZero
from minpress.rational import INT64_MAX, ZERO, Rational, common_denominator, gcd, lcm


def test_normalizes_sign_and_lowest_terms():
    value = Rational(2, -4)

    assert value.numerator == -1
    assert value.denominator == 2


def test_zero_is_canonical():
    value = Rational(0, -5)

    assert (value.numerator, value.denominator) == (0, 1)
    assert value.is_zero()
    assert value == ZERO


def test_add_then_subtract_and_multiply_then_divide_round_trip():
    rng = random.Random(3)
    for _ in range(200):
        a = Rational(rng.randint(-50, 50), rng.randint(1, 30))
        b = Rational(rng.randint(-50, 50), rng.randint(1, 30))

        assert (a + b) - b == a
        if not b.is_zero():
            assert (a * b) / b == a
        for produced in (a + b, a - b, a * b):
            assert produced.denominator > 0
            assert gcd(produced.numerator, produced.denominator) == 1


def test_mixed_int_operands():
    half = Rational(1, 2)

    assert half + 1 == Rational(3, 2)
    assert 1 - half == half
    assert 2 * half == 1
    assert float(Rational(1, 4)) == 0.25
    assert str(Rational(-3, 6)) == "-1/2"


def test_division_by_zero_is_reported():
    with pytest.raises(DivisionByZero):
        Rational(1) / ZERO
    with pytest.raises(ZeroDivisionError):
        Rational(1, 0)


def test_overflow_outside_64_bit_range():
    with pytest.raises(ArithmeticOverflow):
        Rational(INT64_MAX) + 1
    with pytest.raises(OverflowError):
        Rational(1 << 40) * Rational(1 << 40)
    with pytest.raises(ArithmeticOverflow):
        Rational(Fraction(1, 1 << 64))


def test_gcd_and_lcm():
    assert gcd(-12, 18) == 6
    assert gcd(0, 7) == 7
    assert lcm(4, 6) == 12
    assert lcm(-4, 6) == 12
    assert lcm(0, 5) == 0
    assert common_denominator([Rational(1, 4), Rational(5, 6), Rational(3)]) == 12
    with pytest.raises(ArithmeticOverflow):
        lcm(INT64_MAX, INT64_MAX - 1)
