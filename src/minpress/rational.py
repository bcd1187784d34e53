"""Exact rational arithmetic with 64-bit range checks.

Values are backed by :class:`fractions.Fraction`, which keeps every result in
lowest terms with a positive denominator. The wrapper adds the range guard the
elimination relies on: a numerator or denominator that does not fit in a
signed 64-bit integer means the machine is far outside the expected problem
family, so it is reported as :class:`ArithmeticOverflow` instead of being
carried along silently.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Union

from .errors import ArithmeticOverflow, DivisionByZero

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def check_range(value: int, what: str = "value") -> int:
    """Return ``value`` unchanged if it fits in a signed 64-bit integer."""
    if value < INT64_MIN or value > INT64_MAX:
        raise ArithmeticOverflow(f"{what} {value} exceeds the 64-bit range")
    return value


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of the absolute values."""
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Least common multiple of the absolute values; 0 if either is 0."""
    if a == 0 or b == 0:
        return 0
    return check_range(abs(a // gcd(a, b) * b), "lcm")


class Rational:
    """Immutable normalized fraction."""

    __slots__ = ("_value",)

    def __init__(self, numerator: Union[int, Fraction] = 0, denominator: int = 1) -> None:
        if denominator == 0:
            raise DivisionByZero("zero denominator")
        value = Fraction(numerator, denominator)
        check_range(value.numerator, "numerator")
        check_range(value.denominator, "denominator")
        self._value = value

    @property
    def numerator(self) -> int:
        return self._value.numerator

    @property
    def denominator(self) -> int:
        return self._value.denominator

    def is_zero(self) -> bool:
        return self._value.numerator == 0

    def __add__(self, other: Union[Rational, int]) -> Rational:
        return Rational(self._value + _coerce(other))

    def __radd__(self, other: int) -> Rational:
        return Rational(_coerce(other) + self._value)

    def __sub__(self, other: Union[Rational, int]) -> Rational:
        return Rational(self._value - _coerce(other))

    def __rsub__(self, other: int) -> Rational:
        return Rational(_coerce(other) - self._value)

    def __mul__(self, other: Union[Rational, int]) -> Rational:
        return Rational(self._value * _coerce(other))

    def __rmul__(self, other: int) -> Rational:
        return Rational(_coerce(other) * self._value)

    def __truediv__(self, other: Union[Rational, int]) -> Rational:
        divisor = _coerce(other)
        if divisor == 0:
            raise DivisionByZero(f"cannot divide {self} by zero")
        return Rational(self._value / divisor)

    def __neg__(self) -> Rational:
        return Rational(-self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rational):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __float__(self) -> float:
        return self._value.numerator / self._value.denominator

    def __repr__(self) -> str:
        return f"Rational({self.numerator}, {self.denominator})"

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"


ZERO = Rational(0)
ONE = Rational(1)


def _coerce(value: Union[Rational, int]) -> Fraction:
    if isinstance(value, Rational):
        return value._value
    if isinstance(value, int):
        return Fraction(value)
    raise TypeError(f"unsupported operand type {type(value).__name__}")


def common_denominator(values: list[Rational]) -> int:
    """Least common multiple of the denominators of ``values``."""
    result = 1
    for value in values:
        result = lcm(result, value.denominator)
    return result
