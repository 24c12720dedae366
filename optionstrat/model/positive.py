"""Non-negative decimal value type.

``Positive`` wraps a :class:`decimal.Decimal` constrained to be finite and
``>= 0``. It is used for strikes, prices, volatilities, day counts and
quantities. Arithmetic re-validates: a subtraction that would go negative
raises instead of clamping.
"""

from __future__ import annotations

import math
from decimal import Decimal, DecimalException, InvalidOperation
from functools import total_ordering
from typing import Union

from optionstrat.errors import DecimalArithmeticError, DivisionByZeroError, InvalidDomainError

Number = Union[int, float, str, Decimal, "Positive"]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal, going through ``str`` for floats."""
    if isinstance(value, Positive):
        return value.value
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidDomainError(value, "booleans are not numbers")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidDomainError(value, "value must be finite")
        return Decimal(repr(value))
    if isinstance(value, (int, str)):
        try:
            return Decimal(value)
        except InvalidOperation as e:
            raise InvalidDomainError(value, "not a decimal number") from e
    raise InvalidDomainError(value, f"unsupported type {type(value).__name__}")


@total_ordering
class Positive:
    """A finite decimal value that is never negative."""

    __slots__ = ("_value",)

    ZERO: Positive
    ONE: Positive

    def __init__(self, value: Number) -> None:
        dec = to_decimal(value)
        if not dec.is_finite():
            raise InvalidDomainError(value, "value must be finite")
        if dec < 0:
            raise InvalidDomainError(value, "value must be non-negative")
        # -0 normalizes to 0
        self._value = dec + 0 if dec.is_zero() else dec

    @property
    def value(self) -> Decimal:
        return self._value

    def to_decimal(self) -> Decimal:
        return self._value

    def round_to(self, places: int) -> Positive:
        return Positive(round(self._value, places))

    def is_zero(self) -> bool:
        return self._value == 0

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Number) -> Positive:
        return Positive(self._apply(lambda a, b: a + b, other))

    __radd__ = __add__

    def __sub__(self, other: Number) -> Positive:
        result = self._apply(lambda a, b: a - b, other)
        if result < 0:
            raise InvalidDomainError(result, f"{self} - {other} would be negative")
        return Positive(result)

    def __rsub__(self, other: Number) -> Positive:
        return Positive(other) - self

    def __mul__(self, other: Number) -> Positive:
        return Positive(self._apply(lambda a, b: a * b, other))

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> Positive:
        if to_decimal(other) == 0:
            raise DivisionByZeroError(details={"numerator": str(self._value)})
        return Positive(self._apply(lambda a, b: a / b, other))

    def __rtruediv__(self, other: Number) -> Positive:
        return Positive(other) / self

    def _apply(self, op, other: Number) -> Decimal:
        try:
            return op(self._value, to_decimal(other))
        except DecimalException as e:
            raise DecimalArithmeticError(e) from e

    # ------------------------------------------------------------------
    # Comparison and conversion
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Positive, Decimal, int, float)) and not isinstance(other, bool):
            try:
                return self._value == to_decimal(other)
            except InvalidDomainError:
                return False
        return NotImplemented

    def __lt__(self, other: Number) -> bool:
        return self._value < to_decimal(other)

    def __hash__(self) -> int:
        return hash(self._value)

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __repr__(self) -> str:
        return f"Positive({self._value})"

    def __str__(self) -> str:
        return str(self._value)


Positive.ZERO = Positive(0)
Positive.ONE = Positive(1)


def pos(value: Number) -> Positive:
    """Shorthand constructor for :class:`Positive`."""
    return value if isinstance(value, Positive) else Positive(value)
