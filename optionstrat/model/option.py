"""Option contract model.

An :class:`Option` is an immutable description of a single option leg.
Numeric fields are validated at construction so that no pricer ever runs on
an invalid contract. Changing a contract (rolling the expiration, resizing
the position) means building a new value with :meth:`Option.with_updates`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Mapping

from optionstrat.errors import (
    InvalidDomainError,
    InvalidPriceError,
    InvalidRateError,
    InvalidTimeError,
    InvalidVolatilityError,
)
from optionstrat.model.positive import Number, Positive, to_decimal
from optionstrat.model.types import ExerciseStyle, ExpirationDate, OptionStyle, Side


def _positive_or(error: type, value: Number, name: str) -> Positive:
    try:
        return value if isinstance(value, Positive) else Positive(value)
    except InvalidDomainError as e:
        raise error(value, f"{name} must be a non-negative finite number") from e


@dataclass(frozen=True)
class Option:
    """Single option leg.

    Attributes:
        style: Call or put
        side: Long (bought) or short (sold)
        underlying_symbol: Ticker of the underlying
        strike: Strike price
        expiration: Day count or expiration datetime (a bare number is days)
        underlying_price: Current underlying price
        implied_volatility: Annualized volatility (0.20 = 20%)
        risk_free_rate: Annualized continuously compounded rate (may be negative)
        dividend_yield: Continuous dividend yield
        quantity: Number of contracts
        exercise: European or American exercise
        exotic_params: Free-form parameters for exotic payoffs
    """

    style: OptionStyle
    side: Side
    underlying_symbol: str
    strike: Positive
    expiration: ExpirationDate
    underlying_price: Positive
    implied_volatility: Positive
    risk_free_rate: Decimal
    dividend_yield: Positive = Positive.ZERO
    quantity: Positive = Positive.ONE
    exercise: ExerciseStyle = ExerciseStyle.EUROPEAN
    exotic_params: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        """Coerce and validate contract parameters."""
        set_ = object.__setattr__
        set_(self, "style", OptionStyle(self.style))
        set_(self, "side", Side(self.side))
        set_(self, "exercise", ExerciseStyle(self.exercise))
        set_(self, "strike", _positive_or(InvalidPriceError, self.strike, "Strike"))
        set_(
            self,
            "underlying_price",
            _positive_or(InvalidPriceError, self.underlying_price, "Underlying price"),
        )
        set_(
            self,
            "implied_volatility",
            _positive_or(InvalidVolatilityError, self.implied_volatility, "Volatility"),
        )
        set_(
            self,
            "dividend_yield",
            _positive_or(InvalidVolatilityError, self.dividend_yield, "Dividend yield"),
        )
        set_(self, "quantity", _positive_or(InvalidPriceError, self.quantity, "Quantity"))

        try:
            rate = to_decimal(self.risk_free_rate)
        except InvalidDomainError as e:
            raise InvalidRateError(self.risk_free_rate, "rate must be a finite number") from e
        if not rate.is_finite():
            raise InvalidRateError(self.risk_free_rate, "rate must be a finite number")
        set_(self, "risk_free_rate", rate)

        expiration = self.expiration
        if not isinstance(expiration, ExpirationDate):
            expiration = ExpirationDate.from_days(expiration)
        set_(self, "expiration", expiration)
        # Resolve once so past datetimes fail at construction
        expiration.get_days()

    # ------------------------------------------------------------------
    # Conveniences
    # ------------------------------------------------------------------

    @property
    def is_call(self) -> bool:
        return self.style is OptionStyle.CALL

    @property
    def is_long(self) -> bool:
        return self.side is Side.LONG

    @property
    def is_american(self) -> bool:
        return self.exercise is ExerciseStyle.AMERICAN

    def time_to_expiration(self) -> float:
        """Return the time to expiration in years."""
        years = float(self.expiration.get_years())
        if not math.isfinite(years):
            raise InvalidTimeError(years, "time to expiration must be finite")
        return years

    def with_updates(self, **changes: Any) -> Option:
        """Return a new contract with ``changes`` applied (validated again)."""
        return replace(self, **changes)

    # ------------------------------------------------------------------
    # Payoff
    # ------------------------------------------------------------------

    def intrinsic_value(self, spot: Number) -> Decimal:
        """Per-contract exercise value at ``spot``, always >= 0."""
        s = to_decimal(spot)
        k = self.strike.value
        value = s - k if self.is_call else k - s
        return max(value, Decimal(0))

    def payoff(self, spot: Number) -> Decimal:
        """Position payoff at ``spot``: intrinsic value x quantity x side sign."""
        return self.intrinsic_value(spot) * self.quantity.value * self.side.sign

    def __str__(self) -> str:
        return (
            f"{self.side.value} {self.quantity} {self.underlying_symbol} "
            f"{self.strike} {self.style.value} ({self.expiration})"
        )
