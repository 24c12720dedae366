"""Input validation errors for option parameters."""

from __future__ import annotations

from typing import Any

from .base import PricingError


class InputError(PricingError):
    """Base exception for invalid financial inputs.

    Subclasses carry the offending value and a human-readable reason.
    """

    label = "input"

    def __init__(
        self,
        value: Any,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details["value"] = str(value)
        details["reason"] = reason
        super().__init__(f"Invalid {self.label} {value}: {reason}", details)
        self.value = value
        self.reason = reason


class InvalidVolatilityError(InputError):
    """Raised for negative or non-finite volatility (or dividend yield)."""

    label = "volatility"


class InvalidTimeError(InputError):
    """Raised when the expiration does not resolve to a non-negative day count."""

    label = "time value"


class InvalidPriceError(InputError):
    """Raised for negative or non-finite prices and quantities."""

    label = "price"


class InvalidRateError(InputError):
    """Raised for a non-finite risk-free rate."""

    label = "rate"


class InvalidStrikeError(InputError):
    """Raised for an invalid strike, or a strike matching no strategy leg."""

    label = "strike price"
