"""Enumerations and the expiration type for option contracts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from optionstrat.config import get_config
from optionstrat.errors import InvalidDomainError, InvalidTimeError
from optionstrat.model.positive import Number, Positive


class OptionStyle(Enum):
    """Call or put."""

    CALL = "call"
    PUT = "put"


class Side(Enum):
    """Direction of a position."""

    LONG = "long"
    SHORT = "short"

    @property
    def sign(self) -> int:
        """Return +1 for long positions, -1 for short positions."""
        return 1 if self is Side.LONG else -1


class ExerciseStyle(Enum):
    """Exercise rights of the contract."""

    EUROPEAN = "european"
    """Exercise only at expiration."""

    AMERICAN = "american"
    """Exercise permitted at any time up to expiration."""


@dataclass(frozen=True)
class ExpirationDate:
    """Expiration expressed either as a day count or as a point in time.

    Exactly one of ``days`` and ``date`` is set. Use the ``from_days`` and
    ``from_datetime`` constructors.
    """

    days: Positive | None = None
    date: datetime | None = None

    def __post_init__(self) -> None:
        if (self.days is None) == (self.date is None):
            raise InvalidTimeError(self, "exactly one of days or date must be set")
        if self.days is not None:
            try:
                days = Positive(self.days)
            except InvalidDomainError as e:
                raise InvalidTimeError(self.days, "day count must be non-negative") from e
            object.__setattr__(self, "days", days)

    @classmethod
    def from_days(cls, days: Number) -> ExpirationDate:
        return cls(days=days)

    @classmethod
    def from_datetime(cls, date: datetime) -> ExpirationDate:
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return cls(date=date)

    def get_days(self, now: datetime | None = None) -> Positive:
        """Return the number of calendar days until expiration."""
        if self.days is not None:
            return self.days
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        remaining = Decimal(repr((self.date - now).total_seconds())) / Decimal(86_400)
        if remaining < 0:
            raise InvalidTimeError(self.date.isoformat(), "expiration date is in the past")
        return Positive(remaining)

    def get_years(self, now: datetime | None = None) -> Positive:
        """Return the time to expiration as a year fraction."""
        return self.get_days(now) / get_config().days_in_year

    def __str__(self) -> str:
        if self.days is not None:
            return f"{self.days} days"
        return self.date.isoformat()
