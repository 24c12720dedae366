"""Tests for the option contract model."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from optionstrat.errors import (
    DivisionByZeroError,
    InvalidDomainError,
    InvalidPriceError,
    InvalidRateError,
    InvalidTimeError,
    InvalidVolatilityError,
)
from optionstrat.model import (
    ExerciseStyle,
    ExpirationDate,
    Greeks,
    OptionStyle,
    Positive,
    Side,
    pos,
    to_decimal,
)


class TestPositive:
    """Test the non-negative decimal type."""

    def test_accepts_zero_and_positive(self) -> None:
        """Test construction from various number types."""
        assert Positive(0).is_zero()
        assert Positive("1.5").value == Decimal("1.5")
        assert Positive(0.1).value == Decimal("0.1")
        assert pos(3) == 3

    def test_rejects_negative(self) -> None:
        """Test negative values are rejected, not clamped."""
        with pytest.raises(InvalidDomainError):
            Positive(-0.01)

    def test_rejects_non_finite(self) -> None:
        """Test NaN and infinity are rejected."""
        with pytest.raises(InvalidDomainError):
            Positive(float("nan"))
        with pytest.raises(InvalidDomainError):
            Positive(float("inf"))

    def test_subtraction_below_zero_raises(self) -> None:
        """Test subtraction that would go negative raises."""
        assert Positive(5) - 3 == 2
        with pytest.raises(InvalidDomainError):
            Positive(1) - Positive(2)

    def test_division_by_zero(self) -> None:
        """Test division by zero raises DivisionByZeroError."""
        assert Positive(10) / 4 == Decimal("2.5")
        with pytest.raises(DivisionByZeroError):
            Positive(1) / 0

    def test_ordering_and_hash(self) -> None:
        """Test comparisons and use as dict key."""
        assert Positive(1) < Positive(2)
        assert Positive(2) >= 2
        assert {Positive(1): "a"}[Positive("1.0")] == "a"

    def test_to_decimal_rejects_bool(self) -> None:
        """Test booleans are not treated as numbers."""
        with pytest.raises(InvalidDomainError):
            to_decimal(True)


class TestExpirationDate:
    """Test expiration resolution."""

    def test_days_to_years(self) -> None:
        """Test day count converts with 365 days per year."""
        assert ExpirationDate.from_days(365).get_years() == 1
        assert ExpirationDate.from_days(0).get_years() == 0

    def test_negative_days_rejected(self) -> None:
        """Test negative day counts raise InvalidTimeError."""
        with pytest.raises(InvalidTimeError):
            ExpirationDate.from_days(-1)

    def test_direct_construction_validates_days(self, option_factory) -> None:
        """Test the dataclass constructor coerces and checks the day count."""
        assert ExpirationDate(days=30).get_days() == 30
        with pytest.raises(InvalidTimeError):
            ExpirationDate(days=-5)
        with pytest.raises(InvalidTimeError):
            option_factory(expiration=ExpirationDate(days=-5))

    def test_datetime_expiration(self) -> None:
        """Test a future datetime resolves to a day count."""
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        expiration = ExpirationDate.from_datetime(now + timedelta(days=30))
        assert float(expiration.get_days(now)) == pytest.approx(30.0)

    def test_past_datetime_rejected(self) -> None:
        """Test a past datetime raises InvalidTimeError."""
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        expiration = ExpirationDate.from_datetime(now - timedelta(days=1))
        with pytest.raises(InvalidTimeError):
            expiration.get_days(now)


class TestOption:
    """Test option construction and payoff."""

    def test_coerces_fields(self, option_factory) -> None:
        """Test numeric fields become Positive / Decimal values."""
        option = option_factory(style="put", side="short")
        assert option.style is OptionStyle.PUT
        assert option.side is Side.SHORT
        assert isinstance(option.strike, Positive)
        assert option.risk_free_rate == Decimal("0.05")
        assert option.exercise is ExerciseStyle.EUROPEAN
        assert option.time_to_expiration() == pytest.approx(1.0)

    def test_negative_rate_allowed(self, option_factory) -> None:
        """Test negative interest rates are valid."""
        option = option_factory(risk_free_rate=-0.01)
        assert option.risk_free_rate == Decimal("-0.01")

    @pytest.mark.parametrize(
        ("field", "value", "error"),
        [
            ("strike", -100, InvalidPriceError),
            ("underlying_price", -1, InvalidPriceError),
            ("implied_volatility", -0.2, InvalidVolatilityError),
            ("risk_free_rate", float("nan"), InvalidRateError),
            ("expiration", -5, InvalidTimeError),
        ],
    )
    def test_invalid_fields_rejected(self, option_factory, field, value, error) -> None:
        """Test invalid contract parameters raise typed errors."""
        with pytest.raises(error):
            option_factory(**{field: value})

    def test_payoff_applies_quantity_and_side(self, option_factory) -> None:
        """Test payoff = intrinsic x quantity x side sign."""
        long_call = option_factory(quantity=2)
        short_call = option_factory(quantity=2, side=Side.SHORT)
        assert long_call.payoff(110) == 20
        assert short_call.payoff(110) == -20
        assert long_call.payoff(90) == 0

    def test_put_intrinsic_value(self, option_factory) -> None:
        """Test put intrinsic value."""
        put = option_factory(style=OptionStyle.PUT)
        assert put.intrinsic_value(80) == 20
        assert put.intrinsic_value(120) == 0

    def test_with_updates_returns_new_contract(self, option_factory) -> None:
        """Test updates build a new validated value."""
        option = option_factory()
        rolled = option.with_updates(expiration=ExpirationDate.from_days(30))
        assert rolled is not option
        assert option.time_to_expiration() == pytest.approx(1.0)
        assert rolled.time_to_expiration() == pytest.approx(30 / 365)
        with pytest.raises(InvalidVolatilityError):
            option.with_updates(implied_volatility=-1)


class TestGreeks:
    """Test the Greeks value type."""

    def test_add_and_scale(self) -> None:
        """Test Greeks sum component-wise and scale by a factor."""
        g = Greeks.from_floats(0.5, 0.02, -0.01, 0.4, 0.3, -0.2)
        total = g + g.scale(-1)
        assert total == Greeks.zero()
        assert g.scale(2).delta == Decimal("1.0")

    def test_to_dict(self) -> None:
        """Test serialization uses strings."""
        assert Greeks.zero().to_dict()["delta"] == "0"
