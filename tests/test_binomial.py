"""Tests for binomial lattice pricing."""

from __future__ import annotations

import pytest

from optionstrat.errors import InvalidDomainError
from optionstrat.model import ExerciseStyle, OptionStyle
from optionstrat.pricing.binomial import (
    BinomialPricingParams,
    generate_binomial_tree,
    price_binomial,
)
from optionstrat.pricing.black_scholes import price_black_scholes


class TestBinomialConvergence:
    """Test convergence to Black-Scholes."""

    @pytest.mark.parametrize("style", [OptionStyle.CALL, OptionStyle.PUT])
    def test_european_converges_to_black_scholes(self, option_factory, style) -> None:
        """Test n=500 lattice is within 1e-2 of the closed form."""
        option = option_factory(style=style)
        lattice = float(price_binomial(option, steps=500))
        closed_form = float(price_black_scholes(option))
        assert lattice == pytest.approx(closed_form, abs=1e-2)

    def test_error_shrinks_with_steps(self, option_factory) -> None:
        """Test a finer lattice is closer than a coarse one."""
        option = option_factory(strike=105, dividend_yield=0.02)
        reference = float(price_black_scholes(option))
        coarse = abs(float(price_binomial(option, steps=10)) - reference)
        fine = abs(float(price_binomial(option, steps=1000)) - reference)
        assert fine < coarse


class TestEarlyExercise:
    """Test American exercise on the lattice."""

    def test_american_put_at_least_european(self, option_factory) -> None:
        """Test early exercise premium is non-negative (and positive for r > 0)."""
        european = option_factory(style=OptionStyle.PUT, strike=110)
        american = european.with_updates(exercise=ExerciseStyle.AMERICAN)
        eu = price_binomial(european, steps=300)
        am = price_binomial(american, steps=300)
        assert am > eu

    def test_american_call_without_dividends_equals_european(self, option_factory) -> None:
        """Test early exercise of a call on a non-dividend underlying is never optimal."""
        european = option_factory()
        american = european.with_updates(exercise=ExerciseStyle.AMERICAN)
        assert float(price_binomial(american, steps=200)) == pytest.approx(
            float(price_binomial(european, steps=200)), abs=1e-9
        )

    def test_deep_itm_american_put_worth_intrinsic(self, option_factory) -> None:
        """Test a deep ITM American put is at least its intrinsic value."""
        option = option_factory(
            style=OptionStyle.PUT,
            strike=150,
            exercise=ExerciseStyle.AMERICAN,
        )
        assert price_binomial(option, steps=100) >= 50


class TestBinomialEdgeCases:
    """Test lattice parameter validation and boundaries."""

    def test_zero_steps_rejected(self, atm_call) -> None:
        """Test steps < 1 raises InvalidDomainError."""
        with pytest.raises(InvalidDomainError):
            price_binomial(atm_call, steps=0)

    def test_zero_volatility_rejected(self, option_factory) -> None:
        """Test sigma == 0 makes u == d and is rejected."""
        with pytest.raises(InvalidDomainError):
            price_binomial(option_factory(implied_volatility=0), steps=10)

    def test_probability_outside_unit_interval(self, option_factory) -> None:
        """Test a drift larger than the volatility step pushes p above 1."""
        option = option_factory(risk_free_rate=0.5, implied_volatility=0.01)
        with pytest.raises(InvalidDomainError) as exc_info:
            price_binomial(option, steps=1)
        assert "probability" in exc_info.value.reason

    def test_expired_option_is_intrinsic(self, option_factory) -> None:
        """Test T == 0 returns intrinsic value."""
        option = option_factory(expiration=0, underlying_price=120)
        assert price_binomial(option, steps=50) == 20

    def test_params(self, atm_call) -> None:
        """Test derived lattice parameters."""
        params = BinomialPricingParams.from_option(atm_call, steps=4)
        assert params.dt == pytest.approx(0.25)
        assert params.up * params.down == pytest.approx(1.0)
        assert 0.0 <= params.probability <= 1.0


class TestBinomialTree:
    """Test full lattice generation."""

    def test_tree_shape_and_root(self, atm_call) -> None:
        """Test level sizes and that the root matches the rolling pricer."""
        asset_tree, option_tree = generate_binomial_tree(atm_call, steps=3)
        assert [len(level) for level in asset_tree] == [1, 2, 3, 4]
        assert [len(level) for level in option_tree] == [1, 2, 3, 4]
        assert asset_tree[0][0] == pytest.approx(100.0)
        assert option_tree[0][0] == pytest.approx(float(price_binomial(atm_call, steps=3)))

    def test_terminal_values_are_payoffs(self, atm_call) -> None:
        """Test the last level holds the exercise payoffs."""
        asset_tree, option_tree = generate_binomial_tree(atm_call, steps=2)
        for spot, value in zip(asset_tree[-1], option_tree[-1]):
            assert value == pytest.approx(max(spot - 100.0, 0.0))
