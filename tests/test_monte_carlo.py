"""Tests for Monte Carlo pricing."""

from __future__ import annotations

import logging
from decimal import Decimal

import numpy as np
import pytest

from optionstrat.errors import InvalidDomainError, UnsupportedOperationError
from optionstrat.model import ExerciseStyle, OptionStyle
from optionstrat.pricing.black_scholes import price_black_scholes
from optionstrat.pricing.monte_carlo import MonteCarloResult, price_monte_carlo


class TestMonteCarloAccuracy:
    """Test agreement with Black-Scholes."""

    @pytest.mark.parametrize("style", [OptionStyle.CALL, OptionStyle.PUT])
    def test_within_three_standard_errors(self, option_factory, style) -> None:
        """Test 100k-path estimate lies within 3 standard errors of the closed form."""
        option = option_factory(style=style, dividend_yield=0.01)
        result = price_monte_carlo(option, paths=100_000, steps=10, seed=42)
        reference = price_black_scholes(option)
        assert result.z_score(reference) < 3.0

    def test_standard_error_shrinks(self, atm_call) -> None:
        """Test standard error decreases roughly as 1/sqrt(paths)."""
        small = price_monte_carlo(atm_call, paths=1_000, steps=5, seed=1)
        large = price_monte_carlo(atm_call, paths=100_000, steps=5, seed=1)
        assert large.standard_error < small.standard_error
        ratio = float(small.standard_error / large.standard_error)
        assert 7.0 < ratio < 13.0

    def test_cross_check_quiet_when_consistent(self, atm_call, caplog) -> None:
        """Test the cross-check does not warn for a consistent estimate."""
        with caplog.at_level(logging.WARNING, logger="optionstrat.pricing.monte_carlo"):
            price_monte_carlo(atm_call, paths=50_000, steps=5, seed=3, cross_check=True)
        assert not caplog.records


class TestMonteCarloResult:
    """Test the result container."""

    def test_unpacking(self, atm_call) -> None:
        """Test ``price, standard_error = result``."""
        result = price_monte_carlo(atm_call, paths=2_000, steps=5, seed=0)
        price, standard_error = result
        assert price == result.price
        assert standard_error == result.standard_error
        assert result.paths == 2_000
        assert result.steps == 5

    def test_confidence_interval(self) -> None:
        """Test interval bounds at z standard errors."""
        result = MonteCarloResult(Decimal("10"), Decimal("0.5"), paths=100, steps=1)
        low, high = result.confidence_interval(z=2)
        assert low == Decimal("9.0")
        assert high == Decimal("11.0")


class TestMonteCarloRandomness:
    """Test random source injection."""

    def test_seed_reproducible(self, atm_call) -> None:
        """Test equal seeds give equal estimates."""
        a = price_monte_carlo(atm_call, paths=5_000, steps=5, seed=7)
        b = price_monte_carlo(atm_call, paths=5_000, steps=5, seed=7)
        assert a == b

    def test_injected_generator(self, atm_call, rng) -> None:
        """Test an injected generator matches the equivalent seed."""
        a = price_monte_carlo(atm_call, paths=5_000, steps=5, rng=rng)
        b = price_monte_carlo(atm_call, paths=5_000, steps=5, rng=np.random.default_rng(42))
        assert a == b

    def test_batching_does_not_change_draws(self, atm_call) -> None:
        """Test batch size only changes how paths are grouped."""
        whole = price_monte_carlo(atm_call, paths=10_000, steps=5, seed=11, batch_size=10_000)
        split = price_monte_carlo(atm_call, paths=10_000, steps=5, seed=11, batch_size=1_000)
        assert float(whole.price) == pytest.approx(float(split.price), rel=1e-12)
        assert float(whole.standard_error) == pytest.approx(
            float(split.standard_error), rel=1e-9
        )

    def test_rng_and_seed_conflict(self, atm_call, rng) -> None:
        """Test passing both rng and seed is rejected."""
        with pytest.raises(InvalidDomainError):
            price_monte_carlo(atm_call, paths=10, rng=rng, seed=1)


class TestMonteCarloEdgeCases:
    """Test validation and boundaries."""

    def test_american_unsupported(self, option_factory) -> None:
        """Test early exercise is rejected."""
        option = option_factory(exercise=ExerciseStyle.AMERICAN)
        with pytest.raises(UnsupportedOperationError):
            price_monte_carlo(option, paths=100, seed=0)

    @pytest.mark.parametrize(("paths", "steps"), [(1, 10), (100, 0)])
    def test_invalid_sizes(self, atm_call, paths: int, steps: int) -> None:
        """Test too few paths or steps raise InvalidDomainError."""
        with pytest.raises(InvalidDomainError):
            price_monte_carlo(atm_call, paths=paths, steps=steps, seed=0)

    def test_expired_option(self, option_factory) -> None:
        """Test T == 0 returns intrinsic value with zero error."""
        option = option_factory(expiration=0, underlying_price=105)
        result = price_monte_carlo(option, paths=100, steps=5, seed=0)
        assert result.price == 5
        assert result.standard_error == 0
