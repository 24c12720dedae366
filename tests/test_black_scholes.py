"""Tests for Black-Scholes pricing and Greeks."""

from __future__ import annotations

from decimal import Decimal
from math import exp

import pytest

from optionstrat.config import PricingConfig
from optionstrat.errors import DivisionByZeroError, InvalidDomainError
from optionstrat.model import OptionStyle
from optionstrat.pricing.black_scholes import (
    BlackScholesInputs,
    call_delta,
    call_price,
    d1,
    gamma,
    greeks_black_scholes,
    price_black_scholes,
    put_delta,
    put_price,
    raw_vega,
    vega,
)


class TestBlackScholesFormulas:
    """Test closed-form formulas on floats."""

    def test_call_price_reference_value(self) -> None:
        """Test ATM call against the textbook value (10.4506)."""
        assert call_price(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(10.4506, abs=1e-4)

    def test_put_price_reference_value(self) -> None:
        """Test ATM put against the textbook value (5.5735)."""
        assert put_price(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(5.5735, abs=1e-4)

    @pytest.mark.parametrize("S", [80.0, 100.0, 125.0])
    @pytest.mark.parametrize("q", [0.0, 0.03])
    def test_put_call_parity(self, S: float, q: float) -> None:
        """Test C - P = S*e^(-qT) - K*e^(-rT)."""
        K, T, r, sigma = 100.0, 0.75, 0.04, 0.3
        lhs = call_price(S, K, T, r, sigma, q) - put_price(S, K, T, r, sigma, q)
        rhs = S * exp(-q * T) - K * exp(-r * T)
        assert lhs == pytest.approx(rhs, abs=1e-6)

    def test_d1_zero_volatility_divides_by_zero(self) -> None:
        """Test the general formula path rejects sigma * sqrt(T) == 0."""
        with pytest.raises(DivisionByZeroError):
            d1(100.0, 100.0, 1.0, 0.05, 0.0)
        with pytest.raises(DivisionByZeroError):
            d1(100.0, 100.0, 0.0, 0.05, 0.2)

    def test_d1_rejects_non_positive_prices(self) -> None:
        """Test ln(S/K) domain checks."""
        with pytest.raises(InvalidDomainError):
            d1(0.0, 100.0, 1.0, 0.05, 0.2)
        with pytest.raises(InvalidDomainError):
            d1(100.0, 0.0, 1.0, 0.05, 0.2)


class TestBlackScholesGreeks:
    """Test Greeks formulas."""

    def test_delta_ranges(self) -> None:
        """Test call delta in [0, 1] and put delta in [-1, 0]."""
        assert call_delta(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(0.6368, abs=1e-4)
        assert -1 < put_delta(100.0, 100.0, 1.0, 0.05, 0.2) < 0

    def test_delta_parity(self) -> None:
        """Test call delta - put delta = e^(-qT)."""
        args = (100.0, 95.0, 0.5, 0.05, 0.25, 0.02)
        assert call_delta(*args) - put_delta(*args) == pytest.approx(exp(-0.02 * 0.5))

    def test_gamma_reference_value(self) -> None:
        """Test ATM gamma (0.018762)."""
        assert gamma(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(0.018762, abs=1e-6)

    def test_vega_units(self) -> None:
        """Test vega is reported per 1% volatility."""
        assert vega(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(0.37524, abs=1e-5)
        assert raw_vega(100.0, 100.0, 1.0, 0.05, 0.2) == pytest.approx(37.524, abs=1e-3)


class TestOptionLevelPricing:
    """Test the option-level calculator and its boundary policy."""

    def test_price_matches_formula(self, atm_call, atm_put) -> None:
        """Test option pricing delegates to the formulas."""
        assert float(price_black_scholes(atm_call)) == pytest.approx(10.4506, abs=1e-4)
        assert float(price_black_scholes(atm_put)) == pytest.approx(5.5735, abs=1e-4)
        assert isinstance(price_black_scholes(atm_call), Decimal)

    def test_greeks_reference_values(self, atm_call) -> None:
        """Test per-contract Greeks in desk units."""
        g = greeks_black_scholes(atm_call)
        assert float(g.delta) == pytest.approx(0.6368, abs=1e-4)
        assert float(g.gamma) == pytest.approx(0.018762, abs=1e-6)
        assert float(g.vega) == pytest.approx(0.37524, abs=1e-5)
        assert float(g.theta) == pytest.approx(-6.4140 / 365, abs=1e-5)
        assert float(g.rho) == pytest.approx(0.53232, abs=1e-4)

    def test_theta_follows_configured_day_count(self, monkeypatch, option_factory) -> None:
        """Test theta is per configured day, consistent with the year fraction."""
        monkeypatch.setattr("optionstrat.config.DEFAULT_CONFIG", PricingConfig(days_in_year=360))
        option = option_factory(expiration=360)
        assert option.time_to_expiration() == pytest.approx(1.0)
        g = greeks_black_scholes(option)
        assert float(g.theta) == pytest.approx(-6.4140 / 360, abs=1e-5)

    def test_expired_call_is_intrinsic(self, option_factory) -> None:
        """Test T == 0 collapses to intrinsic value with a step delta."""
        itm = option_factory(expiration=0, underlying_price=110)
        otm = option_factory(expiration=0, underlying_price=90)
        assert price_black_scholes(itm) == 10
        assert price_black_scholes(otm) == 0

        g = greeks_black_scholes(itm)
        assert g.delta == 1
        assert g.gamma == g.theta == g.vega == g.rho == g.rho_d == 0
        assert greeks_black_scholes(otm).delta == 0

    def test_expired_put_delta(self, option_factory) -> None:
        """Test expired put delta is -1 in the money and 0 otherwise."""
        itm = option_factory(expiration=0, underlying_price=90, style=OptionStyle.PUT)
        atm = option_factory(expiration=0, style=OptionStyle.PUT)
        assert greeks_black_scholes(itm).delta == -1
        assert greeks_black_scholes(atm).delta == 0

    def test_zero_volatility_is_discounted_forward(self, option_factory) -> None:
        """Test sigma == 0 returns max(S*e^(-qT) - K*e^(-rT), 0)."""
        call = option_factory(implied_volatility=0)
        put = option_factory(implied_volatility=0, style=OptionStyle.PUT)
        assert float(price_black_scholes(call)) == pytest.approx(100 - 100 * exp(-0.05))
        assert price_black_scholes(put) == 0

        g = greeks_black_scholes(call)
        assert float(g.delta) == pytest.approx(1.0)
        assert g.gamma == 0
        assert g.vega == 0

    def test_zero_volatility_continuity(self, option_factory) -> None:
        """Test the sigma == 0 branch agrees with a tiny volatility."""
        deterministic = price_black_scholes(option_factory(implied_volatility=0))
        nearly = price_black_scholes(option_factory(implied_volatility=1e-6))
        assert float(deterministic) == pytest.approx(float(nearly), abs=1e-6)

    def test_inputs_override_sigma(self, atm_call) -> None:
        """Test BlackScholesInputs can substitute a trial volatility."""
        inputs = BlackScholesInputs.from_option(atm_call, sigma=0.3)
        assert inputs.sigma == 0.3
        assert inputs.T == pytest.approx(1.0)
        assert not inputs.deterministic
