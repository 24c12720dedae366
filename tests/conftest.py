"""Shared pytest fixtures for optionstrat tests."""

from __future__ import annotations

import numpy as np
import pytest

from optionstrat.model import Option, OptionStyle, Side


def make_option(**overrides) -> Option:
    """Build an ATM one-year call with overridable fields."""
    params = dict(
        style=OptionStyle.CALL,
        side=Side.LONG,
        underlying_symbol="AAPL",
        strike=100,
        expiration=365,
        underlying_price=100,
        implied_volatility=0.2,
        risk_free_rate=0.05,
    )
    params.update(overrides)
    return Option(**params)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible simulations."""
    return np.random.default_rng(42)


@pytest.fixture
def atm_call() -> Option:
    """ATM European call: S=K=100, T=1y, r=5%, sigma=20%."""
    return make_option()


@pytest.fixture
def atm_put() -> Option:
    """ATM European put: S=K=100, T=1y, r=5%, sigma=20%."""
    return make_option(style=OptionStyle.PUT)


@pytest.fixture
def option_factory():
    """Factory for options with overridable fields."""
    return make_option
