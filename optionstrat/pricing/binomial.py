"""Binomial Tree (Cox-Ross-Rubinstein) Pricing

Discretizes the time to expiration into ``n`` steps and builds a
recombining lattice of underlying prices:

    u = e^(sigma * sqrt(dt)),  d = 1/u
    p = (e^((r - q) dt) - d) / (u - d)

Terminal payoffs are discounted back by e^(-r dt) per level. For American
exercise each node keeps max(continuation, intrinsic).

Pricing uses a rolling numpy array (O(n) memory, O(n^2) time); each level
is a vectorized map over independent nodes. :func:`generate_binomial_tree`
materializes the full lattice for inspection.

European prices converge to Black-Scholes as n grows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from math import exp, sqrt

import numpy as np

from optionstrat.config import get_config
from optionstrat.errors import InvalidDomainError, NumericalOverflowError
from optionstrat.model import Option, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BinomialPricingParams:
    """Derived lattice parameters for one option and step count.

    Attributes:
        steps: Number of time steps
        dt: Length of one step (years)
        up: Up factor u
        down: Down factor d = 1/u
        probability: Risk-neutral probability of an up move
        discount: Per-step discount factor e^(-r dt)
    """

    steps: int
    dt: float
    up: float
    down: float
    probability: float
    discount: float

    @classmethod
    def from_option(cls, option: Option, steps: int) -> BinomialPricingParams:
        """Derive lattice parameters, validating the risk-neutral probability.

        Raises:
            InvalidDomainError: If steps < 1, sigma == 0, or p lies outside [0, 1]
        """
        if steps < 1:
            raise InvalidDomainError(steps, "binomial tree needs at least one step")

        T = option.time_to_expiration()
        sigma = float(option.implied_volatility)
        r = float(option.risk_free_rate)
        q = float(option.dividend_yield)
        if sigma == 0:
            raise InvalidDomainError(sigma, "zero volatility makes the up and down factors equal")

        dt = T / steps
        try:
            up = exp(sigma * sqrt(dt))
            growth = exp((r - q) * dt)
            discount = exp(-r * dt)
        except OverflowError as e:
            raise NumericalOverflowError(details={"sigma": sigma, "dt": dt}) from e
        down = 1.0 / up
        if up == down:
            raise InvalidDomainError(up, "up and down factors coincide; increase T or sigma")

        probability = (growth - down) / (up - down)
        if not 0.0 <= probability <= 1.0:
            raise InvalidDomainError(
                probability,
                f"risk-neutral probability outside [0, 1] with {steps} steps; "
                "increase the step count or check rate and volatility",
            )
        return cls(
            steps=steps,
            dt=dt,
            up=up,
            down=down,
            probability=probability,
            discount=discount,
        )


def _level_prices(spot: float, params: BinomialPricingParams, level: int) -> np.ndarray:
    """Underlying prices at ``level``, ordered from all-down to all-up."""
    j = np.arange(level + 1)
    return spot * params.up**j * params.down ** (level - j)


def _intrinsic(prices: np.ndarray, strike: float, is_call: bool) -> np.ndarray:
    if is_call:
        return np.maximum(prices - strike, 0.0)
    return np.maximum(strike - prices, 0.0)


def price_binomial(option: Option, steps: int | None = None) -> Decimal:
    """Price one long contract on a binomial lattice.

    Args:
        option: Contract to price; ``option.exercise`` selects early exercise
        steps: Number of tree steps (defaults to the configured value)

    Returns:
        Option premium as a Decimal

    Raises:
        InvalidDomainError: If the risk-neutral probability leaves [0, 1]
    """
    steps = get_config().binomial_steps if steps is None else steps
    spot = float(option.underlying_price)
    strike = float(option.strike)

    if option.time_to_expiration() == 0:
        if steps < 1:
            raise InvalidDomainError(steps, "binomial tree needs at least one step")
        return option.intrinsic_value(option.underlying_price)

    params = BinomialPricingParams.from_option(option, steps)
    p = params.probability
    american = option.is_american

    values = _intrinsic(_level_prices(spot, params, steps), strike, option.is_call)
    for level in range(steps - 1, -1, -1):
        values = params.discount * (p * values[1:] + (1.0 - p) * values[:-1])
        if american:
            exercise = _intrinsic(_level_prices(spot, params, level), strike, option.is_call)
            values = np.maximum(values, exercise)

    price = float(values[0])
    logger.debug(
        "Binomial price %.6f (steps=%d, p=%.6f, american=%s)", price, steps, p, american
    )
    return to_decimal(price)


def generate_binomial_tree(
    option: Option, steps: int
) -> tuple[list[list[float]], list[list[float]]]:
    """Build the full lattice of underlying prices and option values.

    Args:
        option: Contract to price
        steps: Number of tree steps

    Returns:
        (asset_tree, option_tree), each a list of levels where level ``i`` has
        ``i + 1`` nodes ordered from all-down to all-up.
    """
    params = BinomialPricingParams.from_option(option, steps)
    spot = float(option.underlying_price)
    strike = float(option.strike)
    p = params.probability

    asset_tree = [_level_prices(spot, params, level) for level in range(steps + 1)]
    option_tree: list[np.ndarray] = [np.empty(0)] * (steps + 1)
    option_tree[steps] = _intrinsic(asset_tree[steps], strike, option.is_call)
    for level in range(steps - 1, -1, -1):
        nxt = option_tree[level + 1]
        values = params.discount * (p * nxt[1:] + (1.0 - p) * nxt[:-1])
        if option.is_american:
            values = np.maximum(values, _intrinsic(asset_tree[level], strike, option.is_call))
        option_tree[level] = values

    return (
        [level.tolist() for level in asset_tree],
        [level.tolist() for level in option_tree],
    )
