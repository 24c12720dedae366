"""Monte Carlo Pricing under Geometric Brownian Motion

Simulates ``m`` independent price paths of ``n`` steps each:

    S_{t+dt} = S_t * exp((r - q - sigma^2/2) dt + sigma * sqrt(dt) * Z)

and estimates the premium as the discounted mean terminal payoff, with
standard error stddev(payoffs) / sqrt(m).

Paths are simulated in vectorized batches. Each batch reduces to a private
(count, sum, sum of squares) accumulator; accumulators are combined at the
end, so batches are independent and could run on separate workers.

The random source is injected (``rng`` or ``seed``); nothing touches the
global numpy random state. Only European payoffs are supported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from math import sqrt
from typing import Iterator

import numpy as np

from optionstrat.config import get_config
from optionstrat.errors import InvalidDomainError, UnsupportedOperationError
from optionstrat.model import Option, to_decimal
from optionstrat.pricing.black_scholes import price_black_scholes
from optionstrat.pricing.utils import discount_factor, resolve_rng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonteCarloResult:
    """Monte Carlo estimate of an option premium.

    Attributes:
        price: Discounted mean payoff (per contract)
        standard_error: Standard error of the estimate
        paths: Number of simulated paths
        steps: Time steps per path
    """

    price: Decimal
    standard_error: Decimal
    paths: int
    steps: int

    def __iter__(self) -> Iterator[Decimal]:
        """Allow ``price, standard_error = result``."""
        yield self.price
        yield self.standard_error

    def confidence_interval(self, z: float = 1.96) -> tuple[Decimal, Decimal]:
        """Return (lower, upper) bounds at ``z`` standard errors."""
        width = self.standard_error * to_decimal(z)
        return self.price - width, self.price + width

    def z_score(self, reference: Decimal) -> float:
        """Distance from ``reference`` in standard errors (inf if error is zero)."""
        diff = abs(float(self.price - reference))
        if self.standard_error == 0:
            return 0.0 if diff == 0 else float("inf")
        return diff / float(self.standard_error)


@dataclass
class _Accumulator:
    count: int = 0
    total: float = 0.0
    total_sq: float = 0.0

    def add(self, values: np.ndarray) -> _Accumulator:
        return _Accumulator(
            count=self.count + values.size,
            total=self.total + float(values.sum()),
            total_sq=self.total_sq + float(np.square(values).sum()),
        )

    def merge(self, other: _Accumulator) -> _Accumulator:
        return _Accumulator(
            count=self.count + other.count,
            total=self.total + other.total,
            total_sq=self.total_sq + other.total_sq,
        )

    def mean(self) -> float:
        return self.total / self.count

    def std(self) -> float:
        """Sample standard deviation."""
        if self.count < 2:
            return 0.0
        mean = self.mean()
        variance = (self.total_sq - self.count * mean * mean) / (self.count - 1)
        return sqrt(max(variance, 0.0))


def simulate_terminal_prices(
    option: Option,
    paths: int,
    steps: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Simulate ``paths`` GBM paths and return their terminal prices."""
    T = option.time_to_expiration()
    dt = T / steps
    sigma = float(option.implied_volatility)
    drift = (float(option.risk_free_rate) - float(option.dividend_yield) - 0.5 * sigma**2) * dt
    shocks = rng.standard_normal((paths, steps))
    log_growth = (drift + sigma * np.sqrt(dt) * shocks).sum(axis=1)
    return float(option.underlying_price) * np.exp(log_growth)


def _payoffs(option: Option, terminal: np.ndarray) -> np.ndarray:
    strike = float(option.strike)
    if option.is_call:
        return np.maximum(terminal - strike, 0.0)
    return np.maximum(strike - terminal, 0.0)


def price_monte_carlo(
    option: Option,
    paths: int | None = None,
    steps: int | None = None,
    *,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
    batch_size: int | None = None,
    cross_check: bool = False,
) -> MonteCarloResult:
    """Estimate the premium of one long European contract by simulation.

    Args:
        option: Contract to price (must be European)
        paths: Number of independent paths (>= 2)
        steps: Time steps per path (>= 1)
        rng: Random generator to draw from
        seed: Seed for a fresh generator (alternative to ``rng``)
        batch_size: Paths per vectorized batch
        cross_check: Log a warning when the estimate is more than three
            standard errors away from the Black-Scholes price

    Returns:
        MonteCarloResult with price and standard error

    Raises:
        UnsupportedOperationError: For American exercise
        InvalidDomainError: For invalid path / step counts
    """
    config = get_config()
    paths = config.monte_carlo_paths if paths is None else paths
    steps = config.monte_carlo_steps if steps is None else steps
    batch_size = config.monte_carlo_batch_size if batch_size is None else batch_size

    if option.is_american:
        raise UnsupportedOperationError(
            "price_monte_carlo",
            "early exercise is not supported; use price_binomial for American options",
        )
    if paths < 2:
        raise InvalidDomainError(paths, "at least two paths are needed for a standard error")
    if steps < 1:
        raise InvalidDomainError(steps, "each path needs at least one step")
    if batch_size < 1:
        raise InvalidDomainError(batch_size, "batch size must be positive")

    T = option.time_to_expiration()
    if T == 0:
        return MonteCarloResult(
            price=option.intrinsic_value(option.underlying_price),
            standard_error=Decimal(0),
            paths=paths,
            steps=steps,
        )

    generator = resolve_rng(rng, seed)
    discount = discount_factor(float(option.risk_free_rate), T)

    total = _Accumulator()
    remaining = paths
    while remaining > 0:
        size = min(batch_size, remaining)
        terminal = simulate_terminal_prices(option, size, steps, generator)
        total = total.merge(_Accumulator().add(discount * _payoffs(option, terminal)))
        remaining -= size

    price = total.mean()
    standard_error = total.std() / sqrt(paths)
    result = MonteCarloResult(
        price=to_decimal(price),
        standard_error=to_decimal(standard_error),
        paths=paths,
        steps=steps,
    )
    logger.info(
        "Monte Carlo price %.6f +/- %.6f (%d paths x %d steps)",
        price,
        standard_error,
        paths,
        steps,
    )

    if cross_check:
        reference = price_black_scholes(option)
        z = result.z_score(reference)
        if z > 3.0:
            logger.warning(
                "Monte Carlo estimate %.6f is %.2f standard errors from Black-Scholes %s",
                price,
                z,
                reference,
            )
    return result


def expected_discounted_payoff(option: Option, terminal_prices: np.ndarray) -> float:
    """Discounted mean payoff of one long contract over given terminal prices."""
    T = option.time_to_expiration()
    discount = discount_factor(float(option.risk_free_rate), T)
    return float(discount * _payoffs(option, terminal_prices).mean())
