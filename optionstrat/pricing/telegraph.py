"""Telegraph Process Pricing

A two-state process switching between +1 and -1. While in +1 the process
leaves the state with rate ``lambda_down``; while in -1 it leaves with rate
``lambda_up``. Over a step ``dt`` the switching probability is
``1 - e^(-lambda * dt)``. Asymmetric rates are supported.

The state sets the direction of the log price, moving at a constant speed
c chosen so the long-run variance matches sigma^2:

    log S_{t+dt} = log S_t + c * state * dt
    c = sigma * sqrt((lambda_up + lambda_down)^3 / (8 lambda_up lambda_down))

Terminal prices are rescaled so their mean equals the forward
S * e^((r - q) T), so the discounted terminal price has mean S * e^(-qT).
Paths converge as the step count grows.

Pricing averages discounted payoffs over simulated paths, as the Monte
Carlo pricer does. Rates can be estimated from a return series by the
method of moments on sign run lengths (lambda = 1 / mean run length).

Applications: regime switching, market sentiment flips, volatility regimes.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from math import exp, isfinite, sqrt
from typing import Sequence

import numpy as np

from optionstrat.config import get_config
from optionstrat.errors import InvalidDomainError, UnsupportedOperationError
from optionstrat.model import Option, to_decimal
from optionstrat.model.positive import Number
from optionstrat.pricing.monte_carlo import expected_discounted_payoff
from optionstrat.pricing.utils import resolve_rng, simulate_returns

logger = logging.getLogger(__name__)


def _rate(value: Number, name: str) -> float:
    rate = float(to_decimal(value))
    if not isfinite(rate) or rate < 0:
        raise InvalidDomainError(value, f"{name} must be a non-negative finite rate")
    return rate


class TelegraphProcess:
    """Two-state (+1 / -1) continuous-time Markov process.

    Args:
        lambda_up: Rate of switching from -1 to +1
        lambda_down: Rate of switching from +1 to -1
        rng: Random source for transitions
        initial_state: +1 or -1; drawn with equal probability when omitted
    """

    def __init__(
        self,
        lambda_up: Number,
        lambda_down: Number,
        *,
        rng: np.random.Generator,
        initial_state: int | None = None,
    ) -> None:
        self.lambda_up = _rate(lambda_up, "lambda_up")
        self.lambda_down = _rate(lambda_down, "lambda_down")
        self.rng = rng
        if initial_state is None:
            initial_state = 1 if rng.random() < 0.5 else -1
        if initial_state not in (1, -1):
            raise InvalidDomainError(initial_state, "state must be +1 or -1")
        self.current_state = initial_state

    def switch_probability(self, state: int, dt: float) -> float:
        """Probability of leaving ``state`` within ``dt``."""
        rate = self.lambda_down if state == 1 else self.lambda_up
        return 1.0 - exp(-rate * dt)

    def next_state(self, dt: float) -> int:
        """Advance the process by ``dt`` and return the new state."""
        if dt < 0:
            raise InvalidDomainError(dt, "time step must be non-negative")
        if self.rng.random() < self.switch_probability(self.current_state, dt):
            self.current_state = -self.current_state
        return self.current_state

    def simulate_states(self, paths: int, steps: int, dt: float) -> np.ndarray:
        """Simulate ``paths`` independent state sequences of ``steps`` steps.

        Returns:
            Array of shape (paths, steps) with entries +1 / -1. Each path
            starts from an independent equiprobable state.
        """
        states = np.where(self.rng.random(paths) < 0.5, 1, -1)
        p_leave_up = 1.0 - exp(-self.lambda_down * dt)
        p_leave_down = 1.0 - exp(-self.lambda_up * dt)
        out = np.empty((paths, steps), dtype=np.int8)
        for step in range(steps):
            p_switch = np.where(states == 1, p_leave_up, p_leave_down)
            flip = self.rng.random(paths) < p_switch
            states = np.where(flip, -states, states)
            out[:, step] = states
        return out


def estimate_telegraph_parameters(
    returns: Sequence[float] | np.ndarray,
    threshold: float = 0.0,
    time_step: float = 1.0,
) -> tuple[Decimal, Decimal]:
    """Estimate (lambda_up, lambda_down) from a return series.

    Returns above ``threshold`` map to state +1, the rest to -1. The rate of
    leaving a state is the reciprocal of its mean run length. With the
    default ``time_step`` the rates are per observation; pass the sampling
    interval in years to get annualized rates.

    Raises:
        InvalidDomainError: If fewer than two returns are given or one of the
            states never occurs
    """
    series = np.asarray(returns, dtype=float)
    if time_step <= 0:
        raise InvalidDomainError(time_step, "time step must be positive")
    if series.size < 2:
        raise InvalidDomainError(series.size, "need at least two returns to estimate rates")

    states = np.where(series > threshold, 1, -1)
    up_runs: list[int] = []
    down_runs: list[int] = []
    current = states[0]
    length = 1
    for state in states[1:]:
        if state == current:
            length += 1
            continue
        (up_runs if current == 1 else down_runs).append(length)
        current = state
        length = 1
    (up_runs if current == 1 else down_runs).append(length)

    if not up_runs or not down_runs:
        raise InvalidDomainError(
            threshold, "return series never crosses the threshold; rates are undefined"
        )

    # Leaving +1 happens at rate lambda_down, leaving -1 at rate lambda_up
    lambda_down = 1.0 / (float(np.mean(up_runs)) * time_step)
    lambda_up = 1.0 / (float(np.mean(down_runs)) * time_step)
    logger.debug(
        "Estimated telegraph rates lambda_up=%.4f lambda_down=%.4f from %d returns",
        lambda_up,
        lambda_down,
        series.size,
    )
    return to_decimal(lambda_up), to_decimal(lambda_down)


def diffusion_velocity(sigma: float, lambda_up: float, lambda_down: float) -> float:
    """Speed of the +1 / -1 state that matches the long-run variance sigma^2.

    The integral of a telegraph state over ``T`` has variance growing like
    ``8 lambda_up lambda_down / (lambda_up + lambda_down)^3 * T``; scaling the
    state by the returned speed makes that ``sigma^2 * T``. With a zero rate
    the state never leaves one side and ``sigma`` is used as is.
    """
    if lambda_up <= 0 or lambda_down <= 0:
        return sigma
    total = lambda_up + lambda_down
    return sigma * sqrt(total**3 / (8.0 * lambda_up * lambda_down))


def telegraph_terminal_prices(
    option: Option,
    process: TelegraphProcess,
    paths: int,
    steps: int,
) -> np.ndarray:
    """Simulate risk-neutral terminal prices driven by ``process``.

    Each step moves the log price by ``velocity * state * dt``, so paths stay
    bounded as ``steps`` grows. Terminal prices are rescaled so their sample
    mean equals the forward ``S * e^((r - q) T)``.
    """
    T = option.time_to_expiration()
    dt = T / steps
    sigma = float(option.implied_volatility)
    forward = float(option.underlying_price) * exp(
        (float(option.risk_free_rate) - float(option.dividend_yield)) * T
    )
    if sigma == 0:
        return np.full(paths, forward)

    velocity = diffusion_velocity(sigma, process.lambda_up, process.lambda_down)
    states = process.simulate_states(paths, steps, dt)
    log_growth = velocity * dt * states.sum(axis=1, dtype=float)
    # Center before exponentiating to keep exp() in range
    growth = np.exp(log_growth - log_growth.max())
    return forward * growth / growth.mean()


def price_telegraph(
    option: Option,
    paths: int,
    lambda_up: Number | None = None,
    lambda_down: Number | None = None,
    *,
    steps: int | None = None,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> Decimal:
    """Price one long European contract with Telegraph-driven paths.

    When a rate is omitted, both are estimated from a simulated GBM return
    series drawn from the same random source; supplied rates take precedence.
    With zero volatility the price is the discounted forward payoff and no
    rates are needed.

    Args:
        option: Contract to price (must be European)
        paths: Number of simulated paths (>= 1)
        lambda_up: Rate of switching from -1 to +1
        lambda_down: Rate of switching from +1 to -1
        steps: Time steps per path
        rng: Random generator to draw from
        seed: Seed for a fresh generator (alternative to ``rng``)

    Returns:
        Option premium as a Decimal
    """
    config = get_config()
    steps = config.telegraph_steps if steps is None else steps

    if option.is_american:
        raise UnsupportedOperationError(
            "price_telegraph", "early exercise is not supported by path simulation"
        )
    if paths < 1:
        raise InvalidDomainError(paths, "at least one path is required")
    if steps < 1:
        raise InvalidDomainError(steps, "each path needs at least one step")

    T = option.time_to_expiration()
    if T == 0:
        return option.intrinsic_value(option.underlying_price)

    generator = resolve_rng(rng, seed)
    dt = T / steps
    sigma = float(option.implied_volatility)
    drift = float(option.risk_free_rate) - float(option.dividend_yield) - 0.5 * sigma**2

    if sigma == 0:
        # Deterministic paths; the switching rates have no effect
        lambda_up = 0 if lambda_up is None else lambda_up
        lambda_down = 0 if lambda_down is None else lambda_down
    elif lambda_up is None or lambda_down is None:
        sample = simulate_returns(drift, sigma, config.telegraph_sample_size, dt, generator)
        est_up, est_down = estimate_telegraph_parameters(sample, time_step=dt)
        lambda_up = est_up if lambda_up is None else lambda_up
        lambda_down = est_down if lambda_down is None else lambda_down

    process = TelegraphProcess(lambda_up, lambda_down, rng=generator)
    terminal = telegraph_terminal_prices(option, process, paths, steps)

    price = expected_discounted_payoff(option, terminal)
    logger.debug(
        "Telegraph price %.6f (%d paths x %d steps, lambda_up=%s, lambda_down=%s)",
        price,
        paths,
        steps,
        lambda_up,
        lambda_down,
    )
    return to_decimal(price)
