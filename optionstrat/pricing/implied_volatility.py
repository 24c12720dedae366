"""Implied Volatility Computation

Solves for the volatility sigma that makes a pricer reproduce an observed
market price:

    find sigma such that price(option with sigma) = P_market

Methods:
- Newton-Raphson (fast, quadratic convergence near the root)
- Bisection (bracketing, guaranteed convergence, slower)
- Brent's method (bracketing, via scipy.optimize.brentq)

Newton-Raphson stops early when vega falls below an epsilon (deep in or out
of the money, or very close to expiration). With ``fallback=True`` the solver
then switches to bisection instead of failing; otherwise it raises
:class:`DivisionByZeroError`. Exhausting the iteration cap raises
:class:`ConvergenceFailureError` carrying the iteration count and tolerance.

References:
- Li, S. (2005). "A New Formula for Computing Implied Volatility"
- Jaeckel, P. (2015). "Let's Be Rational"
"""

from __future__ import annotations

import logging
from dataclasses import replace
from math import exp, isfinite
from typing import Callable, Literal

from scipy.optimize import brentq

from optionstrat.config import get_config
from optionstrat.errors import (
    ConvergenceFailureError,
    DivisionByZeroError,
    InvalidDomainError,
    InvalidPriceError,
    InvalidTimeError,
)
from optionstrat.model import Option, Positive, to_decimal
from optionstrat.model.positive import Number
from optionstrat.pricing.black_scholes import BlackScholesInputs, black_scholes_value, raw_vega

logger = logging.getLogger(__name__)

Method = Literal["newton-raphson", "bisection", "brent"]
Pricer = Callable[[Option], Number]

_FD_BUMP = 1e-4


class _Objective:
    """Price and vega as functions of sigma for one option."""

    def __init__(self, option: Option, pricer: Pricer | None) -> None:
        self.option = option
        self.pricer = pricer
        self.inputs = BlackScholesInputs.from_option(option)

    def price(self, sigma: float) -> float:
        if self.pricer is None:
            return black_scholes_value(replace(self.inputs, sigma=sigma))
        repriced = self.option.with_updates(implied_volatility=Positive(sigma))
        return float(to_decimal(self.pricer(repriced)))

    def vega(self, sigma: float) -> float:
        """dPrice/dsigma per unit volatility."""
        if self.pricer is None:
            i = self.inputs
            if sigma == 0 or i.S == 0 or i.K == 0:
                return 0.0
            return raw_vega(i.S, i.K, i.T, i.r, sigma, i.q)
        low = max(sigma - _FD_BUMP, 0.0)
        high = sigma + _FD_BUMP
        return (self.price(high) - self.price(low)) / (high - low)


def _validate(option: Option, market_price: float, tolerance: float) -> None:
    T = option.time_to_expiration()
    if T == 0:
        raise InvalidTimeError(T, "implied volatility is undefined at expiration")
    if not isfinite(market_price) or market_price <= 0:
        raise InvalidPriceError(market_price, "market price must be positive")

    S = float(option.underlying_price)
    K = float(option.strike)
    spot_leg = S * exp(-float(option.dividend_yield) * T)
    strike_leg = K * exp(-float(option.risk_free_rate) * T)
    if option.is_call:
        lower, upper = max(spot_leg - strike_leg, 0.0), spot_leg
    else:
        lower, upper = max(strike_leg - spot_leg, 0.0), strike_leg

    if market_price < lower - tolerance:
        raise InvalidPriceError(
            market_price, f"below the discounted intrinsic value {lower:.6f}; no volatility fits"
        )
    if market_price > upper + tolerance:
        raise InvalidPriceError(
            market_price, f"above the no-arbitrage upper bound {upper:.6f}; no volatility fits"
        )


def newton_raphson(
    objective: _Objective,
    market_price: float,
    tolerance: float,
    max_iterations: int,
    initial_guess: float,
) -> float:
    """Newton-Raphson iteration sigma_(k+1) = sigma_k - (price - market) / vega.

    Raises:
        DivisionByZeroError: If vega drops below the configured epsilon
        ConvergenceFailureError: If the iteration cap is reached
    """
    config = get_config()
    sigma = min(max(initial_guess, config.iv_min_vol), config.iv_max_vol)

    for iteration in range(max_iterations):
        diff = objective.price(sigma) - market_price
        if abs(diff) < tolerance:
            logger.debug("Newton-Raphson converged to %.8f in %d iterations", sigma, iteration)
            return sigma

        vega = objective.vega(sigma)
        if abs(vega) < config.vega_epsilon:
            raise DivisionByZeroError(
                f"Division by zero: vega {vega:.3e} below epsilon at iteration {iteration}",
                details={"sigma": sigma, "iteration": iteration, "vega": vega},
            )

        sigma_next = sigma - diff / vega
        if not isfinite(sigma_next):
            raise DivisionByZeroError(details={"sigma": sigma, "iteration": iteration})
        sigma = min(max(sigma_next, config.iv_min_vol), config.iv_max_vol)

    raise ConvergenceFailureError(max_iterations, tolerance, details={"last_sigma": sigma})


def _bracket(objective: _Objective, market_price: float) -> tuple[float, float]:
    config = get_config()
    low, high = config.iv_min_vol, config.iv_max_vol
    price_low = objective.price(low)
    price_high = objective.price(high)
    if not price_low <= market_price <= price_high:
        raise InvalidDomainError(
            market_price,
            f"market price outside the bracket [{price_low:.6f}, {price_high:.6f}] "
            f"for volatility in [{low}, {high}]",
        )
    return low, high


def bisection(
    objective: _Objective,
    market_price: float,
    tolerance: float,
    max_iterations: int,
) -> float:
    """Bracketing bisection between the configured volatility bounds.

    Raises:
        InvalidDomainError: If the market price is not bracketed
        ConvergenceFailureError: If the iteration cap is reached
    """
    low, high = _bracket(objective, market_price)

    for iteration in range(max_iterations):
        mid = 0.5 * (low + high)
        diff = objective.price(mid) - market_price
        if abs(diff) < tolerance:
            logger.debug("Bisection converged to %.8f in %d iterations", mid, iteration)
            return mid
        if diff > 0:
            high = mid
        else:
            low = mid

    raise ConvergenceFailureError(max_iterations, tolerance, details={"bracket": [low, high]})


def brent(
    objective: _Objective,
    market_price: float,
    tolerance: float,
    max_iterations: int,
) -> float:
    """Brent's method on the configured volatility bracket (scipy.optimize.brentq).

    Raises:
        InvalidDomainError: If the market price is not bracketed
        ConvergenceFailureError: If brentq does not converge
    """
    low, high = _bracket(objective, market_price)
    try:
        sigma, result = brentq(
            lambda s: objective.price(s) - market_price,
            low,
            high,
            xtol=tolerance * 1e-2,
            maxiter=max_iterations,
            full_output=True,
            disp=False,
        )
    except ValueError as e:
        raise InvalidDomainError(market_price, f"Brent's method failed: {e}") from e
    if not result.converged:
        raise ConvergenceFailureError(result.iterations, tolerance)
    return float(sigma)


def implied_volatility(
    option: Option,
    market_price: Number,
    tolerance: float | None = None,
    max_iterations: int | None = None,
    *,
    initial_guess: float | None = None,
    method: Method = "newton-raphson",
    fallback: bool = True,
    pricer: Pricer | None = None,
) -> Positive:
    """Recover the volatility implied by an observed option price.

    Args:
        option: Contract whose premium was observed (its volatility is ignored)
        market_price: Observed premium of one contract
        tolerance: Absolute price tolerance for convergence
        max_iterations: Hard iteration cap per method
        initial_guess: Starting volatility for Newton-Raphson
        method: "newton-raphson", "bisection" or "brent"
        fallback: Fall back to bisection when Newton-Raphson stalls
        pricer: Pricing function to invert (Black-Scholes when omitted)

    Returns:
        Implied volatility (annualized)

    Raises:
        ConvergenceFailureError: If no method converges within the cap
        DivisionByZeroError: If vega vanishes and ``fallback`` is off
        InvalidPriceError: If the market price violates no-arbitrage bounds
        InvalidTimeError: If the option is at expiration
    """
    config = get_config()
    tolerance = config.iv_tolerance if tolerance is None else tolerance
    max_iterations = config.iv_max_iterations if max_iterations is None else max_iterations
    initial_guess = config.iv_initial_guess if initial_guess is None else initial_guess
    if tolerance <= 0:
        raise InvalidDomainError(tolerance, "tolerance must be positive")
    if max_iterations < 1:
        raise InvalidDomainError(max_iterations, "at least one iteration is required")

    target = float(to_decimal(market_price))
    _validate(option, target, tolerance)
    objective = _Objective(option, pricer)

    if method == "bisection":
        sigma = bisection(objective, target, tolerance, max_iterations)
    elif method == "brent":
        sigma = brent(objective, target, tolerance, max_iterations)
    elif method == "newton-raphson":
        try:
            sigma = newton_raphson(objective, target, tolerance, max_iterations, initial_guess)
        except (DivisionByZeroError, ConvergenceFailureError) as e:
            if not fallback:
                raise
            logger.warning("Newton-Raphson stalled (%s); falling back to bisection", e)
            sigma = bisection(objective, target, tolerance, max_iterations)
    else:
        raise InvalidDomainError(method, "unknown implied volatility method")

    return Positive(sigma)
