"""Option-level Black-Scholes pricing and Greeks.

Resolves an :class:`~optionstrat.model.Option` into float inputs, applies the
boundary policy and dispatches to the closed-form formulas:

1. ``T == 0``: price is the intrinsic value; delta is a step function
   (1 / 0 for calls, -1 / 0 for puts, 0 exactly at the strike); every other
   Greek is zero.
2. ``sigma == 0`` (or a zero underlying / strike): the payoff is
   deterministic; price is the discounted intrinsic forward value
   ``max(S*e^(-qT) - K*e^(-rT), 0)`` (put mirrored) and Greeks are the
   corresponding limits, with zero gamma and vega.
3. Otherwise the general d1/d2 formulas.

Both special cases are checked before the general path, so the
``sigma * sqrt(T) == 0`` division in d1 is never reached from here.

Prices and Greeks are per contract for a long position; side and quantity
are applied by the strategy aggregator.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from math import exp

from optionstrat.errors import NumericalOverflowError
from optionstrat.model import Greeks, Option, to_decimal
from optionstrat.pricing.black_scholes.formulas import call_price, put_price
from optionstrat.pricing.black_scholes.greeks import (
    call_delta,
    call_rho,
    call_rho_d,
    call_theta,
    days_per_year,
    gamma,
    put_delta,
    put_rho,
    put_rho_d,
    put_theta,
    vega,
)


@dataclass(frozen=True)
class BlackScholesInputs:
    """Float inputs of the Black-Scholes model extracted from an option."""

    S: float
    K: float
    T: float
    r: float
    sigma: float
    q: float
    is_call: bool

    @classmethod
    def from_option(cls, option: Option, sigma: float | None = None) -> BlackScholesInputs:
        return cls(
            S=float(option.underlying_price),
            K=float(option.strike),
            T=option.time_to_expiration(),
            r=float(option.risk_free_rate),
            sigma=float(option.implied_volatility) if sigma is None else sigma,
            q=float(option.dividend_yield),
            is_call=option.is_call,
        )

    @property
    def deterministic(self) -> bool:
        """True when the terminal payoff is known with certainty."""
        return self.sigma == 0 or self.S == 0 or self.K == 0


def _intrinsic(inputs: BlackScholesInputs) -> float:
    if inputs.is_call:
        return max(inputs.S - inputs.K, 0.0)
    return max(inputs.K - inputs.S, 0.0)


def _discounted_forward_legs(inputs: BlackScholesInputs) -> tuple[float, float]:
    """Return (S*e^(-qT), K*e^(-rT))."""
    try:
        return inputs.S * exp(-inputs.q * inputs.T), inputs.K * exp(-inputs.r * inputs.T)
    except OverflowError as e:
        raise NumericalOverflowError(details={"r": inputs.r, "q": inputs.q, "T": inputs.T}) from e


def black_scholes_value(inputs: BlackScholesInputs) -> float:
    """Per-contract Black-Scholes value for float inputs (boundary policy applied)."""
    if inputs.T == 0:
        return _intrinsic(inputs)
    if inputs.deterministic:
        spot_leg, strike_leg = _discounted_forward_legs(inputs)
        if inputs.is_call:
            return max(spot_leg - strike_leg, 0.0)
        return max(strike_leg - spot_leg, 0.0)
    pricer = call_price if inputs.is_call else put_price
    try:
        return pricer(inputs.S, inputs.K, inputs.T, inputs.r, inputs.sigma, inputs.q)
    except OverflowError as e:
        raise NumericalOverflowError(details={"sigma": inputs.sigma, "T": inputs.T}) from e


def price_black_scholes(option: Option) -> Decimal:
    """Calculate the Black-Scholes premium of one long contract.

    Args:
        option: Contract to price (European semantics)

    Returns:
        Option premium as a Decimal (always >= 0)
    """
    return to_decimal(black_scholes_value(BlackScholesInputs.from_option(option)))


def _expired_greeks(inputs: BlackScholesInputs) -> Greeks:
    if inputs.is_call:
        delta = 1.0 if inputs.S > inputs.K else 0.0
    else:
        delta = -1.0 if inputs.S < inputs.K else 0.0
    return Greeks.from_floats(delta, 0.0, 0.0, 0.0, 0.0, 0.0)


def _deterministic_greeks(inputs: BlackScholesInputs) -> Greeks:
    spot_leg, strike_leg = _discounted_forward_legs(inputs)
    T = inputs.T
    forward_value = spot_leg - strike_leg if inputs.is_call else strike_leg - spot_leg
    if forward_value <= 0:
        return Greeks.zero()

    sign = 1.0 if inputs.is_call else -1.0
    return Greeks.from_floats(
        delta=sign * exp(-inputs.q * T),
        gamma=0.0,
        theta=sign * (inputs.q * spot_leg - inputs.r * strike_leg) / days_per_year(),
        vega=0.0,
        rho=sign * strike_leg * T / 100.0,
        rho_d=-sign * spot_leg * T / 100.0,
    )


def greeks_from_inputs(inputs: BlackScholesInputs) -> Greeks:
    """Black-Scholes Greeks for float inputs (boundary policy applied)."""
    if inputs.T == 0:
        return _expired_greeks(inputs)
    if inputs.deterministic:
        return _deterministic_greeks(inputs)

    args = (inputs.S, inputs.K, inputs.T, inputs.r, inputs.sigma, inputs.q)
    try:
        if inputs.is_call:
            return Greeks.from_floats(
                delta=call_delta(*args),
                gamma=gamma(*args),
                theta=call_theta(*args),
                vega=vega(*args),
                rho=call_rho(*args),
                rho_d=call_rho_d(*args),
            )
        return Greeks.from_floats(
            delta=put_delta(*args),
            gamma=gamma(*args),
            theta=put_theta(*args),
            vega=vega(*args),
            rho=put_rho(*args),
            rho_d=put_rho_d(*args),
        )
    except OverflowError as e:
        raise NumericalOverflowError(details={"sigma": inputs.sigma, "T": inputs.T}) from e


def greeks_black_scholes(option: Option) -> Greeks:
    """Compute Black-Scholes Greeks for one long contract.

    Args:
        option: Contract to evaluate

    Returns:
        Greeks (theta per day, vega / rho / rho_d per 1%)
    """
    return greeks_from_inputs(BlackScholesInputs.from_option(option))
