"""Black-Scholes-Merton Model

Closed-form pricing and first-order Greeks for European options on a
dividend-paying underlying:
- Float formulas (d1, d2, call / put prices, per-Greek functions)
- Option-level calculator with the zero-time / zero-volatility policy

References:
- Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
- Merton, R. C. (1973). Theory of Rational Option Pricing.
"""

from .calculator import (
    BlackScholesInputs,
    black_scholes_value,
    greeks_black_scholes,
    greeks_from_inputs,
    price_black_scholes,
)
from .formulas import call_price, d1, d2, put_price
from .greeks import (
    call_delta,
    call_rho,
    call_rho_d,
    call_theta,
    gamma,
    put_delta,
    put_rho,
    put_rho_d,
    put_theta,
    raw_vega,
    vega,
)

__all__ = [
    # Option level
    "BlackScholesInputs",
    "black_scholes_value",
    "greeks_black_scholes",
    "greeks_from_inputs",
    "price_black_scholes",
    # Formulas
    "d1",
    "d2",
    "call_price",
    "put_price",
    # Greeks
    "call_delta",
    "put_delta",
    "gamma",
    "vega",
    "raw_vega",
    "call_theta",
    "put_theta",
    "call_rho",
    "put_rho",
    "call_rho_d",
    "put_rho_d",
]
