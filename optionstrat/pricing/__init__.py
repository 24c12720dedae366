"""Pricing models.

- Black-Scholes-Merton closed form (price and Greeks)
- Cox-Ross-Rubinstein binomial lattice (European and American exercise)
- Monte Carlo simulation under geometric Brownian motion
- Telegraph (two-state) process simulation
- Implied volatility solver

Every pricer returns the premium of one long contract; side and quantity
are applied when legs are aggregated into a strategy.
"""

from .binomial import BinomialPricingParams, generate_binomial_tree, price_binomial
from .black_scholes import (
    BlackScholesInputs,
    black_scholes_value,
    greeks_black_scholes,
    price_black_scholes,
)
from .implied_volatility import bisection, brent, implied_volatility, newton_raphson
from .monte_carlo import MonteCarloResult, price_monte_carlo, simulate_terminal_prices
from .telegraph import (
    TelegraphProcess,
    diffusion_velocity,
    estimate_telegraph_parameters,
    price_telegraph,
    telegraph_terminal_prices,
)
from .utils import discount_factor, norm_cdf, norm_pdf, resolve_rng, simulate_returns

__all__ = [
    # Black-Scholes
    "BlackScholesInputs",
    "black_scholes_value",
    "greeks_black_scholes",
    "price_black_scholes",
    # Lattice
    "BinomialPricingParams",
    "generate_binomial_tree",
    "price_binomial",
    # Simulation
    "MonteCarloResult",
    "price_monte_carlo",
    "simulate_terminal_prices",
    "TelegraphProcess",
    "diffusion_velocity",
    "estimate_telegraph_parameters",
    "price_telegraph",
    "telegraph_terminal_prices",
    # Implied volatility
    "implied_volatility",
    "newton_raphson",
    "bisection",
    "brent",
    # Utilities
    "discount_factor",
    "norm_cdf",
    "norm_pdf",
    "resolve_rng",
    "simulate_returns",
]
