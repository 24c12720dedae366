"""
optionstrat - Option pricing, Greeks and delta-neutral strategy analysis.

Pricing models:
- Black-Scholes-Merton (closed form, with Greeks)
- Binomial lattice (European and American exercise)
- Monte Carlo (geometric Brownian motion, with standard error)
- Telegraph process (two-state regime switching)

Plus an implied volatility solver, multi-leg Greeks aggregation and a
delta-neutrality adjustment engine.
"""

from optionstrat.config import DEFAULT_CONFIG, PricingConfig, get_config
from optionstrat.errors import (
    CalculationError,
    ConvergenceFailureError,
    DivisionByZeroError,
    InputError,
    InvalidDomainError,
    InvalidPriceError,
    InvalidRateError,
    InvalidStrikeError,
    InvalidTimeError,
    InvalidVolatilityError,
    MathError,
    PricingError,
    UnsupportedOperationError,
)
from optionstrat.model import (
    ExerciseStyle,
    ExpirationDate,
    Greeks,
    Option,
    OptionStyle,
    Positive,
    Side,
    pos,
)
from optionstrat.pricing import (
    MonteCarloResult,
    TelegraphProcess,
    estimate_telegraph_parameters,
    greeks_black_scholes,
    implied_volatility,
    price_binomial,
    price_black_scholes,
    price_monte_carlo,
    price_telegraph,
)
from optionstrat.strategies import (
    DELTA_THRESHOLD,
    Adjustment,
    BuyOptions,
    DeltaNeutralityResult,
    NoAdjustmentNeeded,
    SellOptions,
    Strategy,
    aggregate_greeks,
    apply_adjustment,
    delta_adjustments,
    delta_neutrality,
    is_delta_neutral,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Configuration
    "DEFAULT_CONFIG",
    "PricingConfig",
    "get_config",
    # Model
    "ExerciseStyle",
    "ExpirationDate",
    "Greeks",
    "Option",
    "OptionStyle",
    "Positive",
    "Side",
    "pos",
    # Pricing
    "price_black_scholes",
    "greeks_black_scholes",
    "price_binomial",
    "price_monte_carlo",
    "MonteCarloResult",
    "price_telegraph",
    "TelegraphProcess",
    "estimate_telegraph_parameters",
    "implied_volatility",
    # Strategies
    "DELTA_THRESHOLD",
    "Adjustment",
    "BuyOptions",
    "SellOptions",
    "NoAdjustmentNeeded",
    "DeltaNeutralityResult",
    "Strategy",
    "aggregate_greeks",
    "apply_adjustment",
    "delta_adjustments",
    "delta_neutrality",
    "is_delta_neutral",
    # Errors
    "PricingError",
    "MathError",
    "InputError",
    "CalculationError",
    "ConvergenceFailureError",
    "DivisionByZeroError",
    "InvalidDomainError",
    "InvalidPriceError",
    "InvalidRateError",
    "InvalidStrikeError",
    "InvalidTimeError",
    "InvalidVolatilityError",
    "UnsupportedOperationError",
]
