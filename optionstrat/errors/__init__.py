"""
Pricing Engine Error Definitions

Three families of errors, all deriving from :class:`PricingError`:

- Math errors: division by zero, overflow, invalid domain, convergence failure
- Input errors: invalid volatility, time, price, rate or strike
- Calculation errors: per-Greek failures, wrapped decimal errors and
  unsupported operations

Validation errors are raised at construction or first use and are never
silently clamped. Convergence failures carry iterations and tolerance so that
callers can retry with different bounds.

Example:
    from optionstrat.errors import ConvergenceFailureError, InputError

    try:
        sigma = implied_volatility(option, market_price)
    except ConvergenceFailureError as e:
        logger.warning(f"IV did not converge: {e}")
    except InputError as e:
        logger.error(f"Rejected input: {e}")
"""

from .base import PricingError
from .calculation import (
    CalculationError,
    DecimalArithmeticError,
    DeltaError,
    GammaError,
    RhoError,
    ThetaError,
    UnsupportedOperationError,
    VegaError,
)
from .inputs import (
    InputError,
    InvalidPriceError,
    InvalidRateError,
    InvalidStrikeError,
    InvalidTimeError,
    InvalidVolatilityError,
)
from .numerical import (
    ConvergenceFailureError,
    DivisionByZeroError,
    InvalidDomainError,
    MathError,
    NumericalOverflowError,
)

__all__ = [
    "CalculationError",
    "ConvergenceFailureError",
    "DecimalArithmeticError",
    "DeltaError",
    "DivisionByZeroError",
    "GammaError",
    "InputError",
    "InvalidDomainError",
    "InvalidPriceError",
    "InvalidRateError",
    "InvalidStrikeError",
    "InvalidTimeError",
    "InvalidVolatilityError",
    "MathError",
    "NumericalOverflowError",
    "PricingError",
    "RhoError",
    "ThetaError",
    "UnsupportedOperationError",
    "VegaError",
]
