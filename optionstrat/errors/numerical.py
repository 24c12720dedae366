"""Mathematical errors raised by the pricing models and solvers."""

from __future__ import annotations

from typing import Any

from .base import PricingError


class MathError(PricingError):
    """Base exception for numerical failures."""

    pass


class DivisionByZeroError(MathError):
    """Raised when a model would divide by zero (e.g. sigma*sqrt(T) == 0, vega == 0)."""

    def __init__(
        self,
        message: str = "Division by zero",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class NumericalOverflowError(MathError):
    """Raised when an intermediate value overflows the float range."""

    def __init__(
        self,
        message: str = "Numerical overflow",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class InvalidDomainError(MathError):
    """
    Raised when a value lies outside the valid input range of a function.

    Examples:
        - Negative value passed where a Positive is required
        - Risk-neutral probability outside [0, 1] on a lattice
        - Too few observations to estimate process parameters
    """

    def __init__(
        self,
        value: Any,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details["value"] = str(value)
        details["reason"] = reason
        super().__init__(f"Invalid domain value {value}: {reason}", details)
        self.value = value
        self.reason = reason


class ConvergenceFailureError(MathError):
    """
    Raised when an iterative method exhausts its iteration budget.

    Carries the iteration count and tolerance so callers can retry with
    different bounds. The library does not treat this as fatal.
    """

    def __init__(
        self,
        iterations: int,
        tolerance: float,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details["iterations"] = iterations
        details["tolerance"] = tolerance
        super().__init__(
            f"Failed to converge after {iterations} iterations (tolerance: {tolerance})",
            details,
        )
        self.iterations = iterations
        self.tolerance = tolerance
