"""Greek calculation errors."""

from __future__ import annotations

from decimal import DecimalException
from typing import Any

from .base import PricingError


class CalculationError(PricingError):
    """Base exception for failures while computing a price or a Greek."""

    pass


class _GreekError(CalculationError):
    greek = "Greek"

    def __init__(self, reason: str, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details["reason"] = reason
        super().__init__(f"{self.greek} calculation error: {reason}", details)
        self.reason = reason


class DeltaError(_GreekError):
    """Raised when delta cannot be computed."""

    greek = "Delta"


class GammaError(_GreekError):
    """Raised when gamma cannot be computed."""

    greek = "Gamma"


class ThetaError(_GreekError):
    """Raised when theta cannot be computed."""

    greek = "Theta"


class VegaError(_GreekError):
    """Raised when vega cannot be computed."""

    greek = "Vega"


class RhoError(_GreekError):
    """Raised when rho (or rho_d) cannot be computed."""

    greek = "Rho"


class DecimalArithmeticError(CalculationError):
    """Wraps a :class:`decimal.DecimalException` (precision, overflow, invalid op)."""

    def __init__(self, error: DecimalException, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details["decimal_error"] = type(error).__name__
        super().__init__(f"Decimal error: {error!r}", details)
        self.error = error


class UnsupportedOperationError(CalculationError):
    """
    Raised when a model or strategy does not support the requested operation.

    Examples:
        - Monte Carlo asked to price an American (early exercise) option
        - Delta adjustments requested from a strategy without that capability
    """

    def __init__(
        self,
        operation: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        details["operation"] = operation
        details["reason"] = reason
        super().__init__(f"Unsupported operation {operation}: {reason}", details)
        self.operation = operation
        self.reason = reason
