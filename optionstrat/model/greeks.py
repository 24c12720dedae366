"""Greeks value type."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from optionstrat.model.positive import Number, to_decimal


@dataclass(frozen=True)
class Greeks:
    """Container for first-order Greeks.

    Attributes:
        delta: Rate of change of option price w.r.t. underlying price
        gamma: Rate of change of delta w.r.t. underlying price
        theta: Rate of change of option price w.r.t. time (per calendar day)
        vega: Rate of change of option price w.r.t. volatility (per 1% change)
        rho: Rate of change of option price w.r.t. interest rate (per 1% change)
        rho_d: Rate of change of option price w.r.t. dividend yield (per 1% change)
    """

    delta: Decimal
    gamma: Decimal
    theta: Decimal
    vega: Decimal
    rho: Decimal
    rho_d: Decimal

    @classmethod
    def zero(cls) -> Greeks:
        z = Decimal(0)
        return cls(delta=z, gamma=z, theta=z, vega=z, rho=z, rho_d=z)

    @classmethod
    def from_floats(
        cls,
        delta: float,
        gamma: float,
        theta: float,
        vega: float,
        rho: float,
        rho_d: float,
    ) -> Greeks:
        return cls(
            delta=to_decimal(float(delta)),
            gamma=to_decimal(float(gamma)),
            theta=to_decimal(float(theta)),
            vega=to_decimal(float(vega)),
            rho=to_decimal(float(rho)),
            rho_d=to_decimal(float(rho_d)),
        )

    def scale(self, factor: Number) -> Greeks:
        """Return every Greek multiplied by ``factor`` (may be negative)."""
        f = factor if isinstance(factor, Decimal) else to_decimal(factor)
        return Greeks(
            delta=self.delta * f,
            gamma=self.gamma * f,
            theta=self.theta * f,
            vega=self.vega * f,
            rho=self.rho * f,
            rho_d=self.rho_d * f,
        )

    def __add__(self, other: Greeks) -> Greeks:
        if not isinstance(other, Greeks):
            return NotImplemented
        return Greeks(
            delta=self.delta + other.delta,
            gamma=self.gamma + other.gamma,
            theta=self.theta + other.theta,
            vega=self.vega + other.vega,
            rho=self.rho + other.rho,
            rho_d=self.rho_d + other.rho_d,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary of strings for serialization."""
        return {
            "delta": str(self.delta),
            "gamma": str(self.gamma),
            "theta": str(self.theta),
            "vega": str(self.vega),
            "rho": str(self.rho),
            "rho_d": str(self.rho_d),
        }
