"""Option strategy: an ordered, named collection of legs."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from optionstrat.errors import InvalidDomainError, UnsupportedOperationError
from optionstrat.model import Greeks, Option
from optionstrat.pricing.black_scholes import price_black_scholes
from optionstrat.strategies.aggregation import aggregate_greeks
from optionstrat.strategies.delta_neutral import (
    Adjustment,
    DeltaNeutralityResult,
    apply_adjustment,
    delta_adjustments,
    delta_neutrality,
    is_delta_neutral,
)


@dataclass(frozen=True)
class Strategy:
    """Multi-leg option strategy.

    Attributes:
        name: Strategy name (e.g., "Iron Condor")
        legs: Legs in a fixed order; adjustments are proposed in this order
        adjustable: Whether the strategy supports delta adjustments
    """

    name: str
    legs: tuple[Option, ...]
    adjustable: bool = True

    def __post_init__(self) -> None:
        """Validate strategy."""
        object.__setattr__(self, "legs", tuple(self.legs))
        if not self.legs:
            raise InvalidDomainError(self.name, "strategy must have at least one leg")

    def greeks(self, *, sign_all: bool = False) -> Greeks:
        """Aggregate Greeks of all legs."""
        return aggregate_greeks(self.legs, sign_all=sign_all)

    def net_premium(self) -> Decimal:
        """Black-Scholes value of the position (positive = debit, negative = credit)."""
        return sum(
            (price_black_scholes(leg) * leg.quantity.value * leg.side.sign for leg in self.legs),
            Decimal(0),
        )

    def payoff(self, spot: Decimal | float) -> Decimal:
        """Expiration payoff of the position at ``spot`` (premiums excluded)."""
        return sum((leg.payoff(spot) for leg in self.legs), Decimal(0))

    def delta_neutrality(self) -> DeltaNeutralityResult:
        return delta_neutrality(self.legs)

    def is_delta_neutral(self, threshold: Decimal | float | None = None) -> bool:
        return is_delta_neutral(self.legs, threshold)

    def supports_delta_adjustments(self) -> bool:
        return self.adjustable

    def delta_adjustments(self, threshold: Decimal | float | None = None) -> list[Adjustment]:
        """Propose delta hedges for this strategy.

        Raises:
            UnsupportedOperationError: If the strategy is not adjustable
        """
        if not self.supports_delta_adjustments():
            raise UnsupportedOperationError(
                "delta_adjustments", f"strategy {self.name!r} does not support delta adjustments"
            )
        return delta_adjustments(self.legs, threshold)

    def apply_adjustment(self, adjustment: Adjustment) -> Strategy:
        """Return a new strategy with ``adjustment`` executed."""
        if not self.supports_delta_adjustments():
            raise UnsupportedOperationError(
                "apply_adjustment", f"strategy {self.name!r} does not support delta adjustments"
            )
        return Strategy(
            name=self.name,
            legs=tuple(apply_adjustment(self.legs, adjustment)),
            adjustable=self.adjustable,
        )

    @classmethod
    def from_legs(cls, name: str, legs: Sequence[Option], adjustable: bool = True) -> Strategy:
        return cls(name=name, legs=tuple(legs), adjustable=adjustable)
