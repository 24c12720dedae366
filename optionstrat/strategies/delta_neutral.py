"""Delta-Neutrality Adjustment Engine

A strategy is delta neutral when ``|net delta| <= threshold``. Otherwise
the engine proposes one corrective trade per leg, in leg order, each of
which alone would bring the net delta back to zero:

    qty = |net_delta| / |unit_delta_of_leg|

If the leg's per-contract delta (times its side sign) points against the
net delta, adding to the leg reduces the exposure (``BuyOptions`` on the leg's side). If it points the
same way, shrinking the leg does (``SellOptions`` on the leg's side).

The proposals are alternatives, not a combined order: executing any single
one leaves the strategy delta neutral. The set is deterministic and not
claimed to be optimal.

References:
- Taleb, N. N. (1997). Dynamic Hedging: Managing Vanilla and Exotic Options
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence, Union

from optionstrat.config import get_config
from optionstrat.errors import InvalidDomainError, InvalidStrikeError
from optionstrat.model import Option, OptionStyle, Positive, Side
from optionstrat.pricing.black_scholes import greeks_black_scholes
from optionstrat.strategies.aggregation import signed_delta

logger = logging.getLogger(__name__)

DELTA_THRESHOLD = Decimal("0.0001")
"""Default |net delta| tolerance for delta neutrality."""

# Legs with a smaller per-contract delta cannot hedge anything
_MIN_UNIT_DELTA = Decimal("1e-10")


# ============================================================================
# Result Types
# ============================================================================


@dataclass(frozen=True)
class LegDelta:
    """Signed delta contribution of one strategy leg.

    Attributes:
        index: Position of the leg in the strategy
        strike: Strike of the leg
        style: Call or put
        side: Long or short
        delta: unit delta x quantity x side sign
    """

    index: int
    strike: Positive
    style: OptionStyle
    side: Side
    delta: Decimal


@dataclass(frozen=True)
class DeltaNeutralityResult:
    """Net delta of a strategy and its per-leg breakdown."""

    net_delta: Decimal
    individual_deltas: tuple[LegDelta, ...]

    def is_neutral(self, threshold: Decimal | None = None) -> bool:
        limit = _threshold(threshold)
        return abs(self.net_delta) <= limit


@dataclass(frozen=True)
class BuyOptions:
    """Increase the position on ``side`` at ``strike`` by ``quantity`` contracts."""

    quantity: Positive
    strike: Positive
    option_style: OptionStyle
    side: Side


@dataclass(frozen=True)
class SellOptions:
    """Reduce the position on ``side`` at ``strike`` by ``quantity`` contracts."""

    quantity: Positive
    strike: Positive
    option_style: OptionStyle
    side: Side


@dataclass(frozen=True)
class NoAdjustmentNeeded:
    """The strategy is already delta neutral."""


Adjustment = Union[BuyOptions, SellOptions, NoAdjustmentNeeded]


# ============================================================================
# Engine
# ============================================================================


def _threshold(threshold: Decimal | float | None) -> Decimal:
    if threshold is None:
        return get_config().delta_threshold
    value = Decimal(repr(threshold)) if isinstance(threshold, float) else Decimal(threshold)
    if value < 0:
        raise InvalidDomainError(threshold, "delta threshold must be non-negative")
    return value


def delta_neutrality(legs: Sequence[Option]) -> DeltaNeutralityResult:
    """Compute the net delta and the signed contribution of every leg."""
    deltas = tuple(
        LegDelta(
            index=i,
            strike=leg.strike,
            style=leg.style,
            side=leg.side,
            delta=signed_delta(leg),
        )
        for i, leg in enumerate(legs)
    )
    net = sum((d.delta for d in deltas), Decimal(0))
    return DeltaNeutralityResult(net_delta=net, individual_deltas=deltas)


def is_delta_neutral(legs: Sequence[Option], threshold: Decimal | float | None = None) -> bool:
    """True when ``|net delta| <= threshold``."""
    return delta_neutrality(legs).is_neutral(_threshold(threshold))


def delta_adjustments(
    legs: Sequence[Option],
    threshold: Decimal | float | None = None,
) -> list[Adjustment]:
    """Propose per-leg trades that bring the net delta to zero.

    Args:
        legs: Strategy legs
        threshold: Neutrality tolerance (configured default when omitted)

    Returns:
        ``[NoAdjustmentNeeded()]`` when already neutral, otherwise one
        ``BuyOptions`` / ``SellOptions`` per usable leg, in leg order
    """
    limit = _threshold(threshold)
    result = delta_neutrality(legs)
    net = result.net_delta
    if abs(net) <= limit:
        return [NoAdjustmentNeeded()]

    adjustments: list[Adjustment] = []
    for leg, contribution in zip(legs, result.individual_deltas):
        unit_delta = greeks_black_scholes(leg).delta * leg.side.sign
        if abs(unit_delta) < _MIN_UNIT_DELTA:
            logger.debug(
                "Skipping leg %d (%s): unit delta %s too small to hedge",
                contribution.index,
                leg,
                unit_delta,
            )
            continue

        quantity = Positive(abs(net) / abs(unit_delta))
        # Per-contract direction; a zero-quantity leg contributes no delta
        opposes_net = (unit_delta > 0) != (net > 0)
        trade = BuyOptions if opposes_net else SellOptions
        adjustments.append(
            trade(
                quantity=quantity,
                strike=leg.strike,
                option_style=leg.style,
                side=leg.side,
            )
        )

    logger.debug("Net delta %s: proposed %d adjustments", net, len(adjustments))
    return adjustments


def apply_adjustment(legs: Sequence[Option], adjustment: Adjustment) -> list[Option]:
    """Return new legs with ``adjustment`` executed against the matching leg.

    The first leg with the same strike, style and side is resized.

    Raises:
        InvalidStrikeError: If no leg matches the adjustment
        InvalidDomainError: If a sale would leave a negative quantity
    """
    if isinstance(adjustment, NoAdjustmentNeeded):
        return list(legs)
    if not isinstance(adjustment, (BuyOptions, SellOptions)):
        raise InvalidDomainError(adjustment, "unknown adjustment type")

    updated = list(legs)
    for i, leg in enumerate(updated):
        if (
            leg.strike == adjustment.strike
            and leg.style is adjustment.option_style
            and leg.side is adjustment.side
        ):
            if isinstance(adjustment, BuyOptions):
                quantity = leg.quantity + adjustment.quantity
            else:
                quantity = leg.quantity - adjustment.quantity
            updated[i] = leg.with_updates(quantity=quantity)
            return updated

    raise InvalidStrikeError(
        adjustment.strike,
        f"no {adjustment.side.value} {adjustment.option_style.value} leg at this strike",
    )
