"""Multi-leg strategies.

- Greeks aggregation across legs (side and quantity applied)
- Delta-neutrality analysis and hedge adjustment proposals
- Strategy container and common strategy builders
"""

from .aggregation import aggregate_greeks, individual_deltas, leg_greeks, signed_delta
from .builders import bull_call_spread, iron_condor, poor_mans_covered_call, short_straddle
from .delta_neutral import (
    DELTA_THRESHOLD,
    Adjustment,
    BuyOptions,
    DeltaNeutralityResult,
    LegDelta,
    NoAdjustmentNeeded,
    SellOptions,
    apply_adjustment,
    delta_adjustments,
    delta_neutrality,
    is_delta_neutral,
)
from .strategy import Strategy

__all__ = [
    # Aggregation
    "aggregate_greeks",
    "individual_deltas",
    "leg_greeks",
    "signed_delta",
    # Delta neutrality
    "DELTA_THRESHOLD",
    "Adjustment",
    "BuyOptions",
    "SellOptions",
    "NoAdjustmentNeeded",
    "DeltaNeutralityResult",
    "LegDelta",
    "apply_adjustment",
    "delta_adjustments",
    "delta_neutrality",
    "is_delta_neutral",
    # Strategies
    "Strategy",
    "bull_call_spread",
    "iron_condor",
    "poor_mans_covered_call",
    "short_straddle",
]
