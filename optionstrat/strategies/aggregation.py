"""Multi-Leg Greeks Aggregation

Strategy Greeks are sums of per-leg Greeks. Each leg contributes its
per-contract Black-Scholes Greeks scaled by quantity:

    Delta_total = sum(delta_i * qty_i * side_i)
    Greek_total = sum(greek_i * qty_i)            (gamma, theta, vega, rho, rho_d)

Delta carries the position direction (long = +1, short = -1) so the net
delta reads as share-equivalent exposure. The other Greeks are reported
unsigned by default; pass ``sign_all=True`` to apply the direction to every
Greek as a portfolio risk report would.

Addition is commutative, so the result does not depend on leg order.

References:
- McMillan, L. G. (2012). Options as a Strategic Investment (5th ed.)
- Natenberg, S. (2015). Option Volatility and Pricing (2nd ed.)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from optionstrat.model import Greeks, Option
from optionstrat.pricing.black_scholes import greeks_black_scholes


def leg_greeks(leg: Option, *, sign_all: bool = False) -> Greeks:
    """Greeks of one leg adjusted for quantity and direction.

    Args:
        leg: Option leg
        sign_all: Apply the side sign to every Greek, not only delta

    Returns:
        Greeks contribution of the leg
    """
    unit = greeks_black_scholes(leg)
    quantity = leg.quantity.value
    sign = Decimal(leg.side.sign)
    if sign_all:
        return unit.scale(quantity * sign)
    scaled = unit.scale(quantity)
    return Greeks(
        delta=scaled.delta * sign,
        gamma=scaled.gamma,
        theta=scaled.theta,
        vega=scaled.vega,
        rho=scaled.rho,
        rho_d=scaled.rho_d,
    )


def aggregate_greeks(legs: Sequence[Option], *, sign_all: bool = False) -> Greeks:
    """Compute aggregate Greeks for a set of legs.

    Args:
        legs: Strategy legs (any order)
        sign_all: Apply the side sign to every Greek, not only delta

    Returns:
        Summed Greeks (zero for an empty sequence)
    """
    total = Greeks.zero()
    for leg in legs:
        total = total + leg_greeks(leg, sign_all=sign_all)
    return total


def signed_delta(leg: Option) -> Decimal:
    """Delta contribution of one leg: unit delta x quantity x side sign."""
    return greeks_black_scholes(leg).delta * leg.quantity.value * leg.side.sign


def individual_deltas(legs: Sequence[Option]) -> list[Decimal]:
    """Signed delta contribution of each leg, in leg order."""
    return [signed_delta(leg) for leg in legs]
