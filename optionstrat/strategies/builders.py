"""Common Strategy Builders

Factory functions for standard multi-leg strategies. All legs of a
strategy share the underlying, volatility, rate and dividend yield; they
differ in style, side, strike and (for diagonals) expiration.
"""

from __future__ import annotations

from optionstrat.errors import InvalidStrikeError
from optionstrat.model import ExpirationDate, Option, OptionStyle, Positive, Side
from optionstrat.model.positive import Number
from optionstrat.strategies.strategy import Strategy


def _leg(
    style: OptionStyle,
    side: Side,
    strike: Number,
    expiration: ExpirationDate | Number,
    *,
    symbol: str,
    underlying_price: Number,
    implied_volatility: Number,
    risk_free_rate: Number,
    dividend_yield: Number,
    quantity: Number,
) -> Option:
    return Option(
        style=style,
        side=side,
        underlying_symbol=symbol,
        strike=strike,
        expiration=expiration,
        underlying_price=underlying_price,
        implied_volatility=implied_volatility,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        quantity=quantity,
    )


def iron_condor(
    symbol: str,
    underlying_price: Number,
    short_call_strike: Number,
    short_put_strike: Number,
    long_call_strike: Number,
    long_put_strike: Number,
    expiration: ExpirationDate | Number,
    implied_volatility: Number,
    risk_free_rate: Number,
    dividend_yield: Number = Positive.ZERO,
    quantity: Number = Positive.ONE,
) -> Strategy:
    """Create an iron condor strategy.

    Short put spread + Short call spread.
    Limited profit, limited risk, profits from low volatility.

    Legs are ordered: short call, short put, long call, long put.

    Args:
        symbol: Underlying ticker
        underlying_price: Current underlying price
        short_call_strike: Strike of the short call
        short_put_strike: Strike of the short put
        long_call_strike: Strike of the long call (highest)
        long_put_strike: Strike of the long put (lowest)
        expiration: Shared expiration (days or ExpirationDate)
        implied_volatility: Implied volatility (annualized)
        risk_free_rate: Risk-free rate (annualized)
        dividend_yield: Dividend yield (continuous)
        quantity: Number of condors

    Returns:
        Strategy with four legs

    Raises:
        InvalidStrikeError: If strikes are not long put < short put <= short call < long call
    """
    lp, sp = Positive(long_put_strike), Positive(short_put_strike)
    sc, lc = Positive(short_call_strike), Positive(long_call_strike)
    if not (lp < sp <= sc < lc):
        raise InvalidStrikeError(
            f"{lp}/{sp}/{sc}/{lc}",
            "expected long put < short put <= short call < long call",
        )

    common = dict(
        symbol=symbol,
        underlying_price=underlying_price,
        implied_volatility=implied_volatility,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        quantity=quantity,
    )
    legs = [
        _leg(OptionStyle.CALL, Side.SHORT, sc, expiration, **common),
        _leg(OptionStyle.PUT, Side.SHORT, sp, expiration, **common),
        _leg(OptionStyle.CALL, Side.LONG, lc, expiration, **common),
        _leg(OptionStyle.PUT, Side.LONG, lp, expiration, **common),
    ]
    return Strategy(name="Iron Condor", legs=tuple(legs))


def short_straddle(
    symbol: str,
    underlying_price: Number,
    strike: Number,
    expiration: ExpirationDate | Number,
    implied_volatility: Number,
    risk_free_rate: Number,
    dividend_yield: Number = Positive.ZERO,
    quantity: Number = Positive.ONE,
) -> Strategy:
    """Create a short straddle: short call + short put at the same strike.

    Legs are ordered: short call, short put.
    """
    common = dict(
        symbol=symbol,
        underlying_price=underlying_price,
        implied_volatility=implied_volatility,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        quantity=quantity,
    )
    legs = [
        _leg(OptionStyle.CALL, Side.SHORT, strike, expiration, **common),
        _leg(OptionStyle.PUT, Side.SHORT, strike, expiration, **common),
    ]
    return Strategy(name="Short Straddle", legs=tuple(legs))


def bull_call_spread(
    symbol: str,
    underlying_price: Number,
    lower_strike: Number,
    upper_strike: Number,
    expiration: ExpirationDate | Number,
    implied_volatility: Number,
    risk_free_rate: Number,
    dividend_yield: Number = Positive.ZERO,
    quantity: Number = Positive.ONE,
) -> Strategy:
    """Create a bull call spread strategy.

    Long call at lower strike + Short call at higher strike.
    Limited profit, limited risk.

    Raises:
        InvalidStrikeError: If the lower strike is not below the upper strike
    """
    if Positive(lower_strike) >= Positive(upper_strike):
        raise InvalidStrikeError(lower_strike, "lower strike must be less than upper strike")

    common = dict(
        symbol=symbol,
        underlying_price=underlying_price,
        implied_volatility=implied_volatility,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        quantity=quantity,
    )
    legs = [
        _leg(OptionStyle.CALL, Side.LONG, lower_strike, expiration, **common),
        _leg(OptionStyle.CALL, Side.SHORT, upper_strike, expiration, **common),
    ]
    return Strategy(name="Bull Call Spread", legs=tuple(legs))


def poor_mans_covered_call(
    symbol: str,
    underlying_price: Number,
    long_call_strike: Number,
    short_call_strike: Number,
    long_call_expiration: ExpirationDate | Number,
    short_call_expiration: ExpirationDate | Number,
    implied_volatility: Number,
    risk_free_rate: Number,
    dividend_yield: Number = Positive.ZERO,
    quantity: Number = Positive.ONE,
) -> Strategy:
    """Create a poor man's covered call (diagonal call spread).

    Long deep ITM call with a far expiration + Short OTM call with a near
    expiration. Legs are ordered: long call, short call.

    Raises:
        InvalidStrikeError: If the long strike is not below the short strike
    """
    if Positive(long_call_strike) >= Positive(short_call_strike):
        raise InvalidStrikeError(
            long_call_strike, "long call strike must be below the short call strike"
        )

    common = dict(
        symbol=symbol,
        underlying_price=underlying_price,
        implied_volatility=implied_volatility,
        risk_free_rate=risk_free_rate,
        dividend_yield=dividend_yield,
        quantity=quantity,
    )
    legs = [
        _leg(OptionStyle.CALL, Side.LONG, long_call_strike, long_call_expiration, **common),
        _leg(OptionStyle.CALL, Side.SHORT, short_call_strike, short_call_expiration, **common),
    ]
    return Strategy(name="Poor Man's Covered Call", legs=tuple(legs))
