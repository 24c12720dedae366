"""Core Black-Scholes formulas.

Implements the fundamental Black-Scholes-Merton formulas on floats:
- d1 and d2 parameters
- European call pricing, put pricing via put-call parity

Mathematical foundations:
- S: Current underlying price
- K: Strike price
- T: Time to expiration (years)
- r: Risk-free interest rate (annualized)
- sigma: Implied volatility (annualized)
- q: Dividend yield (continuous)

The general formulas require sigma*sqrt(T) > 0. Zero time and zero
volatility are handled by the option-level calculator before reaching them.
"""

from math import exp, log, sqrt

from optionstrat.errors import DivisionByZeroError, InvalidDomainError, NumericalOverflowError
from optionstrat.pricing.utils import norm_cdf


def d1(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate d1 parameter for Black-Scholes formula.

    d1 = [ln(S/K) + (r - q + sigma^2/2)T] / (sigma * sqrt(T))

    Raises:
        DivisionByZeroError: If sigma * sqrt(T) is zero
        InvalidDomainError: If S or K is not positive, or T or sigma is negative
    """
    if S <= 0:
        raise InvalidDomainError(S, "underlying price must be positive for ln(S/K)")
    if K <= 0:
        raise InvalidDomainError(K, "strike must be positive for ln(S/K)")
    if T < 0:
        raise InvalidDomainError(T, "time to expiration must be non-negative")
    if sigma < 0:
        raise InvalidDomainError(sigma, "volatility must be non-negative")

    vol_sqrt_t = sigma * sqrt(T)
    if vol_sqrt_t == 0:
        raise DivisionByZeroError(
            "Division by zero: sigma * sqrt(T) is zero",
            details={"sigma": sigma, "T": T},
        )
    try:
        return (log(S / K) + (r - q + 0.5 * sigma**2) * T) / vol_sqrt_t
    except OverflowError as e:
        raise NumericalOverflowError(details={"S": S, "K": K, "T": T, "sigma": sigma}) from e


def d2(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate d2 parameter for Black-Scholes formula.

    d2 = d1 - sigma * sqrt(T)
    """
    return d1(S, K, T, r, sigma, q) - sigma * sqrt(T)


def call_price(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate European call option price using Black-Scholes formula.

    C = S*e^(-qT)*N(d1) - K*e^(-rT)*N(d2)
    """
    d_1 = d1(S, K, T, r, sigma, q)
    d_2 = d_1 - sigma * sqrt(T)
    return float(S * exp(-q * T) * norm_cdf(d_1) - K * exp(-r * T) * norm_cdf(d_2))


def put_price(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Calculate European put option price from put-call parity.

    P = C - S*e^(-qT) + K*e^(-rT)
    """
    call = call_price(S, K, T, r, sigma, q)
    put = call - S * exp(-q * T) + K * exp(-r * T)
    # Parity can leave tiny negative residue for deep ITM calls
    return float(max(put, 0.0))
