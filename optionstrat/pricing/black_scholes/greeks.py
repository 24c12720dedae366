"""First-order Black-Scholes Greeks on floats.

Units follow desk conventions:
- theta per calendar day
- vega per 1% (0.01) volatility change
- rho and rho_d per 1% (0.01) rate / dividend yield change

All functions share the (S, K, T, r, sigma, q) signature of
:mod:`optionstrat.pricing.black_scholes.formulas`.
"""

from math import exp, sqrt

from optionstrat.config import get_config
from optionstrat.pricing.black_scholes.formulas import d1, d2
from optionstrat.pricing.utils import norm_cdf, norm_pdf


def days_per_year() -> float:
    """Calendar days per year from the active configuration."""
    return float(get_config().days_in_year)


# ============================================================================
# Delta (dV/dS)
# ============================================================================


def call_delta(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Call delta: e^(-qT) * N(d1), in [0, 1]."""
    return float(exp(-q * T) * norm_cdf(d1(S, K, T, r, sigma, q)))


def put_delta(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Put delta: -e^(-qT) * N(-d1), in [-1, 0]."""
    return float(-exp(-q * T) * norm_cdf(-d1(S, K, T, r, sigma, q)))


# ============================================================================
# Gamma and Vega (identical for calls and puts)
# ============================================================================


def gamma(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Gamma: e^(-qT) * phi(d1) / (S * sigma * sqrt(T))."""
    d_1 = d1(S, K, T, r, sigma, q)
    return float(exp(-q * T) * norm_pdf(d_1) / (S * sigma * sqrt(T)))


def vega(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Vega per 1% volatility change: S * e^(-qT) * phi(d1) * sqrt(T) / 100."""
    return raw_vega(S, K, T, r, sigma, q) / 100.0


def raw_vega(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Vega per unit volatility (dV/dsigma), as needed by Newton-Raphson."""
    d_1 = d1(S, K, T, r, sigma, q)
    return float(S * exp(-q * T) * norm_pdf(d_1) * sqrt(T))


# ============================================================================
# Theta (dV/dt)
# ============================================================================


def _theta_decay(S: float, K: float, T: float, r: float, sigma: float, q: float) -> float:
    d_1 = d1(S, K, T, r, sigma, q)
    return -(S * norm_pdf(d_1) * sigma * exp(-q * T)) / (2 * sqrt(T))


def call_theta(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Call theta per calendar day.

    -S*phi(d1)*sigma*e^(-qT)/(2*sqrt(T)) - r*K*e^(-rT)*N(d2) + q*S*e^(-qT)*N(d1)
    """
    d_1 = d1(S, K, T, r, sigma, q)
    d_2 = d_1 - sigma * sqrt(T)
    annual = (
        _theta_decay(S, K, T, r, sigma, q)
        - r * K * exp(-r * T) * norm_cdf(d_2)
        + q * S * exp(-q * T) * norm_cdf(d_1)
    )
    return float(annual / days_per_year())


def put_theta(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Put theta per calendar day.

    -S*phi(d1)*sigma*e^(-qT)/(2*sqrt(T)) + r*K*e^(-rT)*N(-d2) - q*S*e^(-qT)*N(-d1)
    """
    d_1 = d1(S, K, T, r, sigma, q)
    d_2 = d_1 - sigma * sqrt(T)
    annual = (
        _theta_decay(S, K, T, r, sigma, q)
        + r * K * exp(-r * T) * norm_cdf(-d_2)
        - q * S * exp(-q * T) * norm_cdf(-d_1)
    )
    return float(annual / days_per_year())


# ============================================================================
# Rho (dV/dr) and dividend rho (dV/dq)
# ============================================================================


def call_rho(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Call rho per 1%: K * T * e^(-rT) * N(d2) / 100."""
    d_2 = d2(S, K, T, r, sigma, q)
    return float(K * T * exp(-r * T) * norm_cdf(d_2) / 100.0)


def put_rho(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Put rho per 1%: -K * T * e^(-rT) * N(-d2) / 100."""
    d_2 = d2(S, K, T, r, sigma, q)
    return float(-K * T * exp(-r * T) * norm_cdf(-d_2) / 100.0)


def call_rho_d(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Call dividend rho per 1%: -T * S * e^(-qT) * N(d1) / 100."""
    d_1 = d1(S, K, T, r, sigma, q)
    return float(-T * S * exp(-q * T) * norm_cdf(d_1) / 100.0)


def put_rho_d(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """Put dividend rho per 1%: T * S * e^(-qT) * N(-d1) / 100."""
    d_1 = d1(S, K, T, r, sigma, q)
    return float(T * S * exp(-q * T) * norm_cdf(-d_1) / 100.0)
