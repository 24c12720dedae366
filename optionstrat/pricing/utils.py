"""Shared helpers for the pricing models.

- Standard normal pdf / cdf
- Discount factors
- Random source resolution
- Simulated return series used to calibrate the Telegraph process
"""

from __future__ import annotations

from math import exp

import numpy as np
from scipy import stats

from optionstrat.errors import InvalidDomainError, NumericalOverflowError


def norm_pdf(x: float) -> float:
    """Standard normal probability density function.

    phi(x) = (1/sqrt(2*pi)) * e^(-x^2/2)
    """
    return float(stats.norm.pdf(x))


def norm_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    return float(stats.norm.cdf(x))


def discount_factor(rate: float, years: float) -> float:
    """Continuously compounded discount factor e^(-rT)."""
    try:
        return exp(-rate * years)
    except OverflowError as e:
        raise NumericalOverflowError(details={"rate": rate, "years": years}) from e


def resolve_rng(
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> np.random.Generator:
    """Return the injected generator, or a new one built from ``seed``.

    Passing both is ambiguous and rejected.
    """
    if rng is not None and seed is not None:
        raise InvalidDomainError(seed, "pass either rng or seed, not both")
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def simulate_returns(
    mean: float,
    std_dev: float,
    length: int,
    time_step: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw ``length`` normally distributed returns scaled to ``time_step``.

    Each return is ``mean * dt + std_dev * sqrt(dt) * Z``.
    """
    if length < 1:
        raise InvalidDomainError(length, "length must be at least 1")
    if std_dev < 0:
        raise InvalidDomainError(std_dev, "standard deviation must be non-negative")
    if time_step <= 0:
        raise InvalidDomainError(time_step, "time step must be positive")
    z = rng.standard_normal(length)
    return mean * time_step + std_dev * np.sqrt(time_step) * z
