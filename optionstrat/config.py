"""
Pricing Configuration

Process-wide, read-only constants for the pricing engine: day-count
convention, default lattice and simulation sizes, solver limits and the
delta-neutrality tolerance. Values can be overridden from the environment
with the ``OPTIONSTRAT_`` prefix, e.g. ``OPTIONSTRAT_BINOMIAL_STEPS=500``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from decimal import Decimal

logger = logging.getLogger(__name__)

ENV_PREFIX = "OPTIONSTRAT_"


@dataclass(frozen=True)
class PricingConfig:
    """Configuration for pricers, solvers and the delta-neutrality engine."""

    # Conventions
    days_in_year: int = 365
    """Calendar days per year used to convert day counts to year fractions."""

    # Lattice
    binomial_steps: int = 200
    """Default number of binomial tree steps."""

    # Simulation
    monte_carlo_paths: int = 10_000
    """Default number of Monte Carlo paths."""

    monte_carlo_steps: int = 50
    """Default number of time steps per Monte Carlo path."""

    monte_carlo_batch_size: int = 10_000
    """Paths simulated per vectorized batch."""

    telegraph_steps: int = 252
    """Default number of time steps per Telegraph path."""

    telegraph_sample_size: int = 100
    """Length of the simulated return series used to estimate missing rates."""

    # Implied volatility
    iv_tolerance: float = 1e-6
    """Absolute price tolerance for the implied volatility solver."""

    iv_max_iterations: int = 100
    """Hard iteration cap for the implied volatility solver."""

    iv_min_vol: float = 1e-4
    """Lower volatility bound for bracketing methods."""

    iv_max_vol: float = 5.0
    """Upper volatility bound for bracketing methods."""

    iv_initial_guess: float = 0.3
    """Starting volatility for Newton-Raphson."""

    vega_epsilon: float = 1e-10
    """Vega below this value stops Newton-Raphson."""

    # Delta neutrality
    delta_threshold: Decimal = Decimal("0.0001")
    """|net delta| at or below this value counts as delta neutral."""

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> PricingConfig:
        """Build a config from defaults overridden by environment variables."""
        overrides: dict[str, object] = {}
        for f in fields(cls):
            raw = os.getenv(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            default = getattr(cls, f.name)
            try:
                overrides[f.name] = type(default)(raw)
            except (ArithmeticError, ValueError) as e:
                raise ValueError(f"Invalid value for {prefix}{f.name.upper()}: {raw!r}") from e
            logger.debug("Config override %s=%s", f.name, raw)
        return cls(**overrides)


DEFAULT_CONFIG = PricingConfig.from_env()


def get_config() -> PricingConfig:
    """Return the process-wide pricing configuration."""
    return DEFAULT_CONFIG
