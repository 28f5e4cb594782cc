# optgreeks: Black-Scholes-Merton Greeks for vanilla and barrier options
# Public API

# Data model
from .core import (
    OptionType, Position, BarrierType, OptionParams, Greeks, GREEK_FIELDS,
)

# Distribution primitives
from .distributions import normal_pdf, normal_cdf

# Closed-form pricers
from .black_scholes import calculate_vanilla, intrinsic_value
from .barrier import barrier_price, is_active

# Bump-and-reprice Greeks
from .risk import BumpSizes, DEFAULT_BUMPS, numerical_greeks

# Dispatcher
from .engine import calculate, position_multiplier

# Strategies & scenarios
from .strategies import STRUCTURES, build_structure
from .scenarios import SURFACE_AXES, portfolio_greeks, spot_profile, scenario_surface

__all__ = [
    # Data model
    "OptionType", "Position", "BarrierType", "OptionParams", "Greeks",
    "GREEK_FIELDS",
    # Distributions
    "normal_pdf", "normal_cdf",
    # Pricers
    "calculate_vanilla", "intrinsic_value", "barrier_price", "is_active",
    # Numerical Greeks
    "BumpSizes", "DEFAULT_BUMPS", "numerical_greeks",
    # Dispatcher
    "calculate", "position_multiplier",
    # Strategies & scenarios
    "STRUCTURES", "build_structure",
    "SURFACE_AXES", "portfolio_greeks", "spot_profile", "scenario_surface",
]

__version__ = "0.1.0"
