"""Top-level pricing entry point.

Vanilla legs get closed-form Greeks; barrier legs get a closed-form price
and bump-and-reprice Greeks.  Either way the result is scaled by the
signed quantity of the position.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .barrier import barrier_price, is_active
from .black_scholes import calculate_vanilla, intrinsic_value
from .core import Greeks, OptionParams
from .risk import DEFAULT_BUMPS, BumpSizes, numerical_greeks

__all__ = ["calculate", "position_multiplier"]

logger = logging.getLogger(__name__)


def position_multiplier(params: OptionParams) -> float:
    """Signed contract count: ``-quantity`` for shorts, ``+quantity`` otherwise."""
    return params.position.sign * params.quantity


def calculate(
    spot: float,
    params: OptionParams,
    *,
    bumps: BumpSizes = DEFAULT_BUMPS,
) -> Greeks:
    """Value and Greeks of ``params.quantity`` contracts at ``spot``.

    Parameters
    ----------
    spot : float
        Current underlying price.
    params : OptionParams
        Leg description.
    bumps : BumpSizes
        Finite-difference steps, only used for barrier legs.

    Returns
    -------
    Greeks
        Every field scaled by :func:`position_multiplier`.
    """
    if not params.has_barrier:
        greeks = calculate_vanilla(spot, params)
    else:
        logger.debug("Barrier leg %s@%g: finite-difference Greeks",
                     params.barrier_type.value, params.barrier_level)
        greeks = numerical_greeks(barrier_price, spot, params, bumps=bumps)
        payoff = intrinsic_value(spot, params) if is_active(spot, params) else 0.0
        greeks = replace(greeks, payoff=payoff, time_value=greeks.price - payoff)

    return greeks.scaled(position_multiplier(params))
