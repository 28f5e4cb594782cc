"""Multi-leg strategy analytics.

Aggregates leg Greeks at a spot, sweeps them across a spot range, and
evaluates one metric over a 2-D (spot x market input) scenario grid.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np

from .core import GREEK_FIELDS, Greeks, OptionParams
from .engine import calculate

__all__ = [
    "SURFACE_AXES",
    "portfolio_greeks",
    "spot_profile",
    "scenario_surface",
]

# Default (min, max) for each surface axis.  ``None`` as max on maturity
# means "the legs' own maturity".
SURFACE_AXES: dict[str, tuple[float, Optional[float]]] = {
    "time_to_maturity": (0.05, None),
    "volatility": (0.05, 1.0),
    "risk_free_rate": (0.0, 0.20),
    "dividend_yield": (0.0, 0.10),
}


# ---------------------------------------------------------------------------
# Portfolio aggregation
# ---------------------------------------------------------------------------
def portfolio_greeks(spot: float, legs: Iterable[OptionParams]) -> Greeks:
    """Field-wise sum of the scaled Greeks of every leg at ``spot``."""
    return sum((calculate(spot, leg) for leg in legs), Greeks())


# ---------------------------------------------------------------------------
# Spot profile
# ---------------------------------------------------------------------------
def spot_profile(
    legs: Sequence[OptionParams],
    spot_min: float,
    spot_max: float,
    steps: int = 100,
) -> dict[str, np.ndarray]:
    """Aggregated Greeks across an evenly spaced spot grid.

    Parameters
    ----------
    legs : sequence of OptionParams
    spot_min, spot_max : float
        Inclusive grid bounds.
    steps : int
        Number of grid points (at least 2).

    Returns
    -------
    dict
        ``"spot_values"`` plus one array per Greek field, all of length
        ``max(steps, 2)``.
    """
    spots = np.linspace(spot_min, spot_max, max(int(steps), 2))
    out = {name: np.empty(len(spots)) for name in GREEK_FIELDS}

    for i, s in enumerate(spots):
        g = portfolio_greeks(float(s), legs)
        for name in GREEK_FIELDS:
            out[name][i] = getattr(g, name)

    return {"spot_values": spots, **out}


# ---------------------------------------------------------------------------
# Scenario surface
# ---------------------------------------------------------------------------
def _axis_range(variable, legs, axis_min, axis_max):
    lo, hi = SURFACE_AXES[variable]
    if hi is None:
        T = max((leg.time_to_maturity for leg in legs), default=0.0)
        hi = T if T > 0.1 else 2.0
    return (lo if axis_min is None else axis_min,
            hi if axis_max is None else axis_max)


def scenario_surface(
    legs: Sequence[OptionParams],
    spot_min: float,
    spot_max: float,
    variable: str,
    *,
    metric: str = "price",
    axis_min: Optional[float] = None,
    axis_max: Optional[float] = None,
    steps: int = 40,
) -> dict:
    """Evaluate one aggregated metric across a (spot x ``variable``) grid.

    ``variable`` overrides the same field on every leg, e.g. sweeping
    ``"volatility"`` reprices the whole strategy at each vol level.

    Returns
    -------
    dict
        ``"spot_values"`` (n), ``"axis_values"`` (n) and ``"values"`` with
        shape ``(n_axis, n_spot)``: row ``j`` is the spot slice at
        ``axis_values[j]``.
    """
    if variable not in SURFACE_AXES:
        raise ValueError(
            f"variable must be one of {sorted(SURFACE_AXES)}, got {variable!r}"
        )
    if metric not in GREEK_FIELDS:
        raise ValueError(f"metric must be one of {GREEK_FIELDS}, got {metric!r}")

    n = max(int(steps), 2)
    lo, hi = _axis_range(variable, legs, axis_min, axis_max)
    spots = np.linspace(spot_min, spot_max, n)
    axis = np.linspace(lo, hi, n)
    values = np.empty((n, n))

    for j, a in enumerate(axis):
        shifted = [leg.with_field(variable, float(a)) for leg in legs]
        for i, s in enumerate(spots):
            values[j, i] = getattr(portfolio_greeks(float(s), shifted), metric)

    return {
        "spot_values": spots,
        "axis_values": axis,
        "values": values,
    }
