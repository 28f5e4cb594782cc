"""Bump-and-reprice Greeks.

Centred finite differences on any pricer of the form
``pricer_func(spot, params) -> float``.  Used for barrier options, where no
closed-form Greeks are available, and handy for checking closed-form ones.

Every repricing sees a fresh copy of the parameters with exactly one field
bumped, so no perturbation leaks into another.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .core import Greeks, OptionParams

__all__ = ["BumpSizes", "DEFAULT_BUMPS", "numerical_greeks"]

logger = logging.getLogger(__name__)

Pricer = Callable[[float, OptionParams], float]


# ---------------------------------------------------------------------------
# Bump configuration
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BumpSizes:
    """Finite-difference step sizes.

    Spot steps are relative to spot with an absolute floor; all others are
    absolute.  ``time`` is a backward (one-sided) step in years.
    """
    spot: float = 0.001
    spot_floor: float = 1e-4
    spot3: float = 0.002
    spot3_floor: float = 2e-4
    time: float = 1.0 / 365.0
    vol: float = 0.001
    vol3: float = 0.002
    rate: float = 1e-4


DEFAULT_BUMPS = BumpSizes()


# ---------------------------------------------------------------------------
# Numerical Greeks
# ---------------------------------------------------------------------------
def _spot_stencil(pricer_func: Pricer, S: float, dS: float, params: OptionParams,
                  mid: float | None = None) -> tuple[float, float]:
    """Return (delta, gamma) from the three-point spot stencil."""
    if mid is None:
        mid = pricer_func(S, params)
    up = pricer_func(S + dS, params)
    dn = pricer_func(S - dS, params)
    delta = (up - dn) / (2.0 * dS)
    gamma = (up - 2.0 * mid + dn) / (dS * dS)
    return delta, gamma


def numerical_greeks(
    pricer_func: Pricer,
    spot: float,
    params: OptionParams,
    *,
    bumps: BumpSizes = DEFAULT_BUMPS,
) -> Greeks:
    """Compute Greeks via finite differences on an arbitrary pricer.

    Parameters
    ----------
    pricer_func : callable
        ``pricer_func(spot, params) -> float``, unscaled single-contract price.
    spot : float
        Current underlying price.
    params : OptionParams
        Leg description.
    bumps : BumpSizes
        Step sizes (default :data:`DEFAULT_BUMPS`).

    Returns
    -------
    Greeks
        ``price`` plus delta, gamma, speed, theta, vega, rho, zomma, color,
        vanna, volga and ultima.  ``payoff`` and ``time_value`` are left at 0
        for the caller.  Theta and color stay 0 when the remaining maturity
        is not longer than the time bump.
    """
    S = spot
    P0 = pricer_func(S, params)

    # --- Delta & Gamma (spot bump) ---
    dS = max(S * bumps.spot, bumps.spot_floor)
    delta, gamma = _spot_stencil(pricer_func, S, dS, params, P0)

    # --- Speed (wider spot bump, four-point stencil) ---
    h = max(S * bumps.spot3, bumps.spot3_floor)
    p2u = pricer_func(S + 2.0 * h, params)
    p1u = pricer_func(S + h, params)
    p1d = pricer_func(S - h, params)
    p2d = pricer_func(S - 2.0 * h, params)
    speed = (p2u - 2.0 * p1u + 2.0 * p1d - p2d) / (2.0 * h ** 3)

    # --- Theta & Color (backward time bump) ---
    dt = bumps.time
    theta = color = 0.0
    if params.time_to_maturity > dt:
        p_t = params.bumped("time_to_maturity", -dt)
        P_t = pricer_func(S, p_t)
        theta = (P_t - P0) / dt
        _, gamma_t = _spot_stencil(pricer_func, S, dS, p_t, P_t)
        color = (gamma_t - gamma) / dt
    else:
        logger.debug("T=%g within one time bump, theta/color left at 0",
                     params.time_to_maturity)

    # --- Vega, Volga, Zomma, Vanna (vol bump) ---
    dv = bumps.vol
    p_vu = params.bumped("volatility", dv)
    p_vd = params.bumped("volatility", -dv)
    P_vu = pricer_func(S, p_vu)
    P_vd = pricer_func(S, p_vd)
    vega = (P_vu - P_vd) / (2.0 * dv)
    volga = (P_vu - 2.0 * P0 + P_vd) / (dv * dv)

    delta_vu, gamma_vu = _spot_stencil(pricer_func, S, dS, p_vu, P_vu)
    delta_vd, gamma_vd = _spot_stencil(pricer_func, S, dS, p_vd, P_vd)
    zomma = (gamma_vu - gamma_vd) / (2.0 * dv)
    vanna = (delta_vu - delta_vd) / (2.0 * dv)

    # --- Ultima (wider vol bump, four-point stencil) ---
    dv3 = bumps.vol3
    v2u = pricer_func(S, params.bumped("volatility", 2.0 * dv3))
    v1u = pricer_func(S, params.bumped("volatility", dv3))
    v1d = pricer_func(S, params.bumped("volatility", -dv3))
    v2d = pricer_func(S, params.bumped("volatility", -2.0 * dv3))
    ultima = (v2u - 2.0 * v1u + 2.0 * v1d - v2d) / (2.0 * dv3 ** 3)

    # --- Rho (rate bump) ---
    dr = bumps.rate
    P_ru = pricer_func(S, params.bumped("risk_free_rate", dr))
    P_rd = pricer_func(S, params.bumped("risk_free_rate", -dr))
    rho = (P_ru - P_rd) / (2.0 * dr)

    return Greeks(
        price=float(P0),
        delta=float(delta),
        gamma=float(gamma),
        theta=float(theta),
        vega=float(vega),
        rho=float(rho),
        speed=float(speed),
        zomma=float(zomma),
        color=float(color),
        vanna=float(vanna),
        volga=float(volga),
        ultima=float(ultima),
    )
