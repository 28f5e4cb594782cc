"""Closed-form Black-Scholes-Merton pricing and Greeks for European options.

All Greeks are per unit of the underlying input:

* vega, vanna, volga, ultima are per 1.00 of volatility (not per 1%);
* rho is per 1.00 of rate;
* theta and color are derivatives in calendar time (per year), so a long
  option typically has negative theta.

Results are for a single long contract; position and quantity are applied
by :func:`optgreeks.engine.calculate`.
"""

from __future__ import annotations

import math

from .core import Greeks, OptionParams
from .distributions import normal_cdf, normal_pdf

__all__ = ["calculate_vanilla", "intrinsic_value"]


def intrinsic_value(spot: float, params: OptionParams) -> float:
    if params.is_call:
        return max(spot - params.strike, 0.0)
    return max(params.strike - spot, 0.0)


def _d1_d2(S, K, T, r, q, sigma):
    rt = sigma * math.sqrt(T)
    d1 = (math.log(S / K) + (r - q + 0.5 * sigma * sigma) * T) / rt
    d2 = d1 - rt
    return d1, d2


def _expired(spot: float, params: OptionParams) -> Greeks:
    payoff = intrinsic_value(spot, params)
    if params.is_call:
        delta = 1.0 if spot > params.strike else 0.0
    else:
        delta = -1.0 if spot < params.strike else 0.0
    return Greeks(price=payoff, delta=delta, payoff=payoff)


def calculate_vanilla(spot: float, params: OptionParams) -> Greeks:
    """Price and Greeks of a European call/put, ignoring any barrier.

    Expired options (``T <= 0``) and zero-vol options collapse to intrinsic
    value with a step delta and every other sensitivity zero.
    """
    S = spot
    K = params.strike
    T = params.time_to_maturity
    sigma = params.volatility
    r = params.risk_free_rate
    q = params.dividend_yield

    if T <= 0.0 or sigma <= 0.0:
        return _expired(spot, params)

    d1, d2 = _d1_d2(S, K, T, r, q, sigma)
    sqrt_T = math.sqrt(T)
    srt = sigma * sqrt_T
    n_d1 = float(normal_pdf(d1))
    disc_r = math.exp(-r * T)
    disc_q = math.exp(-q * T)

    # Common to calls and puts
    gamma = disc_q * n_d1 / (S * srt)
    vega = S * disc_q * n_d1 * sqrt_T
    speed = -gamma / S * (d1 / srt + 1.0)
    zomma = gamma * (d1 * d2 - 1.0) / sigma
    # dGamma/dt: the bracket below is -dGamma/dT
    color = disc_q * n_d1 / (2.0 * S * T * srt) * (
        2.0 * q * T + 1.0 + (2.0 * (r - q) * T - d2 * srt) * d1 / srt
    )
    vanna = -disc_q * n_d1 * d2 / sigma
    volga = vega * d1 * d2 / sigma
    ultima = -vega / (sigma * sigma) * (
        d1 * d2 * (1.0 - d1 * d2) + d1 * d1 + d2 * d2
    )
    decay = -S * disc_q * n_d1 * sigma / (2.0 * sqrt_T)

    if params.is_call:
        N_d1 = float(normal_cdf(d1))
        N_d2 = float(normal_cdf(d2))
        price = disc_q * S * N_d1 - disc_r * K * N_d2
        delta = disc_q * N_d1
        theta = decay - r * K * disc_r * N_d2 + q * S * disc_q * N_d1
        rho = K * T * disc_r * N_d2
    else:
        N_md1 = float(normal_cdf(-d1))
        N_md2 = float(normal_cdf(-d2))
        price = disc_r * K * N_md2 - disc_q * S * N_md1
        delta = -disc_q * N_md1
        theta = decay + r * K * disc_r * N_md2 - q * S * disc_q * N_md1
        rho = -K * T * disc_r * N_md2

    payoff = intrinsic_value(S, params)
    return Greeks(
        price=price,
        delta=delta,
        gamma=gamma,
        theta=theta,
        vega=vega,
        rho=rho,
        payoff=payoff,
        time_value=price - payoff,
        speed=speed,
        zomma=zomma,
        color=color,
        vanna=vanna,
        volga=volga,
        ultima=ultima,
    )
