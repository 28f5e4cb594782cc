# barrier.py
# Analytical single-barrier European options (Merton 1973, Reiner-Rubinstein
# 1991) with continuous monitoring and an optional cash rebate.
#
# The knock-out leg is priced in closed form; knock-ins come from in/out
# parity against the vanilla pricer, so the two always sum to vanilla.

from __future__ import annotations

import math

import numpy as np
from scipy.special import log_ndtr

from .black_scholes import calculate_vanilla, intrinsic_value
from .core import BarrierType, OptionParams
from .distributions import normal_cdf

__all__ = ["barrier_price", "is_active"]


# ---------------------------------------------------------------------------
# Barrier state at the current spot
# ---------------------------------------------------------------------------
def _breached(spot: float, params: OptionParams) -> bool:
    """True once spot has touched the barrier from the monitored side."""
    if params.barrier_type.is_up:
        return spot >= params.barrier_level
    return spot <= params.barrier_level


def is_active(spot: float, params: OptionParams) -> bool:
    """Whether the option currently pays its vanilla intrinsic value.

    Knock-outs are active until breached, knock-ins only once breached.
    """
    if not params.has_barrier:
        return True
    if params.barrier_type.is_knock_in:
        return _breached(spot, params)
    return not _breached(spot, params)


def _vanilla_price(spot: float, params: OptionParams) -> float:
    return calculate_vanilla(spot, params.with_field("barrier_type", BarrierType.NONE)).price


def _expired_value(spot: float, params: OptionParams) -> float:
    intrinsic = intrinsic_value(spot, params)
    if is_active(spot, params):
        return intrinsic
    return params.rebate


def _zero_spot_value(params: OptionParams) -> float:
    """Limit as spot -> 0, where the underlying stays at zero until expiry."""
    disc_r = math.exp(-params.risk_free_rate * params.time_to_maturity)
    vanilla = 0.0 if params.is_call else params.strike * disc_r
    knock_in = params.barrier_type.is_knock_in
    if params.barrier_type.is_up:
        # an up barrier is never reached
        return params.rebate * disc_r if knock_in else vanilla
    return vanilla if knock_in else params.rebate


# ---------------------------------------------------------------------------
# Closed-form knock-out terms
# ---------------------------------------------------------------------------
def _powered_cdf(log_ratio: float, power: float, x: float) -> float:
    """``(H/S)**power * N(x)`` evaluated in log space.

    The power grows like 1/sigma**2, so the direct product overflows for low
    vol while the CDF factor underflows to zero.
    """
    return float(np.exp(power * log_ratio + log_ndtr(x)))


def _knock_out_terms(S, K, H, T, r, q, sigma, phi, eta):
    """Return the A, B, C, D building blocks of the barrier formulas.

    ``phi`` is +1 for calls / -1 for puts, ``eta`` +1 for down / -1 for up
    barriers.  A is the vanilla price; C and D are the reflected terms.
    """
    sqrt_T = math.sqrt(T)
    srt = sigma * sqrt_T
    mu = (r - q - 0.5 * sigma * sigma) / (sigma * sigma)
    drift = (1.0 + mu) * srt

    x1 = math.log(S / K) / srt + drift
    x2 = math.log(S / H) / srt + drift
    y1 = math.log(H * H / (S * K)) / srt + drift
    y2 = math.log(H / S) / srt + drift

    disc_r = math.exp(-r * T)
    disc_q = math.exp(-q * T)
    log_hs = math.log(H / S)
    N = normal_cdf
    R = _powered_cdf

    A = phi * S * disc_q * N(phi * x1) - phi * K * disc_r * N(phi * (x1 - srt))
    B = phi * S * disc_q * N(phi * x2) - phi * K * disc_r * N(phi * (x2 - srt))
    C = (phi * S * disc_q * R(log_hs, 2.0 * (mu + 1.0), eta * y1)
         - phi * K * disc_r * R(log_hs, 2.0 * mu, eta * (y1 - srt)))
    D = (phi * S * disc_q * R(log_hs, 2.0 * (mu + 1.0), eta * y2)
         - phi * K * disc_r * R(log_hs, 2.0 * mu, eta * (y2 - srt)))
    return float(A), float(B), float(C), float(D)


def _rebate_at_hit(S, H, T, r, q, sigma, eta, rebate):
    """Value of ``rebate`` paid the moment the barrier is touched (F term)."""
    srt = sigma * math.sqrt(T)
    mu = (r - q - 0.5 * sigma * sigma) / (sigma * sigma)
    # negative rates can push the radicand below zero; price at lambda = 0 then
    lam = math.sqrt(max(mu * mu + 2.0 * r / (sigma * sigma), 0.0))
    log_hs = math.log(H / S)
    z = log_hs / srt + lam * srt
    return rebate * (
        _powered_cdf(log_hs, mu + lam, eta * z)
        + _powered_cdf(log_hs, mu - lam, eta * z - 2.0 * eta * lam * srt)
    )


def _rebate_at_expiry(S, H, T, r, q, sigma, eta, rebate):
    """Value of ``rebate`` paid at expiry if the barrier was never hit (E term)."""
    srt = sigma * math.sqrt(T)
    mu = (r - q - 0.5 * sigma * sigma) / (sigma * sigma)
    drift = (1.0 + mu) * srt
    log_hs = math.log(H / S)
    x2 = -log_hs / srt + drift
    y2 = log_hs / srt + drift
    return rebate * math.exp(-r * T) * (
        float(normal_cdf(eta * (x2 - srt)))
        - _powered_cdf(log_hs, 2.0 * mu, eta * (y2 - srt))
    )


def _knock_out_value(S, K, H, T, r, q, sigma, is_call: bool, is_up: bool) -> float:
    phi = 1.0 if is_call else -1.0
    eta = -1.0 if is_up else 1.0
    A, B, C, D = _knock_out_terms(S, K, H, T, r, q, sigma, phi, eta)

    if is_call and not is_up:
        value = A - C if H <= K else B - D
    elif is_call:
        value = 0.0 if H <= K else A - B + C - D
    elif not is_up:
        value = A - B + C - D if H <= K else 0.0
    else:
        value = B - D if H <= K else A - C

    # rounding in the reflected terms can dip just below zero
    return max(value, 0.0)


# ---------------------------------------------------------------------------
# Public pricer
# ---------------------------------------------------------------------------
def barrier_price(spot: float, params: OptionParams) -> float:
    """Theoretical price of a single-barrier option (one long contract).

    Parameters
    ----------
    spot : float
        Current underlying price.
    params : OptionParams
        Leg description; ``barrier_type`` and ``barrier_level`` select the
        barrier.  Without a barrier this is the vanilla price.

    Returns
    -------
    float
        Unscaled price; position and quantity are applied by the dispatcher.
    """
    if not params.has_barrier:
        return calculate_vanilla(spot, params).price

    S = spot
    K = params.strike
    H = params.barrier_level
    T = params.time_to_maturity
    sigma = params.volatility
    r = params.risk_free_rate
    q = params.dividend_yield

    if T <= 0.0 or sigma <= 0.0 or H <= 0.0:
        return _expired_value(spot, params)
    if S <= 0.0:
        return _zero_spot_value(params)

    knock_in = params.barrier_type.is_knock_in
    is_up = params.barrier_type.is_up
    eta = -1.0 if is_up else 1.0

    if _breached(S, params):
        # already touched: out is dead, in has become a vanilla
        if knock_in:
            return _vanilla_price(S, params)
        return params.rebate

    knock_out = _knock_out_value(S, K, H, T, r, q, sigma, params.is_call, is_up)

    if knock_in:
        price = max(_vanilla_price(S, params), 0.0) - knock_out
        if params.rebate:
            price += _rebate_at_expiry(S, H, T, r, q, sigma, eta, params.rebate)
        return price

    if params.rebate:
        knock_out += _rebate_at_hit(S, H, T, r, q, sigma, eta, params.rebate)
    return knock_out
