"""Preset multi-leg option structures."""

from __future__ import annotations

from .core import OptionParams, OptionType, Position

__all__ = ["STRUCTURES", "build_structure"]

CALL, PUT = OptionType.CALL, OptionType.PUT
LONG, SHORT = Position.LONG, Position.SHORT

# name -> [(type, position, strike offset in units of width)]
STRUCTURES = {
    "straddle": [(CALL, LONG, 0), (PUT, LONG, 0)],
    "strangle": [(PUT, LONG, -1), (CALL, LONG, 1)],
    "bull_call": [(CALL, LONG, 0), (CALL, SHORT, 1)],
    "bear_put": [(PUT, LONG, 0), (PUT, SHORT, -1)],
    "iron_condor": [(PUT, LONG, -2), (PUT, SHORT, -1),
                    (CALL, SHORT, 1), (CALL, LONG, 2)],
}


def build_structure(
    name: str,
    strike: float,
    *,
    time_to_maturity: float,
    volatility: float,
    risk_free_rate: float,
    dividend_yield: float = 0.0,
    width: float = 10.0,
    quantity: float = 1.0,
) -> list[OptionParams]:
    """Return the legs of a named structure centred on ``strike``.

    Legs share the market inputs; strikes sit at ``strike + k * width``.
    """
    key = name.strip().lower()
    if key not in STRUCTURES:
        raise ValueError(f"structure must be one of {sorted(STRUCTURES)}, got {name!r}")
    return [
        OptionParams(
            strike=strike + offset * width,
            time_to_maturity=time_to_maturity,
            volatility=volatility,
            risk_free_rate=risk_free_rate,
            dividend_yield=dividend_yield,
            option_type=kind,
            position=pos,
            quantity=quantity,
        )
        for kind, pos, offset in STRUCTURES[key]
    ]
