from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Instrument tokens, normalised once at the boundary
# ---------------------------------------------------------------------------
class OptionType(str, Enum):
    CALL = "Call"
    PUT = "Put"

    @classmethod
    def parse(cls, token) -> OptionType:
        """``"call"`` in any case is a call; every other token is a put."""
        if isinstance(token, cls):
            return token
        return cls.CALL if str(token).strip().lower() == "call" else cls.PUT


class Position(str, Enum):
    LONG = "Long"
    SHORT = "Short"

    @classmethod
    def parse(cls, token) -> Position:
        """``"short"`` (any case) or ``"-1"`` is short; everything else is long."""
        if isinstance(token, cls):
            return token
        return cls.SHORT if str(token).strip().lower() in ("short", "-1") else cls.LONG

    @property
    def sign(self) -> float:
        return -1.0 if self is Position.SHORT else 1.0


class BarrierType(str, Enum):
    NONE = "None"
    UP_OUT = "UpOut"
    DOWN_OUT = "DownOut"
    UP_IN = "UpIn"
    DOWN_IN = "DownIn"

    @classmethod
    def parse(cls, token) -> BarrierType:
        """Accepts ``"UpOut"`` as well as ``"up-and-out"`` / ``"up_and_out"``.

        Empty tokens and ``None`` mean no barrier.  Unrecognised tokens also
        fall back to no barrier, with a warning.
        """
        if isinstance(token, cls):
            return token
        if token is None:
            return cls.NONE
        key = str(token).strip().lower().replace("-", "").replace("_", "")
        key = key.replace("and", "")
        if key in ("", "none"):
            return cls.NONE
        for member in cls:
            if member.value.lower() == key:
                return member
        logger.warning("Unrecognised barrier type %r, pricing as vanilla", token)
        return cls.NONE

    @property
    def is_up(self) -> bool:
        return self in (BarrierType.UP_OUT, BarrierType.UP_IN)

    @property
    def is_knock_in(self) -> bool:
        return self in (BarrierType.UP_IN, BarrierType.DOWN_IN)


# ---------------------------------------------------------------------------
# Contract + market inputs for a single leg
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OptionParams:
    """Everything needed to value one option leg, except the spot.

    Parameters
    ----------
    strike : float
        Strike price.
    time_to_maturity : float
        Years to expiry.  ``<= 0`` means expired (intrinsic value).
    volatility : float
        Annualised volatility as a decimal.  ``<= 0`` is treated like expiry.
    risk_free_rate : float
        Continuously-compounded risk-free rate.
    dividend_yield : float
        Continuous dividend yield (default 0).
    option_type, position, barrier_type
        Enum members or their string tokens; strings are normalised on
        construction.
    quantity : float
        Number of contracts (non-negative scale factor).
    barrier_level : float
        Barrier price, only meaningful when ``barrier_type`` is not NONE.
    rebate : float
        Cash rebate: paid at hit for knock-outs, at expiry for knock-ins that
        never activate.
    """
    strike: float
    time_to_maturity: float
    volatility: float
    risk_free_rate: float
    dividend_yield: float = 0.0
    option_type: OptionType = OptionType.CALL
    position: Position = Position.LONG
    quantity: float = 1.0
    barrier_type: BarrierType = BarrierType.NONE
    barrier_level: float = 0.0
    rebate: float = 0.0

    def __post_init__(self):
        # frozen: normalise tokens through object.__setattr__
        object.__setattr__(self, "option_type", OptionType.parse(self.option_type))
        object.__setattr__(self, "position", Position.parse(self.position))
        object.__setattr__(self, "barrier_type", BarrierType.parse(self.barrier_type))

    @property
    def is_call(self) -> bool:
        return self.option_type is OptionType.CALL

    @property
    def has_barrier(self) -> bool:
        return self.barrier_type is not BarrierType.NONE

    def with_field(self, name: str, value) -> OptionParams:
        """Return a copy with exactly one field replaced."""
        if name not in _PARAM_FIELDS:
            raise ValueError(f"OptionParams has no field {name!r}")
        return replace(self, **{name: value})

    def bumped(self, name: str, delta: float) -> OptionParams:
        """Return a copy with one numeric field shifted by ``delta``."""
        return self.with_field(name, getattr(self, name) + delta)


_PARAM_FIELDS = frozenset(f.name for f in fields(OptionParams))


# ---------------------------------------------------------------------------
# Result record
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Greeks:
    """Value and sensitivities of a position.  Inapplicable fields stay 0."""
    price: float = 0.0
    delta: float = 0.0
    gamma: float = 0.0
    theta: float = 0.0
    vega: float = 0.0
    rho: float = 0.0
    payoff: float = 0.0
    time_value: float = 0.0
    speed: float = 0.0
    zomma: float = 0.0
    color: float = 0.0
    vanna: float = 0.0
    volga: float = 0.0
    ultima: float = 0.0

    def scaled(self, factor: float) -> Greeks:
        return Greeks(**{name: getattr(self, name) * factor for name in GREEK_FIELDS})

    def __add__(self, other: Greeks) -> Greeks:
        if not isinstance(other, Greeks):
            return NotImplemented
        return Greeks(**{
            name: getattr(self, name) + getattr(other, name) for name in GREEK_FIELDS
        })

    def as_dict(self) -> dict[str, float]:
        return {name: float(value) for name, value in asdict(self).items()}


GREEK_FIELDS = tuple(f.name for f in fields(Greeks))
