"""Core counter state, formatting and tick logic."""

from bitmeter.core.magnitude import (
    UNIT_SUFFIXES,
    Bits,
    display_divisor,
    format_bits,
    format_rate,
    magnitude_power,
    scale,
    unit_suffix,
)
from bitmeter.core.session import (
    Action,
    Frame,
    GameState,
    Session,
    SessionSettings,
    apply_action,
    per_second_rate,
    rate_lookback,
    simulate,
    update,
)

__all__ = [
    "Action",
    "Bits",
    "Frame",
    "GameState",
    "Session",
    "SessionSettings",
    "UNIT_SUFFIXES",
    "apply_action",
    "display_divisor",
    "format_bits",
    "format_rate",
    "magnitude_power",
    "per_second_rate",
    "rate_lookback",
    "scale",
    "simulate",
    "unit_suffix",
    "update",
]
