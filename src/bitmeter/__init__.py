"""Top-level package for bitmeter.

bitmeter tracks a growing bit counter, renders it with magnitude-scaled
units (``4.500kb``, ``8.163kQ2b``) and derives its per-second rate from a
fixed-capacity history sampled once per tick.
"""

from ._version import __version__
from .core.magnitude import Bits, format_bits, format_rate
from .core.session import Action, Frame, GameState, Session, SessionSettings, simulate
from .telemetry.rolling_log import RollingSampleLog

__all__ = [
    "Action",
    "Bits",
    "Frame",
    "GameState",
    "RollingSampleLog",
    "Session",
    "SessionSettings",
    "__version__",
    "format_bits",
    "format_rate",
    "simulate",
]
