"""Sample history containers fed once per tick."""

from bitmeter.telemetry.rolling_log import DEFAULT_HISTORY_CAPACITY, RollingSampleLog

__all__ = ["DEFAULT_HISTORY_CAPACITY", "RollingSampleLog"]
