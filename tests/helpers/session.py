"""Builders for sessions and sample logs."""

from __future__ import annotations

from typing import Iterable

from bitmeter.core.session import Session, SessionSettings
from bitmeter.telemetry.rolling_log import RollingSampleLog


def build_session(
    *,
    ticks_per_second: int = 4,
    history_seconds: int = 2,
    increment: float = 1.0,
    bits_per_tick: float = 0.0,
    chart_width: int = 16,
) -> Session:
    settings = SessionSettings(
        ticks_per_second=ticks_per_second,
        history_seconds=history_seconds,
        increment=increment,
        bits_per_tick=bits_per_tick,
    )
    return Session(settings, chart_width=chart_width)


def push_all(log: RollingSampleLog, samples: Iterable[float]) -> RollingSampleLog:
    for sample in samples:
        log.push(sample)
    return log
