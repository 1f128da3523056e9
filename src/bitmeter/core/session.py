"""Tick-driven counter session.

The counter state is an immutable :class:`GameState` value.  Each tick the
session replaces it with the result of :func:`update`, records the counter in
a :class:`~bitmeter.telemetry.RollingSampleLog` and derives the per-second
rate from that history.  Rendering consumes :class:`Frame` snapshots only.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Mapping as ABCMapping
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional, Tuple

from ..telemetry.rolling_log import RollingSampleLog
from ..visualization.chart import chart_points
from ..visualization.sparkline import render_sparkline
from .magnitude import format_bits, format_rate

__all__ = [
    "Action",
    "DEFAULT_CHART_WIDTH",
    "DEFAULT_HISTORY_SECONDS",
    "DEFAULT_TICKS_PER_SECOND",
    "MAX_HISTORY_CAPACITY",
    "Frame",
    "GameState",
    "Session",
    "SessionSettings",
    "apply_action",
    "per_second_rate",
    "rate_lookback",
    "simulate",
    "update",
]


logger = logging.getLogger(__name__)

DEFAULT_TICKS_PER_SECOND = 20
DEFAULT_HISTORY_SECONDS = 30
DEFAULT_CHART_WIDTH = 60
MAX_HISTORY_CAPACITY = 1_000_000


class Action(enum.Enum):
    """Discrete inputs understood by the session."""

    INCREMENT = "increment"
    QUIT = "quit"


@dataclass(frozen=True)
class SessionSettings:
    """Tick cadence, history window and counter growth parameters."""

    ticks_per_second: int = DEFAULT_TICKS_PER_SECOND
    history_seconds: int = DEFAULT_HISTORY_SECONDS
    increment: float = 1.0
    bits_per_tick: float = 0.0

    def __post_init__(self) -> None:
        if self.ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")
        if self.history_seconds <= 0:
            raise ValueError("history_seconds must be positive")
        if self.capacity > MAX_HISTORY_CAPACITY:
            raise ValueError(
                f"ticks_per_second * history_seconds must not exceed "
                f"{MAX_HISTORY_CAPACITY} samples, got {self.capacity}"
            )
        for name in ("increment", "bits_per_tick"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a finite, non-negative number")

    @property
    def capacity(self) -> int:
        """Number of ticks retained by the history log."""

        return self.ticks_per_second * self.history_seconds

    @property
    def tick_seconds(self) -> float:
        return 1.0 / self.ticks_per_second

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any] | None = None,
        *,
        overrides: Mapping[str, Any] | None = None,
    ) -> "SessionSettings":
        """Build settings from the ``session`` table of ``config``.

        ``overrides`` (typically parsed CLI flags) win over configured values;
        ``None`` entries are ignored.  Values that cannot be coerced raise
        :class:`ValueError`.
        """

        section: Mapping[str, Any] = {}
        if config:
            raw = config.get("session")
            if isinstance(raw, ABCMapping):
                section = raw

        merged = dict(section)
        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        def _coerce(key: str, kind: type, fallback: Any) -> Any:
            value = merged.get(key, fallback)
            if isinstance(value, bool):
                raise ValueError(f"session.{key} must be numeric, got {value!r}")
            if kind is int and isinstance(value, float) and not value.is_integer():
                raise ValueError(f"session.{key} must be an integer, got {value!r}")
            try:
                return kind(value)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ValueError(f"session.{key} must be numeric, got {value!r}") from exc

        return cls(
            ticks_per_second=_coerce("ticks_per_second", int, cls.ticks_per_second),
            history_seconds=_coerce("history_seconds", int, cls.history_seconds),
            increment=_coerce("increment", float, cls.increment),
            bits_per_tick=_coerce("bits_per_tick", float, cls.bits_per_tick),
        )


@dataclass(frozen=True)
class GameState:
    bits: float = 0.0
    tick: int = 0
    should_quit: bool = False


@dataclass(frozen=True)
class Frame:
    """Render-ready view of a session at one tick."""

    bits_label: str
    rate_label: str
    rate: float
    tick: int
    warm: bool
    points: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)
    sparkline: str = ""
    filled: int = 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "bits": self.bits_label,
            "rate": self.rate_label,
            "rate_per_second": self.rate,
            "tick": self.tick,
            "warm": self.warm,
            "sparkline": self.sparkline,
            "filled": self.filled,
            "points": [list(point) for point in self.points],
        }


def apply_action(state: GameState, action: Action, settings: SessionSettings) -> GameState:
    if action is Action.INCREMENT:
        return replace(state, bits=state.bits + settings.increment)
    if action is Action.QUIT:
        return replace(state, should_quit=True)
    raise ValueError(f"Unsupported action: {action!r}")


def update(state: GameState, settings: SessionSettings) -> GameState:
    """Advance ``state`` by one tick."""

    return replace(
        state,
        bits=state.bits + settings.bits_per_tick,
        tick=state.tick + 1,
    )


def rate_lookback(settings: SessionSettings) -> int:
    """Lookback spanning roughly one second of ticks."""

    lookback = max(1, settings.ticks_per_second - 1)
    return min(lookback, settings.capacity - 1)


def per_second_rate(log: RollingSampleLog, lookback: int, tick_seconds: float) -> float:
    """Derive the per-second rate from the last ``lookback`` ticks of ``log``.

    Only pushed samples are used: while the log is warming up the lookback
    shrinks to the available history, and ``0.0`` is reported until two
    samples exist.
    """

    effective = min(lookback, log.available_lookback)
    if effective < 1:
        return 0.0
    return log.delta(effective) / (effective * tick_seconds)


class Session:
    """Own a :class:`GameState` and its sample history."""

    def __init__(
        self,
        settings: Optional[SessionSettings] = None,
        *,
        state: Optional[GameState] = None,
        log: Optional[RollingSampleLog] = None,
        chart_width: int = DEFAULT_CHART_WIDTH,
    ) -> None:
        self.settings = settings or SessionSettings()
        self.state = state or GameState()
        if log is not None and log.capacity != self.settings.capacity:
            raise ValueError(
                f"log capacity {log.capacity} does not match "
                f"{self.settings.capacity} ticks of history"
            )
        self.log = log if log is not None else RollingSampleLog(self.settings.capacity)
        self.chart_width = max(1, int(chart_width))
        self._lookback = rate_lookback(self.settings)
        self._warm_logged = self.log.is_warm

    @property
    def should_quit(self) -> bool:
        return self.state.should_quit

    def handle(self, action: Action) -> GameState:
        self.state = apply_action(self.state, action, self.settings)
        return self.state

    def handle_all(self, actions: Iterable[Action]) -> GameState:
        for action in actions:
            self.handle(action)
        return self.state

    def tick(self) -> GameState:
        self.state = update(self.state, self.settings)
        self.log.push(self.state.bits)
        if not self._warm_logged and self.log.is_warm:
            self._warm_logged = True
            logger.debug(
                "Sample history is warm.",
                extra={
                    "event": "session.warm",
                    "tick": self.state.tick,
                    "capacity": self.log.capacity,
                },
            )
        return self.state

    def rate(self) -> float:
        return per_second_rate(self.log, self._lookback, self.settings.tick_seconds)

    def frame(self) -> Frame:
        rate = self.rate()
        samples = self.log.snapshot()
        history = samples[self.log.capacity - self.log.filled :]
        return Frame(
            bits_label=format_bits(self.state.bits),
            rate_label=format_rate(rate),
            rate=rate,
            tick=self.state.tick,
            warm=self.log.is_warm,
            points=tuple(chart_points(samples, self.settings.tick_seconds)),
            sparkline=render_sparkline(history, width=self.chart_width),
            filled=self.log.filled,
        )


def simulate(
    settings: Optional[SessionSettings] = None,
    ticks: int = 0,
    *,
    presses_per_tick: int = 0,
    chart_width: int = DEFAULT_CHART_WIDTH,
) -> Session:
    """Run ``ticks`` ticks headlessly, pressing increment ``presses_per_tick`` times each."""

    if ticks < 0:
        raise ValueError("ticks must be non-negative")
    if presses_per_tick < 0:
        raise ValueError("presses_per_tick must be non-negative")
    session = Session(settings, chart_width=chart_width)
    for _ in range(ticks):
        for _ in range(presses_per_tick):
            session.handle(Action.INCREMENT)
        session.tick()
    logger.info(
        "Simulation finished.",
        extra={
            "event": "session.simulated",
            "ticks": ticks,
            "presses_per_tick": presses_per_tick,
            "bits": session.state.bits,
        },
    )
    return session
