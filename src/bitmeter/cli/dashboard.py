"""Interactive curses dashboard driving a :class:`~bitmeter.core.Session`."""

from __future__ import annotations

import curses
import logging
from time import monotonic, sleep
from typing import Any, Callable, List, Mapping, Optional

from ..core.magnitude import format_bits
from ..core.session import Action, Frame, Session
from ..visualization.chart import chart_bounds

__all__ = [
    "DEFAULT_RENDER_RATE",
    "Dashboard",
    "KEY_BINDINGS",
    "action_for_key",
    "frame_lines",
]


logger = logging.getLogger(__name__)

DEFAULT_RENDER_RATE = 30.0
MAX_CATCH_UP_TICKS = 5
IDLE_BACKOFF = 0.005

KEY_BINDINGS: Mapping[int, Action] = {
    ord(" "): Action.INCREMENT,
    ord("+"): Action.INCREMENT,
    ord("i"): Action.INCREMENT,
    ord("\n"): Action.INCREMENT,
    ord("\r"): Action.INCREMENT,
    curses.KEY_ENTER: Action.INCREMENT,
    ord("q"): Action.QUIT,
    ord("Q"): Action.QUIT,
    27: Action.QUIT,  # Esc
}

HELP_LINE = "[space/+/i] increment  [q/Esc] quit"
TITLE = "bitmeter"


def action_for_key(key: int) -> Optional[Action]:
    return KEY_BINDINGS.get(key)


def _truncate_line(value: str, limit: int) -> str:
    if limit <= 0:
        return ""
    return value[:limit]


def frame_lines(frame: Frame, width: int = 80) -> List[str]:
    """Lay out ``frame`` as plain text rows no wider than ``width``."""

    tick_label = f"tick {frame.tick}"
    gap = max(1, width - len(TITLE) - len(tick_label))
    rate_line = f"Rate: {frame.rate_label}"
    if not frame.warm:
        rate_line += " (warming up)"

    # Only the pushed samples describe the window; the rest are unwritten slots.
    pushed = frame.points[len(frame.points) - frame.filled :] if frame.filled else ()
    (x_min, _), (y_min, y_max) = chart_bounds(pushed, pad_flat=False)
    window_line = (
        f"Last {abs(x_min):.1f}s  low {format_bits(y_min)}  high {format_bits(y_max)}"
    )

    lines = [
        f"{TITLE}{' ' * gap}{tick_label}",
        "",
        f"Bits: {frame.bits_label}",
        rate_line,
        "",
        frame.sparkline,
        window_line,
        "",
        HELP_LINE,
    ]
    return [_truncate_line(line, width) for line in lines]


class Dashboard:
    """Poll keys, tick at a fixed cadence and redraw opportunistically."""

    def __init__(
        self,
        session: Session,
        *,
        render_rate: float = DEFAULT_RENDER_RATE,
        time_fn: Callable[[], float] = monotonic,
        sleep_fn: Callable[[float], Any] = sleep,
        max_catch_up: int = MAX_CATCH_UP_TICKS,
    ) -> None:
        self.session = session
        self.render_period = 1.0 / max(1.0, float(render_rate))
        self.tick_period = session.settings.tick_seconds
        self.max_catch_up = max(1, int(max_catch_up))
        self._time_fn = time_fn
        self._sleep_fn = sleep_fn
        self.frames_drawn = 0
        self.dropped_ticks = 0

    def run(self) -> str:
        logger.info(
            "Dashboard started.",
            extra={
                "event": "dashboard.start",
                "ticks_per_second": self.session.settings.ticks_per_second,
                "capacity": self.session.log.capacity,
            },
        )
        try:
            curses.wrapper(self.loop)
        except KeyboardInterrupt:
            logger.info("Dashboard interrupted.", extra={"event": "dashboard.interrupt"})
        state = self.session.state
        logger.info(
            "Dashboard stopped.",
            extra={
                "event": "dashboard.stop",
                "tick": state.tick,
                "bits": state.bits,
                "frames": self.frames_drawn,
                "dropped_ticks": self.dropped_ticks,
            },
        )
        return f"Final count: {format_bits(state.bits)} after {state.tick} ticks."

    def loop(self, screen: Any) -> None:
        self._prepare(screen)
        next_tick = self._time_fn() + self.tick_period
        last_render: Optional[float] = None
        while True:
            self.poll_input(screen)
            if self.session.should_quit:
                break

            now = self._time_fn()
            due = 0
            while now >= next_tick and due < self.max_catch_up:
                self.session.tick()
                next_tick += self.tick_period
                due += 1
            if now >= next_tick:
                # Too far behind: drop the backlog instead of spiralling.
                missed = int((now - next_tick) / self.tick_period) + 1
                self.dropped_ticks += missed
                logger.debug(
                    "Dropped ticks after a stall.",
                    extra={"event": "dashboard.dropped_ticks", "missed": missed},
                )
                next_tick = now + self.tick_period

            if last_render is None or now - last_render >= self.render_period:
                self.draw(screen, self.session.frame())
                last_render = now

            remaining = next_tick - self._time_fn()
            self._sleep_fn(min(IDLE_BACKOFF, max(0.0, remaining)))

    def poll_input(self, screen: Any) -> int:
        """Drain pending keys, returning how many mapped to an action."""

        handled = 0
        while True:
            key = screen.getch()
            if key == -1:
                return handled
            action = action_for_key(key)
            if action is None:
                continue
            self.session.handle(action)
            handled += 1
            if action is Action.QUIT:
                return handled

    def draw(self, screen: Any, frame: Frame) -> None:
        height, width = screen.getmaxyx()
        screen.erase()
        for row, line in enumerate(frame_lines(frame, max(0, width - 1))):
            if row >= height:
                break
            try:
                screen.addstr(row, 0, line)
            except curses.error:
                # Writing into the last cell of the window always raises.
                pass
        screen.refresh()
        self.frames_drawn += 1

    @staticmethod
    def _prepare(screen: Any) -> None:
        screen.nodelay(True)
        screen.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            # Terminal without cursor visibility control.
            pass
