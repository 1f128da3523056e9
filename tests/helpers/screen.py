"""Stand-ins for the curses window and the monotonic clock."""

from __future__ import annotations

import curses
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Tuple


class FakeScreen:
    """Record what the dashboard draws and replay scripted key presses.

    ``keys`` maps a poll index to the keys returned during that poll; every
    poll ends with ``-1`` like a non-blocking ``getch``.
    """

    def __init__(
        self,
        keys: Optional[Dict[int, Iterable[int]]] = None,
        *,
        size: Tuple[int, int] = (24, 80),
        on_poll: Optional[Callable[[int], None]] = None,
    ) -> None:
        self._scripted = {index: list(values) for index, values in (keys or {}).items()}
        self._pending: Deque[int] = deque()
        self._polls = 0
        self._on_poll = on_poll
        self.size = size
        self.rows: Dict[int, str] = {}
        self.refreshes = 0
        self.nodelay_enabled = False
        self.keypad_enabled = False

    @property
    def polls(self) -> int:
        return self._polls

    def getch(self) -> int:
        if not self._pending:
            if self._on_poll is not None:
                self._on_poll(self._polls)
            self._pending.extend(self._scripted.get(self._polls, ()))
            self._pending.append(-1)
            self._polls += 1
        return self._pending.popleft()

    def getmaxyx(self) -> Tuple[int, int]:
        return self.size

    def erase(self) -> None:
        self.rows.clear()

    def addstr(self, row: int, col: int, text: str) -> None:
        height, width = self.size
        if row >= height or col + len(text) >= width:
            raise curses.error("addwstr() returned ERR")
        self.rows[row] = text

    def refresh(self) -> None:
        self.refreshes += 1

    def nodelay(self, flag: bool) -> None:
        self.nodelay_enabled = flag

    def keypad(self, flag: bool) -> None:
        self.keypad_enabled = flag

    def text(self) -> List[str]:
        return [self.rows[row] for row in sorted(self.rows)]


class FakeClock:
    """Monotonic clock advanced by the sleeps the code under test requests."""

    def __init__(self, start: float = 0.0, *, step: float = 0.0) -> None:
        self.now = start
        self.step = step
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += max(seconds, self.step)
