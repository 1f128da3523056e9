"""Fixed-capacity circular history of per-tick samples.

The log preallocates ``capacity`` slots and overwrites them in a ring, one
push per tick.  Lookback queries are answered with index arithmetic relative
to the write cursor, so reads never scan or allocate.

Slots that have not been written yet hold ``0.0``.  ``sample_at`` and
``delta`` return those placeholders as-is; callers that must not mistake them
for real history consult :attr:`RollingSampleLog.filled` or
:attr:`RollingSampleLog.available_lookback` first.
"""

from __future__ import annotations

from typing import Iterator, List

__all__ = ["DEFAULT_HISTORY_CAPACITY", "RollingSampleLog"]


DEFAULT_HISTORY_CAPACITY = 20 * 30


class RollingSampleLog:
    """Circular buffer holding the last ``capacity`` samples."""

    __slots__ = ("_capacity", "_samples", "_cursor", "_filled")

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        capacity = int(capacity)
        if capacity <= 0:
            raise ValueError("RollingSampleLog requires a positive capacity")
        self._capacity = capacity
        self._samples: List[float] = [0.0] * capacity
        self._cursor = 0
        self._filled = 0

    def __len__(self) -> int:
        return self._capacity

    def __iter__(self) -> Iterator[float]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._capacity}, "
            f"cursor={self._cursor}, filled={self._filled})"
        )

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def cursor(self) -> int:
        """Index of the slot overwritten by the next push."""

        return self._cursor

    @property
    def filled(self) -> int:
        """Number of slots holding pushed samples (saturates at capacity)."""

        return self._filled

    @property
    def is_warm(self) -> bool:
        return self._filled == self._capacity

    @property
    def available_lookback(self) -> int:
        """Largest lookback that reads a pushed sample, ``-1`` when empty."""

        return self._filled - 1

    def clear(self) -> None:
        for index in range(self._capacity):
            self._samples[index] = 0.0
        self._cursor = 0
        self._filled = 0

    def push(self, sample: float) -> None:
        self._samples[self._cursor] = float(sample)
        self._cursor = (self._cursor + 1) % self._capacity
        if self._filled < self._capacity:
            self._filled += 1

    def sample_at(self, lookback: int) -> float:
        """Return the sample recorded ``lookback`` pushes before the latest.

        ``lookback`` must satisfy ``0 <= lookback < capacity``; anything else
        is a caller bug and fails the assertion.
        """

        assert 0 <= lookback < self._capacity, (
            f"lookback {lookback} outside [0, {self._capacity})"
        )
        return self._samples[self._physical_index(lookback)]

    def delta(self, lookback: int) -> float:
        """Return the net change across the latest ``lookback + 1`` samples."""

        return self.sample_at(0) - self.sample_at(lookback)

    def snapshot(self) -> List[float]:
        """Return every slot in chronological order, oldest first."""

        cursor = self._cursor
        return self._samples[cursor:] + self._samples[:cursor]

    def _physical_index(self, lookback: int) -> int:
        return (self._cursor - 1 - lookback) % self._capacity
