"""Chart-ready point series derived from sample snapshots."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

__all__ = ["Point", "chart_bounds", "chart_points"]


Point = Tuple[float, float]


def chart_points(samples: Iterable[float], tick_seconds: float) -> List[Point]:
    """Pair chronological ``samples`` with their age in seconds.

    The newest sample sits at ``x = 0.0`` and older samples extend to the
    left, one ``tick_seconds`` step apart.
    """

    values = np.asarray(list(samples), dtype=float)
    if values.size == 0:
        return []
    offsets = np.arange(values.size - 1, -1, -1, dtype=float) * -float(tick_seconds)
    # ``+ 0.0`` turns the newest offset from -0.0 into 0.0
    return [(float(x) + 0.0, float(y)) for x, y in zip(offsets, values)]


def chart_bounds(
    points: Sequence[Point], *, pad_flat: bool = True
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Return ``((x_min, x_max), (y_min, y_max))`` for ``points``.

    With ``pad_flat`` a flat or empty series gets a unit-height y range so
    chart axes never collapse.
    """

    if not points:
        return (0.0, 0.0), (0.0, 1.0 if pad_flat else 0.0)
    data = np.asarray(points, dtype=float)
    x_min, y_min = data.min(axis=0)
    x_max, y_max = data.max(axis=0)
    if pad_flat and np.isclose(y_min, y_max):
        y_max = y_min + 1.0
    return (float(x_min), float(x_max)), (float(y_min), float(y_max))
