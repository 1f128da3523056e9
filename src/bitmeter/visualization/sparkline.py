"""Sparkline rendering utilities."""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

DEFAULT_SPARKLINE_BLOCKS: Sequence[str] = "▁▂▃▄▅▆▇█"

__all__ = ["DEFAULT_SPARKLINE_BLOCKS", "downsample", "render_sparkline"]


def downsample(values: Iterable[float], width: int) -> np.ndarray:
    """Average ``values`` into at most ``width`` contiguous buckets.

    Series that already fit are returned unchanged (as a float array).
    Bucket sizes differ by at most one sample, larger buckets first.
    """

    data = np.asarray(list(values), dtype=float)
    if width <= 0:
        return data[:0]
    if data.size <= width:
        return data
    return np.array([bucket.mean() for bucket in np.array_split(data, width)])


def render_sparkline(
    values: Iterable[float],
    *,
    width: int | None = None,
    blocks: Sequence[str] = DEFAULT_SPARKLINE_BLOCKS,
    constant_block: str | None = None,
) -> str:
    """Render ``values`` as a Unicode block-character sparkline.

    Parameters
    ----------
    values:
        Samples in chronological order.
    width:
        Optional number of columns. Longer series are averaged down to
        ``width`` columns rather than truncated, so the whole history stays
        visible.
    blocks:
        Sequence of characters representing increasing magnitudes.
    constant_block:
        Character to use when all values are identical. Defaults to the first
        entry in ``blocks``.
    """

    if width is not None:
        width = int(width)
        if width <= 0:
            return ""
        data = downsample(values, width)
    else:
        data = np.asarray(list(values), dtype=float)
    if data.size == 0:
        return ""

    palette = tuple(blocks)
    if not palette:
        return ""

    minimum = float(data.min())
    maximum = float(data.max())
    if np.isclose(maximum, minimum):
        block = constant_block if constant_block is not None else palette[0]
        return block * int(data.size)

    buckets = len(palette) - 1
    if buckets <= 0:
        return palette[0] * int(data.size)

    ratios = (data - minimum) / (maximum - minimum)
    indices = np.clip(np.rint(ratios * buckets).astype(int), 0, buckets)
    return "".join(palette[index] for index in indices)
