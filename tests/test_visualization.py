from __future__ import annotations

import numpy as np
import pytest

from bitmeter.visualization import (
    DEFAULT_SPARKLINE_BLOCKS,
    chart_bounds,
    chart_points,
    downsample,
    render_sparkline,
)


def test_render_sparkline_maps_range_onto_blocks() -> None:
    line = render_sparkline([0.0, 6.0, 14.0])

    assert line == "▁▄█"


def test_render_sparkline_constant_and_empty_series() -> None:
    assert render_sparkline([5.0, 5.0, 5.0]) == "▁▁▁"
    assert render_sparkline([5.0, 5.0], constant_block="-") == "--"
    assert render_sparkline([]) == ""
    assert render_sparkline([1.0, 2.0], width=0) == ""


def test_render_sparkline_downsamples_to_width() -> None:
    values = list(range(100))

    line = render_sparkline(values, width=10)

    assert len(line) == 10
    assert line[0] == DEFAULT_SPARKLINE_BLOCKS[0]
    assert line[-1] == DEFAULT_SPARKLINE_BLOCKS[-1]


def test_downsample_averages_contiguous_buckets() -> None:
    result = downsample([1.0, 3.0, 5.0, 7.0, 9.0], 2)

    np.testing.assert_allclose(result, [3.0, 8.0])
    np.testing.assert_allclose(downsample([1.0, 2.0], 4), [1.0, 2.0])
    assert downsample([1.0, 2.0], 0).size == 0


def test_chart_points_place_newest_sample_at_zero() -> None:
    points = chart_points([1.0, 2.0, 4.0], tick_seconds=0.5)

    assert points == [(-1.0, 1.0), (-0.5, 2.0), (0.0, 4.0)]
    assert chart_points([], tick_seconds=0.5) == []


def test_chart_bounds() -> None:
    points = chart_points([1.0, 2.0, 4.0], tick_seconds=0.5)

    assert chart_bounds(points) == ((-1.0, 0.0), (1.0, 4.0))
    assert chart_bounds([(0.0, 3.0)]) == ((0.0, 0.0), (3.0, 4.0))
    assert chart_bounds([(0.0, 3.0)], pad_flat=False) == ((0.0, 0.0), (3.0, 3.0))
    assert chart_bounds([]) == ((0.0, 0.0), (0.0, 1.0))


@pytest.mark.parametrize("width", [1, 3, 7])
def test_render_sparkline_never_exceeds_width(width: int) -> None:
    assert len(render_sparkline(np.linspace(0.0, 1.0, 50), width=width)) == width
