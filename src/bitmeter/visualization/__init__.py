"""Visualisation helpers for bitmeter."""

from bitmeter.visualization.chart import Point, chart_bounds, chart_points
from bitmeter.visualization.sparkline import (
    DEFAULT_SPARKLINE_BLOCKS,
    downsample,
    render_sparkline,
)

__all__ = [
    "DEFAULT_SPARKLINE_BLOCKS",
    "Point",
    "chart_bounds",
    "chart_points",
    "downsample",
    "render_sparkline",
]
