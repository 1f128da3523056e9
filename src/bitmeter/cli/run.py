"""Command helpers for the ``run`` sub-command."""

from __future__ import annotations

import argparse
from typing import Any, Mapping

from ..core.session import Session
from .common import add_settings_arguments, chart_width, resolve_settings
from .dashboard import DEFAULT_RENDER_RATE, Dashboard
from .io import section


def register_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    *,
    config: Mapping[str, Any],
) -> None:
    """Register the ``run`` sub-command."""

    display_cfg = section(config, "display")
    try:
        render_default = float(display_cfg.get("render_rate", DEFAULT_RENDER_RATE))
    except (TypeError, ValueError):
        render_default = DEFAULT_RENDER_RATE

    parser = subparsers.add_parser(
        "run",
        help="Open the interactive terminal dashboard.",
    )
    add_settings_arguments(parser)
    parser.add_argument(
        "--render-rate",
        dest="render_rate",
        type=float,
        default=render_default,
        help="Maximum redraws per second (default: 30).",
    )
    parser.set_defaults(handler=handle)


def handle(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    settings = resolve_settings(namespace, config)
    session = Session(settings, chart_width=chart_width(config))
    dashboard = Dashboard(session, render_rate=namespace.render_rate)
    return dashboard.run()
