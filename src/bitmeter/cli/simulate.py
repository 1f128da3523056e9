"""Command helpers for the ``simulate`` sub-command."""

from __future__ import annotations

import argparse
from typing import Any, Mapping

from ..core.session import simulate
from .common import (
    add_export_argument,
    add_settings_arguments,
    chart_width,
    render_payload,
    resolve_settings,
    validated_export,
)
from .dashboard import frame_lines
from .errors import CliError
from .io import section


def register_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    *,
    config: Mapping[str, Any],
) -> None:
    """Register the ``simulate`` sub-command."""

    simulate_cfg = section(config, "simulate")
    parser = subparsers.add_parser(
        "simulate",
        help="Run the session headlessly and print the final frame.",
    )
    parser.add_argument(
        "--ticks",
        dest="ticks",
        type=int,
        required=True,
        help="Number of ticks to simulate.",
    )
    parser.add_argument(
        "--presses-per-tick",
        dest="presses_per_tick",
        type=int,
        default=0,
        help="Increment presses injected before every tick (default: 0).",
    )
    add_settings_arguments(parser)
    add_export_argument(
        parser,
        default=validated_export(simulate_cfg.get("export"), fallback="text"),
        help_text="Exporter used to render the final frame (default: text).",
    )
    parser.set_defaults(handler=handle)


def handle(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    if namespace.ticks < 0 or namespace.presses_per_tick < 0:
        raise CliError(
            "--ticks and --presses-per-tick must be non-negative.",
            category="usage",
            context={"ticks": namespace.ticks, "presses_per_tick": namespace.presses_per_tick},
        )
    settings = resolve_settings(namespace, config)
    session = simulate(
        settings,
        namespace.ticks,
        presses_per_tick=namespace.presses_per_tick,
        chart_width=chart_width(config),
    )
    frame = session.frame()
    payload = {
        "frame": frame.as_dict(),
        "settings": {
            "ticks_per_second": settings.ticks_per_second,
            "history_seconds": settings.history_seconds,
            "increment": settings.increment,
            "bits_per_tick": settings.bits_per_tick,
        },
        "_lines": frame_lines(frame, width=max(40, session.chart_width)),
    }
    return render_payload(payload, namespace.export)
