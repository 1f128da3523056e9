"""Helpers shared by the bitmeter sub-commands."""

from __future__ import annotations

import argparse
from typing import Any, Mapping, Sequence

from ..core.session import DEFAULT_CHART_WIDTH, SessionSettings
from ..exporters import exporters_registry
from .errors import CliError
from .io import section

SETTINGS_FLAGS: tuple[str, ...] = (
    "ticks_per_second",
    "history_seconds",
    "increment",
    "bits_per_tick",
)


def add_settings_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the flags overriding ``[tool.bitmeter.session]`` values."""

    parser.add_argument(
        "--ticks-per-second",
        dest="ticks_per_second",
        type=int,
        default=None,
        help="Tick rate of the session (default: configured value or 20).",
    )
    parser.add_argument(
        "--history-seconds",
        dest="history_seconds",
        type=int,
        default=None,
        help="Seconds of per-tick history retained (default: configured value or 30).",
    )
    parser.add_argument(
        "--increment",
        dest="increment",
        type=float,
        default=None,
        help="Bits added per increment key press (default: configured value or 1).",
    )
    parser.add_argument(
        "--bits-per-tick",
        dest="bits_per_tick",
        type=float,
        default=None,
        help="Passive bits added every tick (default: configured value or 0).",
    )


def add_export_argument(
    parser: argparse.ArgumentParser, *, default: str, help_text: str
) -> None:
    parser.add_argument(
        "--export",
        dest="export",
        choices=sorted(exporters_registry.keys()),
        default=default,
        help=help_text,
    )


def validated_export(value: Any, *, fallback: str) -> str:
    if isinstance(value, str) and value in exporters_registry:
        return value
    return fallback


def resolve_settings(namespace: argparse.Namespace, config: Mapping[str, Any]) -> SessionSettings:
    """Merge configuration and CLI overrides into :class:`SessionSettings`."""

    overrides = {name: getattr(namespace, name, None) for name in SETTINGS_FLAGS}
    try:
        return SessionSettings.from_config(config, overrides=overrides)
    except ValueError as exc:
        raise CliError(
            f"Invalid session settings: {exc}",
            category="usage",
            context={key: value for key, value in overrides.items() if value is not None},
        ) from exc


def chart_width(config: Mapping[str, Any]) -> int:
    raw = section(config, "display").get("chart_width", DEFAULT_CHART_WIDTH)
    try:
        width = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_CHART_WIDTH
    return width if width > 0 else DEFAULT_CHART_WIDTH


def render_payload(payload: Mapping[str, Any], exporter: str | Sequence[str]) -> str:
    """Render ``payload`` with the selected exporter(s)."""

    selected = [exporter] if isinstance(exporter, str) else list(exporter)
    rendered = [exporters_registry[name](dict(payload)) for name in selected]
    return "\n\n".join(rendered)
