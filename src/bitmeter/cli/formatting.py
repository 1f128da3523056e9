"""Command helpers for the ``format`` sub-command."""

from __future__ import annotations

import argparse
import math
from typing import Any, Mapping

from ..core.magnitude import format_bits
from .common import add_export_argument, render_payload, validated_export
from .errors import CliError
from .io import section


def register_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    *,
    config: Mapping[str, Any],
) -> None:
    """Register the ``format`` sub-command."""

    format_cfg = section(config, "format")
    parser = subparsers.add_parser(
        "format",
        help="Print magnitude-scaled labels for bit counts.",
    )
    parser.add_argument(
        "values",
        nargs="+",
        help="Non-negative bit counts (e.g. 4500 or 6.452e17).",
    )
    add_export_argument(
        parser,
        default=validated_export(format_cfg.get("export"), fallback="text"),
        help_text="Exporter used to render the labels (default: text).",
    )
    parser.set_defaults(handler=handle)


def _parse_magnitude(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise CliError(
            f"Not a number: {raw!r}.", category="usage", context={"value": raw}
        ) from exc
    if not math.isfinite(value) or value < 0.0:
        raise CliError(
            f"Bit counts must be finite and non-negative, got {raw!r}.",
            category="usage",
            context={"value": raw},
        )
    return value


def handle(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    entries = []
    for raw in namespace.values:
        value = _parse_magnitude(raw)
        entries.append({"value": value, "formatted": format_bits(value)})
    payload = {
        "values": entries,
        "_lines": [entry["formatted"] for entry in entries],
    }
    return render_payload(payload, namespace.export)
