"""Argument parsing helpers for the bitmeter CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Optional

from .._version import __version__
from . import formatting as format_command
from . import run as run_command
from . import simulate as simulate_command
from .io import section

LOG_FORMATS: tuple[str, ...] = ("json", "text")


def add_global_arguments(
    parser: argparse.ArgumentParser, *, logging_cfg: Optional[Mapping[str, Any]] = None
) -> None:
    """Register configuration and logging flags shared by every command."""

    logging_cfg = dict(logging_cfg or {})
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml (or its directory) holding [tool.bitmeter].",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=logging_cfg.get("level"),
        help="Logging level (e.g. debug, info, warning).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=logging_cfg.get("output"),
        help="Logging destination (stdout, stderr or a file path).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=LOG_FORMATS,
        default=logging_cfg.get("format"),
        help="Logging formatter (json or text).",
    )


def build_parser(config: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    config = dict(config or {})

    parser = argparse.ArgumentParser(
        prog="bitmeter",
        description="bitmeter – a live bit counter with rolling rate history",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    add_global_arguments(parser, logging_cfg=section(config, "logging"))

    subparsers = parser.add_subparsers(dest="command", required=True)
    run_command.register_subparser(subparsers, config=config)
    simulate_command.register_subparser(subparsers, config=config)
    format_command.register_subparser(subparsers, config=config)
    return parser
