"""Command line application entry point for bitmeter."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Mapping, NoReturn, Optional, Sequence

from ..logging.config import setup_logging
from .errors import CliError, log_cli_error
from .io import load_cli_config, section
from .parser import add_global_arguments, build_parser

CommandHandler = Callable[..., str]


def _bootstrap_logging(preliminary: argparse.Namespace, config: dict[str, Any]) -> None:
    raw = config.get("logging")
    if raw is not None and not isinstance(raw, Mapping):
        raise CliError(
            "Invalid logging configuration: 'logging' must be a table, "
            f"got {raw!r}",
            category="usage",
            context={"logging": raw},
        )
    logging_config = section(config, "logging")
    if preliminary.log_level is not None:
        logging_config["level"] = preliminary.log_level
    if preliminary.log_output is not None:
        logging_config["output"] = preliminary.log_output
    if preliminary.log_format is not None:
        logging_config["format"] = preliminary.log_format
    logging_config.setdefault("level", "info")
    logging_config.setdefault("output", "stderr")
    logging_config.setdefault("format", "json")
    config["logging"] = logging_config
    try:
        setup_logging(config)
    except (ValueError, OSError) as exc:
        raise CliError(
            f"Invalid logging configuration: {exc}",
            category="usage",
            context=logging_config,
        ) from exc


def _emit(message: str) -> None:
    if message:
        sys.stdout.write(message)
        if not message.endswith("\n"):
            sys.stdout.write("\n")


def _fail(exc: CliError) -> NoReturn:
    if not exc.logged:
        log_cli_error(exc.payload, exc_info=exc)
        exc.logged = True
    _emit(exc.payload.message)
    raise SystemExit(exc.status_code) from exc


def run_cli(args: Optional[Sequence[str]] = None) -> str:
    """Execute the bitmeter command line interface."""

    config_parser = argparse.ArgumentParser(add_help=False)
    add_global_arguments(config_parser)
    preliminary, remaining = config_parser.parse_known_args(args)

    try:
        config = load_cli_config(preliminary.config_path)
        _bootstrap_logging(preliminary, config)
    except CliError as exc:
        _fail(exc)

    parser = build_parser(config)
    namespace = parser.parse_args(list(remaining), namespace=preliminary)
    namespace.config = config

    handler: Optional[CommandHandler] = getattr(namespace, "handler", None)
    try:
        if handler is None:
            raise CliError(
                f"Unknown command '{getattr(namespace, 'command', None)}'.",
                category="usage",
                context={"command": getattr(namespace, "command", None)},
            )
        result = handler(namespace, config=config)
    except CliError as exc:
        _fail(exc)
    _emit(result)
    return result


def main() -> None:  # pragma: no cover - thin wrapper
    run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI invocation guard
    main()
