"""Configure the ``bitmeter`` logger from the ``[logging]`` configuration table."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping as ABCMapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

__all__ = ["JsonFormatter", "setup_logging"]


ROOT_LOGGER_NAME = "bitmeter"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_MARKER = "_bitmeter_handler"

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Serialise log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRIBUTES or key.startswith("_"):
                continue
            payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, sort_keys=True)


def _resolve_level(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    name = str(raw or "info").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {raw!r}")
    return level


def _build_handler(output: Any) -> logging.Handler:
    target = str(output or "stderr").strip()
    if target.lower() == "stderr":
        return logging.StreamHandler(sys.stderr)
    if target.lower() == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(target).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf8")


def setup_logging(config: Mapping[str, Any] | None = None) -> logging.Logger:
    """Install a handler on the ``bitmeter`` logger.

    ``config`` is the full CLI configuration; only its ``logging`` table is
    read (``level``, ``output`` and ``format``).  Handlers installed by a
    previous call are removed first, so repeated calls do not duplicate
    output.
    """

    logging_cfg: Mapping[str, Any] = {}
    if config:
        raw = config.get("logging")
        if isinstance(raw, ABCMapping):
            logging_cfg = raw

    level = _resolve_level(logging_cfg.get("level", "info"))
    fmt = str(logging_cfg.get("format", "json")).strip().lower()
    if fmt not in {"json", "text"}:
        raise ValueError(f"Unknown logging format: {fmt!r}")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    handler = _build_handler(logging_cfg.get("output", "stderr"))
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
