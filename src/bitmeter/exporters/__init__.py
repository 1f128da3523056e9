"""Exporter registry for bitmeter command output."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Mapping, Protocol

__all__ = ["Exporter", "exporters_registry", "json_exporter", "text_exporter"]


class Exporter(Protocol):
    """Exporter callable protocol."""

    def __call__(self, results: Dict[str, Any]) -> str:  # pragma: no cover - interface only
        ...


def _normalise(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return _normalise(asdict(value))
    if isinstance(value, (list, tuple)):
        return [_normalise(item) for item in value]
    if isinstance(value, Mapping):
        return {
            str(key): _normalise(item)
            for key, item in value.items()
            if not str(key).startswith("_")
        }
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def json_exporter(results: Dict[str, Any]) -> str:
    """Dump ``results`` as indented JSON, skipping ``_``-prefixed keys."""

    return json.dumps(_normalise(results), indent=2, sort_keys=True)


def text_exporter(results: Dict[str, Any]) -> str:
    """Plain text: the ``_lines`` entry when present, otherwise ``key: value`` rows."""

    lines = results.get("_lines")
    if lines is not None:
        return "\n".join(str(line) for line in lines)
    return "\n".join(
        f"{key}: {value}" for key, value in _normalise(results).items()
    )


exporters_registry: Dict[str, Exporter] = {
    "json": json_exporter,
    "text": text_exporter,
}
