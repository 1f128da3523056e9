"""Configuration discovery for the bitmeter CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from bitmeter.cli.errors import CliError
from bitmeter.configuration import load_project_config, resolve_pyproject_path, tomllib

CONFIG_ENV_VAR = "BITMETER_CONFIG"


def _normalise_cli_config(payload: Mapping[str, Any], source: Path) -> dict[str, Any]:
    data = {str(key): value for key, value in payload.items()}
    data["_config_path"] = str(source.expanduser().resolve())
    return data


def _load_candidate(candidate: Path) -> Optional[dict[str, Any]]:
    try:
        loaded = load_project_config(candidate)
    except tomllib.TOMLDecodeError as exc:
        raise CliError.from_context(
            f"Invalid TOML in {candidate}: {exc}",
            category="io",
            context={"path": candidate},
            cause=exc,
        ) from exc
    if not loaded:
        return None
    payload, resolved = loaded
    return _normalise_cli_config(payload, resolved)


def load_cli_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load CLI defaults from ``pyproject.toml`` files.

    Lookup order: ``path``, then ``$BITMETER_CONFIG``, then the current
    working directory.  An explicit ``path`` that does not exist is an error;
    the other locations are optional.
    """

    explicit: List[Path] = []
    if path is not None:
        pyproject = resolve_pyproject_path(Path(path))
        if pyproject is None or not pyproject.exists():
            raise CliError.from_context(
                f"Configuration file not found: {path}",
                category="not_found",
                context={"path": path},
            )
        explicit.append(pyproject)

    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        env_path = resolve_pyproject_path(Path(env_config))
        if env_path is not None:
            explicit.append(env_path)

    for candidate in [*explicit, Path.cwd()]:
        config = _load_candidate(candidate)
        if config is not None:
            return config

    return {"_config_path": None}


def section(config: Mapping[str, Any], name: str) -> Dict[str, Any]:
    """Return the ``name`` table of ``config`` as a dict, empty when missing."""

    raw = config.get(name)
    if isinstance(raw, Mapping):
        return dict(raw)
    return {}
