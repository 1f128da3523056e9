"""Utilities for retrieving and validating the package version."""

from __future__ import annotations

import os
import re
from importlib import metadata
from pathlib import Path

from packaging.version import InvalidVersion, Version

PACKAGE_NAME = "bitmeter"
RELEASE_ENV_VAR = "PYTHON_SEMANTIC_RELEASE_VERSION"

_CHANGELOG_HEADING = re.compile(r"^## v(?P<version>\d+\.\d+\.\d+)\b")


def _version_from_sources() -> str:
    """Return the newest version heading found in ``CHANGELOG.md``.

    Used in source checkouts where no distribution metadata exists.
    """

    parents = Path(__file__).resolve().parents
    candidates = [parents[index] / "CHANGELOG.md" for index in (1, 2) if len(parents) > index]
    for changelog in candidates:
        if not changelog.is_file():
            continue
        for line in changelog.read_text(encoding="utf-8").splitlines():
            match = _CHANGELOG_HEADING.match(line)
            if match:
                return match.group("version")

    raise RuntimeError(
        f"Unable to determine the '{PACKAGE_NAME}' version from package metadata or "
        "repository sources."
    )


def _raw_version() -> str:
    override = os.environ.get(RELEASE_ENV_VAR)
    if override:
        return override
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _version_from_sources()


def _load_version() -> str:
    """Return the validated ``MAJOR.MINOR.PATCH`` package version."""

    raw_version = _raw_version()
    try:
        parsed = Version(raw_version)
    except InvalidVersion as exc:
        raise RuntimeError(
            f"Invalid version string for '{PACKAGE_NAME}': "
            f"{raw_version!r}. Expected a semantic version."
        ) from exc

    if len(parsed.release) != 3:
        raise RuntimeError(
            f"The '{PACKAGE_NAME}' version must follow the MAJOR.MINOR.PATCH format. "
            f"Found: {raw_version!r}."
        )

    return raw_version


__version__ = _load_version()

__all__ = ["__version__"]
