"""Command line utilities for bitmeter."""

from bitmeter.cli.app import main, run_cli

__all__ = ["main", "run_cli"]
