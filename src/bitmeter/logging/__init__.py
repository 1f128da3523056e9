"""Logging utilities for bitmeter."""

from bitmeter.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
