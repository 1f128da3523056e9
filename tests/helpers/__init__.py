"""Convenience re-exports for test helpers."""

from __future__ import annotations

from tests.helpers.screen import FakeClock, FakeScreen
from tests.helpers.session import build_session, push_all

__all__ = ["FakeClock", "FakeScreen", "build_session", "push_all"]
