"""Shared fixtures for the test suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``notification_inbox`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from notification_inbox.config import reset_settings_cache  # noqa: E402
from notification_inbox.utils import get_app_timezone  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def default_timezone(monkeypatch: pytest.MonkeyPatch):
    """Run every test with the application timezone pinned to UTC."""

    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()
