"""Tests for settings and timezone resolution."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from notification_inbox.config import Settings, get_settings, reset_settings_cache
from notification_inbox.utils import ensure_app_timezone, get_app_timezone, parse_iso_datetime


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.notifications_storage_key == "fcm_notifications"
    assert settings.max_notifications == 50
    assert settings.inbox_locale == "id_ID"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MAX_NOTIFICATIONS", "7")
    monkeypatch.setenv("NOTIFICATIONS_STORAGE_KEY", "custom_key")
    reset_settings_cache()

    settings = get_settings()

    assert settings.max_notifications == 7
    assert settings.notifications_storage_key == "custom_key"


def test_settings_reject_non_positive_capacity() -> None:
    with pytest.raises(ValidationError):
        Settings(max_notifications=0)


def test_offset_timezone_is_resolved(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_TIMEZONE", "UTC+07:00")
    reset_settings_cache()
    get_app_timezone.cache_clear()

    localized = ensure_app_timezone(datetime(2024, 5, 1, 10, 0))

    assert localized.utcoffset() == timedelta(hours=7)


def test_parse_iso_datetime_accepts_zulu_suffix() -> None:
    parsed = parse_iso_datetime("2024-05-01T10:00:00Z")

    assert parsed.utcoffset() == timedelta(0)
