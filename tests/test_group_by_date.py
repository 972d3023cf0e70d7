"""Tests for the day grouping used by the inbox list."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from notification_inbox.application.use_cases.notifications import (
    ENGLISH,
    INDONESIAN,
    InboxLabels,
    group_notifications_by_date,
)
from notification_inbox.domain.entities import NotificationRecord

NOW = datetime(2024, 5, 10, 15, 0, tzinfo=timezone.utc)


def _record(notification_id: str, received_at: datetime, *, is_read: bool = False) -> NotificationRecord:
    return NotificationRecord(
        id=notification_id,
        title=notification_id,
        body="",
        received_at=received_at,
        is_read=is_read,
    )


def test_groups_today_yesterday_and_older() -> None:
    records = [
        _record("today-late", NOW - timedelta(hours=1)),
        _record("today-early", NOW - timedelta(hours=14)),
        _record("yesterday", NOW - timedelta(days=1)),
        _record("older", NOW - timedelta(days=9)),
    ]

    groups = group_notifications_by_date(records, labels=ENGLISH, now=NOW)

    assert [group.label for group in groups] == [
        "Today, 10 May",
        "Yesterday, 9 May",
        "1 May",
    ]
    assert [record.id for record in groups[0].notifications] == ["today-late", "today-early"]


def test_records_inside_a_group_are_sorted_newest_first() -> None:
    records = [
        _record("early", NOW - timedelta(hours=5)),
        _record("late", NOW - timedelta(hours=1)),
    ]

    (group,) = group_notifications_by_date(records, labels=INDONESIAN, now=NOW)

    assert group.label == "Hari ini, 10 Mei"
    assert [record.id for record in group.notifications] == ["late", "early"]


def test_unread_only_skips_read_records() -> None:
    records = [
        _record("read", NOW - timedelta(days=1), is_read=True),
        _record("unread", NOW - timedelta(hours=1)),
    ]

    groups = group_notifications_by_date(records, labels=ENGLISH, now=NOW, unread_only=True)

    assert [group.label for group in groups] == ["Today, 10 May"]


def test_empty_input_returns_no_groups() -> None:
    assert group_notifications_by_date([], now=NOW) == []


@pytest.mark.parametrize(
    ("locale", "expected"),
    [
        ("en_US", ENGLISH),
        ("en-GB", ENGLISH),
        ("id_ID", INDONESIAN),
        ("fr_FR", INDONESIAN),
        (None, INDONESIAN),
    ],
)
def test_labels_for_locale(locale, expected) -> None:
    assert InboxLabels.for_locale(locale) is expected
