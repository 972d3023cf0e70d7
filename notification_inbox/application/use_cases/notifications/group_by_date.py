"""Group inbox notifications under day headers for display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from notification_inbox.domain.entities import NotificationRecord
from notification_inbox.utils import ensure_app_timezone, now_in_app_timezone


@dataclass(frozen=True)
class InboxLabels:
    """Localized strings used to build the day headers."""

    locale: str
    today: str
    yesterday: str
    months: tuple[str, ...]

    def format_day(self, value: datetime) -> str:
        """Render ``value`` as ``"<day> <month name>"``."""

        return f"{value.day} {self.months[value.month - 1]}"

    @classmethod
    def for_locale(cls, locale: str | None) -> "InboxLabels":
        """Return the preset for ``locale``; unknown locales use Indonesian."""

        normalized = (locale or "").replace("-", "_").lower()
        language = normalized.split("_", 1)[0]
        return _PRESETS.get(language, INDONESIAN)


ENGLISH = InboxLabels(
    locale="en_US",
    today="Today",
    yesterday="Yesterday",
    months=(
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
)

INDONESIAN = InboxLabels(
    locale="id_ID",
    today="Hari ini",
    yesterday="Kemarin",
    months=(
        "Januari",
        "Februari",
        "Maret",
        "April",
        "Mei",
        "Juni",
        "Juli",
        "Agustus",
        "September",
        "Oktober",
        "November",
        "Desember",
    ),
)

_PRESETS = {"en": ENGLISH, "id": INDONESIAN}


@dataclass(frozen=True)
class NotificationGroup:
    """Notifications received on the same day."""

    label: str
    notifications: tuple[NotificationRecord, ...]


def _label_for(record: NotificationRecord, *, labels: InboxLabels, today: datetime) -> str:
    received_at = ensure_app_timezone(record.received_at)
    day = labels.format_day(received_at)
    received_on = received_at.date()
    if received_on == today.date():
        return f"{labels.today}, {day}"
    if received_on == (today - timedelta(days=1)).date():
        return f"{labels.yesterday}, {day}"
    return day


def group_notifications_by_date(
    records: Iterable[NotificationRecord],
    *,
    labels: InboxLabels = INDONESIAN,
    now: datetime | None = None,
    unread_only: bool = False,
) -> list[NotificationGroup]:
    """Split ``records`` into day groups.

    Groups keep the order in which their first record appears; records in a
    group are sorted newest first.
    """

    today = ensure_app_timezone(now) if now is not None else now_in_app_timezone()
    grouped: dict[str, list[NotificationRecord]] = {}
    for record in records:
        if unread_only and record.is_read:
            continue
        grouped.setdefault(_label_for(record, labels=labels, today=today), []).append(record)

    return [
        NotificationGroup(
            label=label,
            notifications=tuple(
                sorted(items, key=lambda item: item.received_at, reverse=True)
            ),
        )
        for label, items in grouped.items()
    ]


__all__ = [
    "ENGLISH",
    "INDONESIAN",
    "InboxLabels",
    "NotificationGroup",
    "group_notifications_by_date",
]
