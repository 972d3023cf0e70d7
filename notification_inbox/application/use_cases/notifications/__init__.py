"""Public helpers for feeding and presenting the notification inbox."""

from .group_by_date import (
    ENGLISH,
    INDONESIAN,
    InboxLabels,
    NotificationGroup,
    group_notifications_by_date,
)
from .ingest import PushSource, ingest_push_message, record_from_push_message

__all__ = [
    "ENGLISH",
    "INDONESIAN",
    "InboxLabels",
    "NotificationGroup",
    "group_notifications_by_date",
    "PushSource",
    "ingest_push_message",
    "record_from_push_message",
]
