"""Domain entities exposed by the application."""

from .notification_record import (
    NotificationRecord,
    NotificationRecordFormatError,
    dump_notification_records,
    generate_notification_id,
    load_notification_records,
)
from .push_message import PushMessage, PushNotificationContent

__all__ = [
    "NotificationRecord",
    "NotificationRecordFormatError",
    "dump_notification_records",
    "generate_notification_id",
    "load_notification_records",
    "PushMessage",
    "PushNotificationContent",
]
