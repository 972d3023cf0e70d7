from .notification import (
    InboxFilter,
    NotificationGroupRead,
    NotificationListRead,
    NotificationRead,
    PushMessageContentPayload,
    PushMessagePayload,
    UnreadCountRead,
)

__all__ = [
    "InboxFilter",
    "NotificationGroupRead",
    "NotificationListRead",
    "NotificationRead",
    "PushMessageContentPayload",
    "PushMessagePayload",
    "UnreadCountRead",
]
