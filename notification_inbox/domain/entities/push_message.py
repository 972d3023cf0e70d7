"""Domain entity describing a push message handed over by the push SDK."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from notification_inbox.utils import parse_iso_datetime


@dataclass
class PushNotificationContent:
    """Visible part of a push message, when the sender provided one."""

    title: str | None = None
    body: str | None = None
    image_url: str | None = None
    click_action: str | None = None
    channel_id: str | None = None
    tag: str | None = None
    color: str | None = None


@dataclass
class PushMessage:
    """Raw message as received from the push delivery SDK."""

    message_id: str | None = None
    notification: PushNotificationContent | None = None
    data: dict[str, Any] = field(default_factory=dict)
    sent_time: datetime | None = None

    @classmethod
    def from_fcm_dict(cls, message: Mapping[str, Any]) -> "PushMessage":
        """Build a message from the FCM JSON representation.

        Android specific values nested under ``notification.android`` are
        used when the top level notification block does not carry them.
        """

        notification_block = message.get("notification")
        content = None
        if isinstance(notification_block, Mapping):
            android = notification_block.get("android")
            if not isinstance(android, Mapping):
                android = {}

            def pick(*keys: str) -> str | None:
                for source in (notification_block, android):
                    for key in keys:
                        value = source.get(key)
                        if value not in (None, ""):
                            return str(value)
                return None

            content = PushNotificationContent(
                title=pick("title"),
                body=pick("body"),
                image_url=pick("imageUrl", "image"),
                click_action=pick("clickAction"),
                channel_id=pick("channelId"),
                tag=pick("tag"),
                color=pick("color"),
            )

        data = message.get("data")
        sent_at = _parse_sent_time(message.get("sentTime"))

        message_id = message.get("messageId")
        return cls(
            message_id=str(message_id) if message_id else None,
            notification=content,
            data=dict(data) if isinstance(data, Mapping) else {},
            sent_time=sent_at,
        )


def _parse_sent_time(value: Any) -> datetime | None:
    """Read the send time given as epoch milliseconds or an ISO-8601 string.

    Values that cannot be interpreted are ignored.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.isdigit():
            value = int(text)
        else:
            try:
                return parse_iso_datetime(text)
            except ValueError:
                return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


__all__ = ["PushMessage", "PushNotificationContent"]
