"""Domain entity representing a notification stored in the inbox."""

from __future__ import annotations

import json
import uuid
from types import MappingProxyType
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Iterable, Mapping

from notification_inbox.utils import parse_iso_datetime

# Persisted key for every optional presentation hint.
_HINT_KEYS: dict[str, str] = {
    "image_url": "imageUrl",
    "click_action": "clickAction",
    "channel_id": "channelId",
    "tag": "tag",
    "color": "color",
}


class NotificationRecordFormatError(ValueError):
    """Raised when a persisted notification entry cannot be decoded."""


def generate_notification_id() -> str:
    """Return a random identifier for messages delivered without one."""

    return str(uuid.uuid4())


@dataclass(frozen=True, eq=False)
class NotificationRecord:
    """Push message kept in the local inbox.

    Records are immutable: read state transitions produce a new instance via
    :meth:`with_read`. Two records are the same notification when their
    ``id`` matches, whatever the other fields hold.
    """

    id: str
    title: str
    body: str
    received_at: datetime
    is_read: bool = False
    payload: Mapping[str, Any] = field(default_factory=dict)
    image_url: str | None = None
    click_action: str | None = None
    channel_id: str | None = None
    tag: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        # Read-only copy, shared by every snapshot of the store.
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload or {})))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, NotificationRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_read(self) -> "NotificationRecord":
        """Return a copy of the record flagged as read."""

        return replace(self, is_read=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Return the persisted representation of the record."""

        data: dict[str, Any] = {
            "title": self.title,
            "body": self.body,
            "timestamp": self.received_at.isoformat(),
            "messageId": self.id,
            "isRead": self.is_read,
            "data": dict(self.payload) if self.payload else None,
        }
        for attribute, key in _HINT_KEYS.items():
            value = getattr(self, attribute)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_json_dict(cls, data: Any) -> "NotificationRecord":
        """Build a record from its persisted representation.

        Raises :class:`NotificationRecordFormatError` when ``data`` does not
        look like a persisted record.
        """

        if not isinstance(data, Mapping):
            raise NotificationRecordFormatError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        title = data.get("title")
        body = data.get("body")
        timestamp = data.get("timestamp")
        if not isinstance(title, str) or not isinstance(body, str):
            raise NotificationRecordFormatError("Notification title and body must be strings")
        if not isinstance(timestamp, str):
            raise NotificationRecordFormatError("Notification timestamp is missing")
        try:
            received_at = parse_iso_datetime(timestamp)
        except ValueError as exc:
            raise NotificationRecordFormatError(
                f"Invalid notification timestamp {timestamp!r}"
            ) from exc

        payload = data.get("data") or {}
        if not isinstance(payload, Mapping):
            raise NotificationRecordFormatError("Notification data must be an object")

        message_id = data.get("messageId")
        hints = {}
        for attribute, key in _HINT_KEYS.items():
            value = data.get(key)
            hints[attribute] = None if value is None else str(value)

        return cls(
            id=str(message_id) if message_id else generate_notification_id(),
            title=title,
            body=body,
            received_at=received_at,
            is_read=bool(data.get("isRead", False)),
            payload=dict(payload),
            **hints,
        )


def dump_notification_records(records: Iterable[NotificationRecord]) -> str:
    """Serialize ``records`` into the JSON array stored in the key-value store."""

    return json.dumps([record.to_json_dict() for record in records], ensure_ascii=False)


def load_notification_records(raw: str) -> list[NotificationRecord]:
    """Parse the stored JSON array back into records.

    Raises ``ValueError`` (including :class:`json.JSONDecodeError` and
    :class:`NotificationRecordFormatError`) on malformed content.
    """

    decoded = json.loads(raw)
    if not isinstance(decoded, list):
        raise NotificationRecordFormatError("Stored notifications must be a JSON array")
    return [NotificationRecord.from_json_dict(item) for item in decoded]


__all__ = [
    "NotificationRecord",
    "NotificationRecordFormatError",
    "dump_notification_records",
    "generate_notification_id",
    "load_notification_records",
]
