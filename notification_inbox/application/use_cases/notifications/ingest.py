"""Translate push messages into inbox records and store them."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from notification_inbox.domain.entities import (
    NotificationRecord,
    PushMessage,
    generate_notification_id,
)
from notification_inbox.infrastructure.notifications import NotificationStore
from notification_inbox.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

DATA_MESSAGE_TITLE = "Data Message"

# Fallback keys looked up in the data payload for each presentation hint.
_DATA_HINT_KEYS: dict[str, tuple[str, ...]] = {
    "image_url": ("image_url", "imageUrl", "image"),
    "click_action": ("click_action", "clickAction"),
    "channel_id": ("channel_id", "channelId"),
    "tag": ("tag",),
    "color": ("color",),
}


class PushSource(str, Enum):
    """Channel through which the push SDK delivered a message."""

    FOREGROUND = "foreground"
    OPENED_APP = "opened_app"
    INITIAL_MESSAGE = "initial_message"


def _data_hint(data: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = data.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def record_from_push_message(
    message: PushMessage, *, received_at: datetime | None = None
) -> NotificationRecord:
    """Build the inbox record for ``message``.

    Data-only messages get a generic title and the data mapping as body.
    """

    content = message.notification
    data = dict(message.data)
    hints: dict[str, str | None] = {}
    for attribute, keys in _DATA_HINT_KEYS.items():
        value = getattr(content, attribute) if content is not None else None
        hints[attribute] = value or _data_hint(data, keys)

    title = content.title if content is not None and content.title else DATA_MESSAGE_TITLE
    body = content.body if content is not None and content.body else str(data)

    return NotificationRecord(
        id=message.message_id or generate_notification_id(),
        title=title,
        body=body,
        received_at=received_at or now_in_app_timezone(),
        is_read=False,
        payload=data,
        **hints,
    )


async def ingest_push_message(
    store: NotificationStore,
    message: PushMessage,
    source: PushSource = PushSource.FOREGROUND,
) -> NotificationRecord:
    """Store ``message`` in the inbox and return the matching record.

    When the message id is already stored the existing record is returned
    unchanged.
    """

    if message.message_id:
        existing = store.get(message.message_id)
        if existing is not None:
            logger.debug(
                "Push message %s from %s already stored", message.message_id, source.value
            )
            return existing

    record = record_from_push_message(message)
    await store.add(record)
    logger.info("Stored push message %s received via %s", record.id, source.value)
    return record


__all__ = [
    "DATA_MESSAGE_TITLE",
    "PushSource",
    "ingest_push_message",
    "record_from_push_message",
]
