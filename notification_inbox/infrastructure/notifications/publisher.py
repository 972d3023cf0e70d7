"""Serialize inbox snapshots and push them to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from notification_inbox.domain.entities import NotificationRecord

from .manager import NotificationConnectionManager
from .store import NotificationStore

logger = logging.getLogger(__name__)


def serialize_notification(record: NotificationRecord) -> dict[str, Any]:
    """Return the API representation of ``record``."""

    return {
        "id": record.id,
        "title": record.title,
        "body": record.body,
        "received_at": record.received_at.isoformat(),
        "is_read": record.is_read,
        "payload": dict(record.payload),
        "image_url": record.image_url,
        "click_action": record.click_action,
        "channel_id": record.channel_id,
        "tag": record.tag,
        "color": record.color,
    }


def serialize_inbox(store: NotificationStore) -> dict[str, Any]:
    """Return the snapshot payload sent to websocket clients."""

    return {
        "unread_count": store.unread_count,
        "notifications": [serialize_notification(record) for record in store.notifications],
    }


class InboxBroadcaster:
    """Listen to a :class:`NotificationStore` and broadcast every change."""

    def __init__(
        self, store: NotificationStore, manager: NotificationConnectionManager
    ) -> None:
        self._store = store
        self._manager = manager
        self._attached = False
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending_broadcasts(self) -> int:
        return len(self._pending)

    def attach(self) -> None:
        """Start listening to the store."""

        if self._attached:
            return
        self._store.add_listener(self.dispatch)
        self._attached = True

    def detach(self) -> None:
        """Stop listening to the store."""

        if not self._attached:
            return
        self._store.remove_listener(self.dispatch)
        self._attached = False

    def dispatch(self) -> None:
        """Schedule the current snapshot to be delivered to every client."""

        if not self._manager.connection_count:
            return

        message = {"type": "inbox", "data": serialize_inbox(self._store)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.broadcast, message)
        else:
            task = loop.create_task(self._manager.broadcast(message))
            self._pending.add(task)
            task.add_done_callback(self._on_broadcast_done)

    def _on_broadcast_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Inbox broadcast failed", exc_info=exc)


__all__ = [
    "InboxBroadcaster",
    "serialize_inbox",
    "serialize_notification",
]
