"""In-memory notification inbox mirrored to a single key-value entry."""

from __future__ import annotations

import logging
from typing import Callable

from anyio import to_thread

from notification_inbox.domain.entities import (
    NotificationRecord,
    dump_notification_records,
    load_notification_records,
)
from notification_inbox.infrastructure.repositories import KeyValueStore

from .observers import ChangeNotifier

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "fcm_notifications"
DEFAULT_MAX_NOTIFICATIONS = 50


class NotificationStoreError(RuntimeError):
    """Base error for notification store misuse."""


class StoreNotInitializedError(NotificationStoreError):
    """Raised when the store is used before :meth:`NotificationStore.initialize`."""


class StoreDisposedError(NotificationStoreError):
    """Raised when the store is used after :meth:`NotificationStore.dispose`."""


class NotificationStore(ChangeNotifier):
    """Capacity bounded list of notifications, newest first.

    The whole list is persisted as one JSON array under ``storage_key``.
    Storage is opened lazily by :meth:`initialize` through
    ``storage_factory``; afterwards every effective mutation rewrites the
    blob and notifies the listeners. Failed writes are logged and the
    in-memory list stays authoritative until the next successful write.

    Calls are expected to be serialized by the owner; the store does not
    lock around mutations.
    """

    def __init__(
        self,
        storage_factory: Callable[[], KeyValueStore],
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        max_notifications: int = DEFAULT_MAX_NOTIFICATIONS,
    ) -> None:
        super().__init__()
        if max_notifications < 1:
            raise ValueError("max_notifications must be at least 1")
        self._storage_factory = storage_factory
        self._storage: KeyValueStore | None = None
        self._storage_key = storage_key
        self._max_notifications = max_notifications
        self._notifications: list[NotificationRecord] = []
        self._is_initialized = False
        self._is_disposed = False

    # Read access

    @property
    def notifications(self) -> tuple[NotificationRecord, ...]:
        """Immutable snapshot of the stored notifications, newest first."""

        return tuple(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for record in self._notifications if not record.is_read)

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    @property
    def max_notifications(self) -> int:
        return self._max_notifications

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def get(self, notification_id: str) -> NotificationRecord | None:
        """Return the notification with ``notification_id`` if it is stored."""

        for record in self._notifications:
            if record.id == notification_id:
                return record
        return None

    def unread(self) -> tuple[NotificationRecord, ...]:
        """Snapshot of the unread notifications, newest first."""

        return tuple(record for record in self._notifications if not record.is_read)

    # Lifecycle

    async def initialize(self) -> None:
        """Open the storage and load the persisted notifications.

        Calling it again after a successful run does nothing. Errors while
        opening the storage propagate; stored content that cannot be read or
        parsed resets the inbox to empty. Loaded lists longer than
        ``max_notifications`` are cut to the newest entries.
        """

        self._ensure_not_disposed()
        if self._is_initialized:
            return

        try:
            storage = await to_thread.run_sync(self._storage_factory)
        except Exception:
            logger.exception("Notification store initialization failed")
            raise

        try:
            raw = await to_thread.run_sync(storage.get_string, self._storage_key)
        except Exception:
            logger.exception(
                "Failed to read stored notifications under %r; starting empty",
                self._storage_key,
            )
            raw = None

        self._storage = storage
        # Newest first, so a list saved under a larger cap keeps its head.
        self._notifications = self._decode(raw)[: self._max_notifications]
        self._is_initialized = True
        logger.debug(
            "Notification store loaded %s notification(s) from %r",
            len(self._notifications),
            self._storage_key,
        )
        self.notify_listeners()

    def dispose(self) -> None:
        """Drop listeners and in-memory notifications; the store is unusable afterwards."""

        self._notifications.clear()
        self._is_disposed = True
        super().dispose()

    # Mutations

    async def add(self, record: NotificationRecord) -> bool:
        """Prepend ``record`` unless a notification with the same id exists.

        The oldest notifications are evicted while the list exceeds
        ``max_notifications``. Returns ``True`` when the record was stored.
        """

        self._ensure_ready()
        if self.get(record.id) is not None:
            logger.debug("Ignoring duplicate notification %s", record.id)
            return False

        self._notifications.insert(0, record)
        while len(self._notifications) > self._max_notifications:
            evicted = self._notifications.pop()
            logger.debug("Evicted notification %s (capacity %s)", evicted.id, self._max_notifications)

        await self._persist()
        self.notify_listeners()
        return True

    async def mark_as_read(self, notification_id: str) -> bool:
        """Flag one notification as read. Returns ``True`` when it changed."""

        self._ensure_ready()
        for index, record in enumerate(self._notifications):
            if record.id != notification_id:
                continue
            if record.is_read:
                return False
            self._notifications[index] = record.with_read()
            await self._persist()
            self.notify_listeners()
            return True
        return False

    async def mark_all_as_read(self) -> bool:
        """Flag every unread notification as read.

        Nothing is written and no listener is called when every notification
        was already read. Returns ``True`` when at least one record changed.
        """

        self._ensure_ready()
        changed = False
        for index, record in enumerate(self._notifications):
            if not record.is_read:
                self._notifications[index] = record.with_read()
                changed = True

        if not changed:
            return False

        await self._persist()
        self.notify_listeners()
        return True

    async def remove_notification(self, notification_id: str) -> bool:
        """Delete one notification. Returns ``True`` when it existed."""

        self._ensure_ready()
        before = len(self._notifications)
        self._notifications = [
            record for record in self._notifications if record.id != notification_id
        ]
        if len(self._notifications) == before:
            return False

        await self._persist()
        self.notify_listeners()
        return True

    async def clear_all(self) -> None:
        """Delete every notification from memory and storage."""

        self._ensure_ready()
        self._notifications.clear()
        storage = self._storage
        if storage is not None:
            try:
                await to_thread.run_sync(storage.remove, self._storage_key)
            except Exception:
                logger.exception("Failed to erase persisted notifications")
        self.notify_listeners()

    # Persistence

    def _decode(self, raw: str | None) -> list[NotificationRecord]:
        if raw is None:
            return []
        try:
            return load_notification_records(raw)
        except Exception:
            logger.exception(
                "Stored notifications under %r are unreadable; starting empty",
                self._storage_key,
            )
            return []

    async def _persist(self) -> None:
        storage = self._storage
        if storage is None:
            return
        try:
            payload = dump_notification_records(self._notifications)
            await to_thread.run_sync(storage.set_string, self._storage_key, payload)
        except Exception:
            logger.exception("Failed to persist %s notification(s)", len(self._notifications))

    def _ensure_not_disposed(self) -> None:
        if self._is_disposed:
            raise StoreDisposedError("Notification store has been disposed")

    def _ensure_ready(self) -> None:
        self._ensure_not_disposed()
        if not self._is_initialized:
            raise StoreNotInitializedError(
                "NotificationStore.initialize() must be awaited before use"
            )


__all__ = [
    "DEFAULT_MAX_NOTIFICATIONS",
    "DEFAULT_STORAGE_KEY",
    "NotificationStore",
    "NotificationStoreError",
    "StoreDisposedError",
    "StoreNotInitializedError",
]
