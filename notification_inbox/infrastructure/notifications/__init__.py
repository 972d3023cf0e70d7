"""Notification inbox state and realtime helpers for the infrastructure layer."""

from .factory import create_notification_store
from .manager import NotificationConnectionManager
from .observers import ChangeNotifier, Listener
from .publisher import InboxBroadcaster, serialize_inbox, serialize_notification
from .store import (
    DEFAULT_MAX_NOTIFICATIONS,
    DEFAULT_STORAGE_KEY,
    NotificationStore,
    NotificationStoreError,
    StoreDisposedError,
    StoreNotInitializedError,
)

__all__ = [
    "ChangeNotifier",
    "create_notification_store",
    "Listener",
    "NotificationConnectionManager",
    "InboxBroadcaster",
    "serialize_inbox",
    "serialize_notification",
    "DEFAULT_MAX_NOTIFICATIONS",
    "DEFAULT_STORAGE_KEY",
    "NotificationStore",
    "NotificationStoreError",
    "StoreDisposedError",
    "StoreNotInitializedError",
]
