"""Build a notification store wired to the configured database."""

from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from notification_inbox.config import Settings
from notification_inbox.infrastructure import database
from notification_inbox.infrastructure.repositories import KeyValueStore, SqlKeyValueStore

from .store import NotificationStore


def create_notification_store(
    settings: Settings,
    *,
    bind: Engine | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> NotificationStore:
    """Return an uninitialized store backed by the ``key_value_entry`` table.

    The table is created when the store is initialized, so connection
    problems surface from :meth:`NotificationStore.initialize`.
    """

    engine = bind or database.engine
    sessions = session_factory or (
        database.SessionLocal if bind is None else database.build_session_factory(bind)
    )

    def open_storage() -> KeyValueStore:
        database.initialize_database(engine)
        return SqlKeyValueStore(sessions)

    return NotificationStore(
        open_storage,
        storage_key=settings.notifications_storage_key,
        max_notifications=settings.max_notifications,
    )


__all__ = ["create_notification_store"]
