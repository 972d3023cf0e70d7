"""Persistence helpers for string values stored under a key."""

from __future__ import annotations

from typing import Callable, Protocol

from sqlalchemy.orm import Session

from notification_inbox.infrastructure.models import KeyValueEntryModel


class KeyValueStore(Protocol):
    """Minimal string key-value storage used by the notification store."""

    def get_string(self, key: str) -> str | None:
        ...

    def set_string(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class SqlKeyValueStore:
    """Store values in the ``key_value_entry`` table, one row per key."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def get_string(self, key: str) -> str | None:
        with self._session_factory() as session:
            model = session.get(KeyValueEntryModel, key)
            if model is None:
                return None
            return model.value

    def set_string(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            model = session.get(KeyValueEntryModel, key)
            if model is None:
                model = KeyValueEntryModel(key=key, value=value)
            else:
                model.value = value
            session.add(model)
            session.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as session:
            session.query(KeyValueEntryModel).filter(
                KeyValueEntryModel.key == key
            ).delete(synchronize_session=False)
            session.commit()


class InMemoryKeyValueStore:
    """Dictionary backed store for hosts without a database."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get_string(self, key: str) -> str | None:
        return self._values.get(key)

    def set_string(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "SqlKeyValueStore"]
