"""Repository implementations for infrastructure layer."""

from .key_value_repository import (
    InMemoryKeyValueStore,
    KeyValueStore,
    SqlKeyValueStore,
)

__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "SqlKeyValueStore"]
