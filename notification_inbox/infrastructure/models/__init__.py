"""ORM models used by the application infrastructure."""

from .key_value_entry import KeyValueEntryModel

__all__ = ["KeyValueEntryModel"]
