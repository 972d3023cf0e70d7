"""SQLAlchemy model for persisted key-value entries."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from notification_inbox.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class KeyValueEntryModel(Base):
    """Single string value stored under a unique key."""

    __tablename__ = "key_value_entry"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )


__all__ = ["KeyValueEntryModel"]
