"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InboxFilter(str, Enum):
    """Subset of the inbox returned by list endpoints."""

    ALL = "all"
    UNREAD = "unread"


class NotificationRead(BaseModel):
    """Representation of a stored notification delivered to the client."""

    id: str
    title: str
    body: str
    received_at: datetime
    is_read: bool
    payload: dict[str, Any] = Field(default_factory=dict)
    image_url: str | None = None
    click_action: str | None = None
    channel_id: str | None = None
    tag: str | None = None
    color: str | None = None


class NotificationListRead(BaseModel):
    """Snapshot of the inbox."""

    unread_count: int
    notifications: list[NotificationRead]


class NotificationGroupRead(BaseModel):
    """Notifications received on the same day under a display label."""

    label: str
    notifications: list[NotificationRead]


class UnreadCountRead(BaseModel):
    unread_count: int


class PushMessageContentPayload(BaseModel):
    """Visible part of an FCM message."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    body: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    click_action: str | None = Field(default=None, alias="clickAction")
    channel_id: str | None = Field(default=None, alias="channelId")
    tag: str | None = None
    color: str | None = None
    android: dict[str, Any] | None = None


class PushMessagePayload(BaseModel):
    """FCM shaped message forwarded by the push SDK binding."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message_id: str | None = Field(
        default=None, alias="messageId"
    )
    notification: PushMessageContentPayload | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    sent_time: int | str | None = Field(default=None, alias="sentTime")

    def to_fcm_dict(self) -> dict[str, Any]:
        """Return the payload using FCM key names."""

        return self.model_dump(by_alias=True, exclude_none=True)


__all__ = [
    "InboxFilter",
    "NotificationGroupRead",
    "NotificationListRead",
    "NotificationRead",
    "PushMessageContentPayload",
    "PushMessagePayload",
    "UnreadCountRead",
]
