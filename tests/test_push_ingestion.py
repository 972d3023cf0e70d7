"""Tests for turning push messages into inbox records."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from notification_inbox.application.use_cases.notifications import (
    PushSource,
    ingest_push_message,
    record_from_push_message,
)
from notification_inbox.domain.entities import PushMessage
from notification_inbox.infrastructure.notifications import NotificationStore
from notification_inbox.infrastructure.repositories import InMemoryKeyValueStore


def test_from_fcm_dict_reads_notification_and_android_blocks() -> None:
    message = PushMessage.from_fcm_dict(
        {
            "messageId": "0:1715",
            "notification": {
                "title": "Flash sale",
                "body": "Starts now",
                "android": {"imageUrl": "https://cdn/x.png", "channelId": "promo"},
            },
            "data": {"route": "/sale"},
            "sentTime": 1714557600000,
        }
    )

    assert message.message_id == "0:1715"
    assert message.notification.title == "Flash sale"
    assert message.notification.image_url == "https://cdn/x.png"
    assert message.notification.channel_id == "promo"
    assert message.data == {"route": "/sale"}
    assert message.sent_time == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_record_from_notification_message() -> None:
    received_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    message = PushMessage.from_fcm_dict(
        {
            "messageId": "m-1",
            "notification": {"title": "Hi", "body": "There", "tag": "greeting"},
            "data": {"click_action": "OPEN_HOME", "color": "#00FF00"},
        }
    )

    record = record_from_push_message(message, received_at=received_at)

    assert record.id == "m-1"
    assert record.title == "Hi"
    assert record.body == "There"
    assert record.tag == "greeting"
    assert record.click_action == "OPEN_HOME"
    assert record.color == "#00FF00"
    assert record.received_at == received_at
    assert record.is_read is False


def test_record_from_data_only_message_generates_id() -> None:
    """Data-only messages get a generic title and a generated id."""

    message = PushMessage(data={"orderId": "42"})

    record = record_from_push_message(message)

    assert record.title == "Data Message"
    assert record.body == str({"orderId": "42"})
    assert record.payload == {"orderId": "42"}
    assert record.id


@pytest.mark.anyio
async def test_ingest_push_message_deduplicates_by_message_id() -> None:
    store = NotificationStore(InMemoryKeyValueStore)
    await store.initialize()
    message = PushMessage.from_fcm_dict(
        {"messageId": "dup", "notification": {"title": "One", "body": "Body"}}
    )

    first = await ingest_push_message(store, message, PushSource.FOREGROUND)
    second = await ingest_push_message(store, message, PushSource.OPENED_APP)

    assert first is second
    assert len(store.notifications) == 1
    assert store.unread_count == 1


@pytest.mark.parametrize(
    ("sent_time", "expected"),
    [
        ("1714557600000", datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)),
        ("2024-05-01T10:00:00Z", datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)),
        ("not a time", None),
        ("", None),
        (None, None),
    ],
)
def test_from_fcm_dict_sent_time_formats(sent_time, expected) -> None:
    """Send times arrive as epoch milliseconds, ISO strings or garbage."""

    message = PushMessage.from_fcm_dict({"messageId": "m", "sentTime": sent_time})

    assert message.sent_time == expected
