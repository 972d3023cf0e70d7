"""Unit tests for the notification record entity and its persisted shape."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from notification_inbox.domain.entities import (
    NotificationRecord,
    NotificationRecordFormatError,
    dump_notification_records,
    load_notification_records,
)


def _record(**overrides) -> NotificationRecord:
    values = {
        "id": "msg-1",
        "title": "Order shipped",
        "body": "Your parcel is on its way",
        "received_at": datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return NotificationRecord(**values)


def test_identity_is_defined_by_id_only() -> None:
    """Records with the same id are the same notification."""

    first = _record(title="A")
    second = _record(title="B", is_read=True)
    other = _record(id="msg-2")

    assert first == second
    assert hash(first) == hash(second)
    assert first != other
    assert len({first, second, other}) == 2


def test_with_read_returns_new_record() -> None:
    """Marking a record as read leaves the original untouched."""

    record = _record()
    read = record.with_read()

    assert read.is_read is True
    assert record.is_read is False
    assert read.title == record.title


def test_to_json_dict_uses_persisted_keys() -> None:
    """Optional hints are omitted when unset and an empty payload is null."""

    data = _record(tag="orders").to_json_dict()

    assert data == {
        "title": "Order shipped",
        "body": "Your parcel is on its way",
        "timestamp": "2024-05-01T10:30:00+00:00",
        "messageId": "msg-1",
        "isRead": False,
        "data": None,
        "tag": "orders",
    }


def test_from_json_dict_accepts_millisecond_timestamps() -> None:
    """Entries written by other clients keep their values."""

    record = NotificationRecord.from_json_dict(
        {
            "title": "Promo",
            "body": "50% off",
            "timestamp": "2024-05-01T10:00:00.000",
            "messageId": "m-9",
            "isRead": True,
            "data": {"route": "/promo"},
            "clickAction": "OPEN_PROMO",
        }
    )

    assert record.id == "m-9"
    assert record.is_read is True
    assert record.payload == {"route": "/promo"}
    assert record.click_action == "OPEN_PROMO"
    assert record.received_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_from_json_dict_generates_missing_id_and_read_flag() -> None:
    record = NotificationRecord.from_json_dict(
        {"title": "T", "body": "B", "timestamp": "2024-05-01T10:00:00Z", "messageId": None}
    )

    assert record.id
    assert record.is_read is False
    assert record.payload == {}


@pytest.mark.parametrize(
    "entry",
    [
        "not an object",
        {"body": "B", "timestamp": "2024-05-01T10:00:00"},
        {"title": "T", "body": "B"},
        {"title": "T", "body": "B", "timestamp": "yesterday"},
        {"title": "T", "body": "B", "timestamp": "2024-05-01T10:00:00", "data": [1]},
    ],
)
def test_from_json_dict_rejects_malformed_entries(entry) -> None:
    with pytest.raises(NotificationRecordFormatError):
        NotificationRecord.from_json_dict(entry)


def test_dump_and_load_keep_order() -> None:
    records = [_record(id="b"), _record(id="a", is_read=True)]

    raw = dump_notification_records(records)
    loaded = load_notification_records(raw)

    assert isinstance(json.loads(raw), list)
    assert [record.id for record in loaded] == ["b", "a"]
    assert [record.is_read for record in loaded] == [False, True]


def test_load_rejects_non_array_blob() -> None:
    with pytest.raises(ValueError):
        load_notification_records('{"title": "T"}')


def test_payload_cannot_be_changed_through_a_record() -> None:
    """Records handed out in snapshots keep their stored payload."""

    source = {"route": "/orders/1"}
    record = _record(payload=source)
    source["route"] = "/changed"

    with pytest.raises(TypeError):
        record.payload["route"] = "/other"
    assert record.payload == {"route": "/orders/1"}
    assert record.with_read().payload == {"route": "/orders/1"}
