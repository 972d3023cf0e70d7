"""Endpoints and websocket handler for the notification inbox."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from notification_inbox.application.use_cases.notifications import (
    InboxLabels,
    PushSource,
    group_notifications_by_date,
    ingest_push_message,
)
from notification_inbox.domain.entities import NotificationRecord, PushMessage
from notification_inbox.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationStore,
    serialize_inbox,
    serialize_notification,
)
from notification_inbox.interfaces.api.dependencies import (
    get_inbox_labels,
    get_notification_store,
)
from notification_inbox.interfaces.api.schemas import (
    InboxFilter,
    NotificationGroupRead,
    NotificationListRead,
    NotificationRead,
    PushMessagePayload,
    UnreadCountRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(record: NotificationRecord) -> NotificationRead:
    return NotificationRead(**serialize_notification(record))


def _filtered(store: NotificationStore, inbox_filter: InboxFilter) -> tuple[NotificationRecord, ...]:
    if inbox_filter is InboxFilter.UNREAD:
        return store.unread()
    return store.notifications


def _not_found(notification_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Notification {notification_id} not found",
    )


@router.get("/", response_model=NotificationListRead)
def list_notifications(
    inbox_filter: InboxFilter = Query(InboxFilter.ALL, alias="filter"),
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationListRead:
    """Return the stored notifications, newest first."""

    return NotificationListRead(
        unread_count=store.unread_count,
        notifications=[
            _notification_to_schema(record) for record in _filtered(store, inbox_filter)
        ],
    )


@router.get("/grouped", response_model=list[NotificationGroupRead])
def list_grouped_notifications(
    inbox_filter: InboxFilter = Query(InboxFilter.ALL, alias="filter"),
    store: NotificationStore = Depends(get_notification_store),
    labels: InboxLabels = Depends(get_inbox_labels),
) -> list[NotificationGroupRead]:
    """Return the notifications grouped under day headers."""

    groups = group_notifications_by_date(
        store.notifications,
        labels=labels,
        unread_only=inbox_filter is InboxFilter.UNREAD,
    )
    return [
        NotificationGroupRead(
            label=group.label,
            notifications=[_notification_to_schema(record) for record in group.notifications],
        )
        for group in groups
    ]


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    store: NotificationStore = Depends(get_notification_store),
) -> UnreadCountRead:
    """Return the number of notifications the user has not opened."""

    return UnreadCountRead(unread_count=store.unread_count)


@router.post("/push", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
async def receive_push_message(
    payload: PushMessagePayload,
    source: PushSource = Query(PushSource.FOREGROUND),
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Store a push message forwarded by the push SDK binding."""

    message = PushMessage.from_fcm_dict(payload.to_fcm_dict())
    record = await ingest_push_message(store, message, source)
    return _notification_to_schema(record)


@router.post("/read-all", response_model=UnreadCountRead)
async def mark_all_notifications_as_read(
    store: NotificationStore = Depends(get_notification_store),
) -> UnreadCountRead:
    """Flag every stored notification as read."""

    await store.mark_all_as_read()
    return UnreadCountRead(unread_count=store.unread_count)


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_as_read(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Flag one notification as read."""

    if store.get(notification_id) is None:
        raise _not_found(notification_id)
    await store.mark_as_read(notification_id)
    return _notification_to_schema(store.get(notification_id))


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> Response:
    """Remove one notification from the inbox."""

    if not await store.remove_notification(notification_id):
        raise _not_found(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(
    store: NotificationStore = Depends(get_notification_store),
) -> Response:
    """Remove every notification from the inbox."""

    await store.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams inbox snapshots to the client."""

    store: NotificationStore | None = getattr(
        websocket.app.state, "notification_store", None
    )
    manager: NotificationConnectionManager = websocket.app.state.connection_manager
    if store is None or not store.is_initialized:
        await websocket.close(code=1011)
        return

    await manager.connect(websocket)
    try:
        await websocket.send_json({"type": "init", "data": serialize_inbox(store)})
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list):
                    for notification_id in ids:
                        await store.mark_as_read(str(notification_id))
                continue
    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception:
        logger.exception("Inbox websocket failed")
        manager.disconnect(websocket)
        raise
