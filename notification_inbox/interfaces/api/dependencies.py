"""FastAPI dependency utilities."""

from fastapi import HTTPException, Request, status

from notification_inbox.application.use_cases.notifications import InboxLabels
from notification_inbox.config import get_settings
from notification_inbox.infrastructure.notifications import NotificationStore


def get_notification_store(request: Request) -> NotificationStore:
    """Return the store owned by the running application."""

    store: NotificationStore | None = getattr(
        request.app.state, "notification_store", None
    )
    if store is None or not store.is_initialized:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification inbox is not ready",
        )
    return store


def get_inbox_labels() -> InboxLabels:
    """Return the day header labels for the configured locale."""

    return InboxLabels.for_locale(get_settings().inbox_locale)
