import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notification_inbox.config import get_settings
from notification_inbox.infrastructure.database import engine
from notification_inbox.infrastructure.notifications import (
    InboxBroadcaster,
    NotificationConnectionManager,
    NotificationStore,
    create_notification_store,
)
from notification_inbox.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def create_app(store: NotificationStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The notification store is created from the settings unless ``store`` is
    given; it is initialized on startup and disposed on shutdown.
    """

    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        notification_store = (
            store if store is not None else create_notification_store(settings)
        )
        await notification_store.initialize()

        manager = NotificationConnectionManager()
        broadcaster = InboxBroadcaster(notification_store, manager)
        broadcaster.attach()

        app.state.notification_store = notification_store
        app.state.connection_manager = manager
        logger.info(
            "Notification inbox ready with %s notification(s)",
            len(notification_store.notifications),
        )
        try:
            yield
        finally:
            broadcaster.detach()
            notification_store.dispose()
            app.state.notification_store = None
            if store is None:
                engine.dispose()

    app = FastAPI(title="Notification Inbox", lifespan=lifespan)

    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    return app


app = create_app()
