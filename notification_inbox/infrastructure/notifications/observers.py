"""Synchronous change notification for objects observed by the UI layer."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """Keep a list of listeners and call them when the owner changes."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def add_listener(self, listener: Listener) -> None:
        """Register ``listener`` to be called after every change."""

        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister ``listener``; unknown listeners are ignored."""

        try:
            self._listeners.remove(listener)
        except ValueError:
            return

    def notify_listeners(self) -> None:
        """Call every registered listener in registration order."""

        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Notification listener %r failed", listener)

    def dispose(self) -> None:
        """Forget every registered listener."""

        self._listeners.clear()


__all__ = ["ChangeNotifier", "Listener"]
