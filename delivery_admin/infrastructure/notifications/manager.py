"""Connection management helpers for realtime notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Manage active websocket connections grouped by recipient id.

    Customers, merchants, agents and the admin panel all subscribe through
    the same manager; the admin panel uses the configured admin channel id.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, recipient_id: str, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it for ``recipient_id``."""

        await websocket.accept()
        self._connections[recipient_id].add(websocket)

    def disconnect(self, recipient_id: str, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``recipient_id``."""

        connections = self._connections.get(recipient_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(recipient_id, None)

    def is_connected(self, recipient_id: str) -> bool:
        return bool(self._connections.get(recipient_id))

    async def send_to_recipient(self, recipient_id: str, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection for ``recipient_id``."""

        connections = list(self._connections.get(recipient_id, set()))
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:  # pragma: no cover - stale socket cleanup
                logger.debug("Dropping websocket of %s after send failure: %s", recipient_id, exc)
                self.disconnect(recipient_id, connection)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
