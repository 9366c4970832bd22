"""Helpers to broadcast realtime events to connected clients."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from anyio import from_thread

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Dispatch structured realtime events to websocket subscribers.

    ``broadcast`` only schedules the send and returns immediately, also when
    it is called from a worker thread. Recipients without an open socket are
    skipped.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._tasks: set[asyncio.Task[None]] = set()

    def broadcast(self, recipient_id: str, event_name: str, payload: Any) -> None:
        """Schedule an ``event_name`` event for ``recipient_id``."""

        if not recipient_id or not self._manager.is_connected(recipient_id):
            return

        message = {"type": event_name, "data": copy.deepcopy(payload)}
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Worker thread: hop to the loop only to create the task.
            from_thread.run_sync(self._start_send, recipient_id, message)
        else:
            self._start_send(recipient_id, message)

    async def drain(self) -> None:
        """Wait until every scheduled send has finished."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _start_send(self, recipient_id: str, message: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(
            self._manager.send_to_recipient(recipient_id, message)
        )
        self._tasks.add(task)
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.warning("Realtime send failed: %s", task.exception())


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


__all__ = ["RealtimeEventPublisher", "realtime_event_publisher"]
