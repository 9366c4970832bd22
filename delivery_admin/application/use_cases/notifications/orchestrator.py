"""Entry point for sending a stored push notification."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any

from delivery_admin.domain.entities import PushNotification
from delivery_admin.domain.exceptions import DispatchError, NotificationNotFoundError

from .audience import AudienceResolver
from .dispatch import DispatchReport, FanoutDispatcher
from .ports import NotificationLookup, OperationalErrorLog

logger = logging.getLogger(__name__)

Job = Callable[[], Awaitable[Any]]
Spawn = Callable[[Job], Any]


class FanoutState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    ACKNOWLEDGED = "acknowledged"
    RESOLVING = "resolving"
    DISPATCHING = "dispatching"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class FanoutRun:
    """Progress of one detached send."""

    notification_id: int | None
    state: FanoutState = FanoutState.IDLE
    recipient_count: int = 0
    report: DispatchReport | None = None
    error: Exception | None = None


@dataclass(frozen=True)
class TriggerResult:
    """Answer given to the caller of :meth:`FanoutOrchestrator.trigger_send`."""

    accepted: bool
    not_found: bool = False
    error: NotificationNotFoundError | None = field(default=None, compare=False)
    run: FanoutRun | None = field(default=None, compare=False)


class FanoutOrchestrator:
    """Acknowledge a send request and deliver it in the background.

    ``trigger_send`` only looks the notification up. Audience resolution and
    dispatch are handed to ``spawn`` as a zero-argument coroutine function and
    start after the caller has its answer. Whatever goes wrong afterwards is
    written to the operational error log and never reaches the caller.

    ``spawn`` defaults to an asyncio task on the running loop. The HTTP layer
    passes ``BackgroundTasks.add_task`` so the work starts once the response
    is sent.
    """

    def __init__(
        self,
        lookup: NotificationLookup,
        resolver: AudienceResolver,
        dispatcher: FanoutDispatcher,
        error_log: OperationalErrorLog,
        *,
        spawn: Spawn | None = None,
    ) -> None:
        self._lookup = lookup
        self._resolver = resolver
        self._dispatcher = dispatcher
        self._error_log = error_log
        self._spawn = spawn or self._spawn_task
        self._tasks: set[asyncio.Task[Any]] = set()

    async def trigger_send(self, notification_id: int) -> TriggerResult:
        run = FanoutRun(notification_id=notification_id, state=FanoutState.VALIDATING)
        notification = await self._lookup.find_by_id(notification_id)
        if notification is None:
            run.state = FanoutState.FAILED
            logger.info("Push notification %s not found; nothing to send", notification_id)
            return TriggerResult(
                accepted=False,
                not_found=True,
                error=NotificationNotFoundError(notification_id),
                run=run,
            )

        run.state = FanoutState.ACKNOWLEDGED
        self._spawn(partial(self.run, notification, run))
        logger.info("Push notification %s accepted for delivery", notification.id)
        return TriggerResult(accepted=True, run=run)

    async def run(self, notification: PushNotification, run: FanoutRun | None = None) -> FanoutRun:
        """Resolve and dispatch ``notification``. Never raises."""

        run = run or FanoutRun(notification_id=notification.id)
        try:
            run.state = FanoutState.RESOLVING
            recipients = await self._resolver.resolve(notification)
            run.recipient_count = len(recipients)

            run.state = FanoutState.DISPATCHING
            run.report = await self._dispatcher.dispatch(notification, recipients)
        except Exception as exc:
            run.state = FanoutState.FAILED
            run.error = exc
            logger.exception(
                "Error in background push notification processing for %s", notification.id
            )
            self._record(f"Error in sending push notifications: {exc!r}")
            return run

        run.state = FanoutState.COMPLETED
        if run.report.failures:
            error = DispatchError(
                notification.id,
                [(failure.recipient.recipient_id, failure.error) for failure in run.report.failures],
            )
            self._record(f"Error in sending push notifications: {error}")
        return run

    async def drain(self) -> None:
        """Wait for every send started with the default spawner."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _spawn_task(self, job: Job) -> None:
        task = asyncio.get_running_loop().create_task(job())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _record(self, message: str) -> None:
        try:
            self._error_log.record(message)
        except Exception:  # pragma: no cover - error log implementations swallow their own failures
            logger.exception("Could not write to the operational error log")


__all__ = [
    "FanoutOrchestrator",
    "FanoutRun",
    "FanoutState",
    "TriggerResult",
]
