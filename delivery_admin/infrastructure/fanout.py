"""SQLAlchemy backed adapters for the push notification fan-out ports.

Every call opens its own short-lived session from ``session_factory`` so a
background send never shares the session of the request that started it.
The blocking query runs in anyio's worker threads; the event loop keeps
serving requests and websockets while a send is in progress.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

from anyio import to_thread
from sqlalchemy.orm import Session, sessionmaker

from delivery_admin.domain.entities import (
    DeliveryLogEntry,
    DirectoryMember,
    PushNotification,
    RecipientCategory,
)
from delivery_admin.infrastructure.repositories import (
    DeliveryLogRepository,
    DirectoryRepository,
    PushNotificationRepository,
    PushTokenRepository,
)

T = TypeVar("T")


class _SessionAdapter:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    async def _run(self, work: Callable[[Session], T]) -> T:
        """Run ``work`` with a fresh session in a worker thread."""

        def _in_session() -> T:
            with self._session_factory() as session:
                return work(session)

        return await to_thread.run_sync(_in_session)


class SqlNotificationLookup(_SessionAdapter):
    async def find_by_id(self, notification_id: int) -> PushNotification | None:
        return await self._run(
            lambda session: PushNotificationRepository(session).get(notification_id)
        )


class SqlAudienceDirectory(_SessionAdapter):
    """Directory lookup for a single recipient category."""

    def __init__(self, session_factory: sessionmaker[Session], category: RecipientCategory) -> None:
        super().__init__(session_factory)
        self.category = category

    async def members_in_geofences(self, geofence_ids: Sequence[str]) -> list[DirectoryMember]:
        ids = list(geofence_ids)
        return await self._run(
            lambda session: DirectoryRepository(session, self.category).list_by_geofences(ids)
        )


class SqlDeliveryLogStore(_SessionAdapter):
    async def append(self, category: RecipientCategory, entry: DeliveryLogEntry) -> None:
        await self._run(lambda session: DeliveryLogRepository(session).append(category, entry))

    async def append_admin_summary(self, entry: DeliveryLogEntry) -> None:
        await self._run(lambda session: DeliveryLogRepository(session).append_admin_summary(entry))


class SqlPushTokenSource(_SessionAdapter):
    """Return the device tokens registered for a recipient."""

    async def __call__(self, recipient_id: str) -> list[str]:
        return await self._run(
            lambda session: PushTokenRepository(session).list_tokens(recipient_id)
        )


__all__ = [
    "SqlAudienceDirectory",
    "SqlDeliveryLogStore",
    "SqlNotificationLookup",
    "SqlPushTokenSource",
]
