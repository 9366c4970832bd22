"""Collaborators consumed by the push notification fan-out."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from delivery_admin.domain.entities import (
    DeliveryLogEntry,
    DirectoryMember,
    PushNotification,
    RecipientCategory,
)


class NotificationLookup(Protocol):
    async def find_by_id(self, notification_id: int) -> PushNotification | None: ...


class AudienceDirectory(Protocol):
    """Answers which members of one category belong to the given geofences."""

    async def members_in_geofences(self, geofence_ids: Sequence[str]) -> Sequence[DirectoryMember]: ...


class DeliveryLogStore(Protocol):
    async def append(self, category: RecipientCategory, entry: DeliveryLogEntry) -> None: ...

    async def append_admin_summary(self, entry: DeliveryLogEntry) -> None: ...


class PushChannel(Protocol):
    """Push delivery service. Raises on failure."""

    async def send(self, recipient_id: str, event_type: str, payload: dict[str, Any]) -> None: ...


class RealtimeChannel(Protocol):
    """Fire-and-forget realtime broadcaster."""

    def broadcast(self, recipient_id: str, event_name: str, payload: dict[str, Any]) -> None: ...


class OperationalErrorLog(Protocol):
    """Best-effort error sink. Implementations must not raise."""

    def record(self, message: str) -> None: ...


__all__ = [
    "AudienceDirectory",
    "DeliveryLogStore",
    "NotificationLookup",
    "OperationalErrorLog",
    "PushChannel",
    "RealtimeChannel",
]
