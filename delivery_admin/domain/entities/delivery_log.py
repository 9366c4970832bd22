"""Domain entity for append-only notification delivery logs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .push_notification import PushNotification


@dataclass
class DeliveryLogEntry:
    """Snapshot of a notification as delivered to a recipient.

    The admin summary entry written once per send has no ``recipient_id``.
    """

    id: int | None
    recipient_id: str | None
    title: str
    description: str
    image_url: str
    created_at: datetime | None = None

    @classmethod
    def snapshot(
        cls,
        notification: PushNotification,
        *,
        recipient_id: str | None = None,
        created_at: datetime | None = None,
    ) -> "DeliveryLogEntry":
        return cls(
            id=None,
            recipient_id=recipient_id,
            title=notification.title,
            description=notification.description,
            image_url=notification.image_url,
            created_at=created_at,
        )


__all__ = ["DeliveryLogEntry"]
