"""Domain entity for a device registered to receive push messages."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PushToken:
    """FCM registration token owned by a recipient."""

    id: int | None
    recipient_id: str
    token: str
    created_at: datetime | None = None


__all__ = ["PushToken"]
