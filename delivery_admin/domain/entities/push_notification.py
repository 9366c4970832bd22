"""Domain entity representing a stored push notification definition."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .recipient import RecipientCategory


@dataclass
class PushNotification:
    """Announcement an administrator can broadcast to one or more audiences."""

    id: int | None
    title: str
    description: str
    image_url: str
    geofence_ids: list[str] = field(default_factory=list)
    targets_merchant: bool = False
    targets_driver: bool = False
    targets_customer: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def targets(self, category: RecipientCategory) -> bool:
        """Return ``True`` when ``category`` is part of the audience."""

        if category is RecipientCategory.CUSTOMER:
            return self.targets_customer
        if category is RecipientCategory.MERCHANT:
            return self.targets_merchant
        return self.targets_driver

    def has_audience(self) -> bool:
        return self.targets_customer or self.targets_merchant or self.targets_driver


__all__ = ["PushNotification"]
