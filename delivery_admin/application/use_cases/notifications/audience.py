"""Resolve the recipients of a push notification."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from delivery_admin.domain.entities import (
    PushNotification,
    RecipientCategory,
    ResolvedRecipient,
)
from delivery_admin.domain.exceptions import ResolutionError

from .ports import AudienceDirectory


@dataclass(frozen=True)
class CategoryAudience:
    """Directory that answers for one recipient category."""

    category: RecipientCategory
    directory: AudienceDirectory


class AudienceResolver:
    """Turn a notification into an ordered list of recipients.

    Categories are visited in the order of ``audiences``; the default wiring
    uses customer, merchant, driver. Results are concatenated in that order.
    """

    def __init__(self, audiences: Sequence[CategoryAudience]) -> None:
        self._audiences = tuple(audiences)

    async def resolve(self, notification: PushNotification) -> list[ResolvedRecipient]:
        recipients: list[ResolvedRecipient] = []
        for audience in self._audiences:
            if not notification.targets(audience.category):
                continue
            try:
                members = await audience.directory.members_in_geofences(
                    list(notification.geofence_ids)
                )
            except Exception as exc:
                raise ResolutionError(
                    f"Could not load {audience.category.value} recipients: {exc}"
                ) from exc
            recipients.extend(
                ResolvedRecipient(recipient_id=str(member.id), category=audience.category)
                for member in members
            )
        return recipients


__all__ = ["AudienceResolver", "CategoryAudience"]
