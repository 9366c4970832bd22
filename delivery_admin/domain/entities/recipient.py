"""Recipient categories and the members resolved for a send."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RecipientCategory(str, Enum):
    """Audience a push notification can target.

    Declaration order is the order in which audiences are resolved.
    """

    CUSTOMER = "customer"
    MERCHANT = "merchant"
    DRIVER = "driver"


@dataclass(frozen=True)
class DirectoryMember:
    """Row returned by a customer, merchant or agent directory lookup."""

    id: str
    geofence_id: str | None = None


@dataclass(frozen=True)
class ResolvedRecipient:
    """Single recipient of one send."""

    recipient_id: str
    category: RecipientCategory


__all__ = ["DirectoryMember", "RecipientCategory", "ResolvedRecipient"]
