"""Domain entities exposed by the application."""

from .delivery_log import DeliveryLogEntry
from .push_notification import PushNotification
from .push_token import PushToken
from .recipient import DirectoryMember, RecipientCategory, ResolvedRecipient

__all__ = [
    "DeliveryLogEntry",
    "DirectoryMember",
    "PushNotification",
    "PushToken",
    "RecipientCategory",
    "ResolvedRecipient",
]
