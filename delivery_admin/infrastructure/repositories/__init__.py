"""Repository implementations for infrastructure layer."""

from .delivery_log_repository import DeliveryLogRepository
from .directory_repository import DirectoryRepository
from .push_notification_repository import PushNotificationRepository
from .push_token_repository import PushTokenRepository

__all__ = [
    "DeliveryLogRepository",
    "DirectoryRepository",
    "PushNotificationRepository",
    "PushTokenRepository",
]
