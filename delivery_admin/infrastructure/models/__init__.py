"""ORM models used by the application infrastructure."""

from .delivery_log import (
    AdminNotificationLogModel,
    AgentAnnouncementLogModel,
    CustomerNotificationLogModel,
    MerchantNotificationLogModel,
)
from .directory import AgentModel, CustomerModel, MerchantModel
from .push_notification import PushNotificationModel
from .push_token import PushTokenModel

__all__ = [
    "AdminNotificationLogModel",
    "AgentAnnouncementLogModel",
    "CustomerNotificationLogModel",
    "MerchantNotificationLogModel",
    "AgentModel",
    "CustomerModel",
    "MerchantModel",
    "PushNotificationModel",
    "PushTokenModel",
]
