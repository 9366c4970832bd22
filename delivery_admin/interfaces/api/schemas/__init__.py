from .notification import DeliveryLogRead, PushTokenCreate, PushTokenRead
from .push_notification import PushNotificationRead, PushNotificationSendResponse

__all__ = [
    "DeliveryLogRead",
    "PushNotificationRead",
    "PushNotificationSendResponse",
    "PushTokenCreate",
    "PushTokenRead",
]
