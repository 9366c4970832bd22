"""Realtime and push delivery channels for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .push import FcmPushChannel
from .realtime import RealtimeEventPublisher, realtime_event_publisher

__all__ = [
    "FcmPushChannel",
    "NotificationConnectionManager",
    "notification_manager",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
]
