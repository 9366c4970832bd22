"""SQLAlchemy models for the append-only notification delivery logs."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from delivery_admin.infrastructure.database import Base
from delivery_admin.utils import now_in_app_naive_datetime


class _DeliveryLogMixin:
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1024), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


class CustomerNotificationLogModel(_DeliveryLogMixin, Base):
    __tablename__ = "customer_notification_log"

    customer_id = Column(String(64), nullable=False, index=True)


class MerchantNotificationLogModel(_DeliveryLogMixin, Base):
    __tablename__ = "merchant_notification_log"

    merchant_id = Column(String(64), nullable=False, index=True)


class AgentAnnouncementLogModel(_DeliveryLogMixin, Base):
    __tablename__ = "agent_announcement_log"

    agent_id = Column(String(64), nullable=False, index=True)


class AdminNotificationLogModel(_DeliveryLogMixin, Base):
    """One row per completed send, independent of the audience size."""

    __tablename__ = "admin_notification_log"


__all__ = [
    "AdminNotificationLogModel",
    "AgentAnnouncementLogModel",
    "CustomerNotificationLogModel",
    "MerchantNotificationLogModel",
]
