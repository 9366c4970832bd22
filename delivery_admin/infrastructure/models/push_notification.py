"""SQLAlchemy model for stored push notification definitions."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import expression

from delivery_admin.infrastructure.database import Base
from delivery_admin.utils import now_in_app_naive_datetime


class PushNotificationModel(Base):
    """Database representation of an administrator push notification."""

    __tablename__ = "push_notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String(1024), nullable=False)
    geofence_ids = Column(JSON, nullable=False, default=list)
    merchant = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    driver = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    customer = Column(Boolean, nullable=False, default=False, server_default=expression.false())
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["PushNotificationModel"]
