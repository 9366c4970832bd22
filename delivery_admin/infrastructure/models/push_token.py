"""SQLAlchemy model for registered push device tokens."""

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from delivery_admin.infrastructure.database import Base
from delivery_admin.utils import now_in_app_naive_datetime


class PushTokenModel(Base):
    """FCM registration token bound to a recipient id."""

    __tablename__ = "push_token"
    __table_args__ = (UniqueConstraint("recipient_id", "token", name="uq_push_token_recipient"),)

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(String(64), nullable=False, index=True)
    token = Column(String(512), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["PushTokenModel"]
