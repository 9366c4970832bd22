"""Persistence layer for notification delivery logs."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy.orm import Session

from delivery_admin.domain.entities import DeliveryLogEntry, RecipientCategory
from delivery_admin.infrastructure.models import (
    AdminNotificationLogModel,
    AgentAnnouncementLogModel,
    CustomerNotificationLogModel,
    MerchantNotificationLogModel,
)
from delivery_admin.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

# (model, column holding the recipient id)
_CATEGORY_TABLES = {
    RecipientCategory.CUSTOMER: (CustomerNotificationLogModel, "customer_id"),
    RecipientCategory.MERCHANT: (MerchantNotificationLogModel, "merchant_id"),
    RecipientCategory.DRIVER: (AgentAnnouncementLogModel, "agent_id"),
}


class DeliveryLogRepository:
    """Append and read delivery log entries. Entries are never updated."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def append(self, category: RecipientCategory, entry: DeliveryLogEntry) -> DeliveryLogEntry:
        if not entry.recipient_id:
            raise ValueError("Category log entries require a recipient id")
        model_class, recipient_column = _CATEGORY_TABLES[category]
        model = model_class()
        setattr(model, recipient_column, entry.recipient_id)
        return self._save(model, entry, recipient_column)

    def append_admin_summary(self, entry: DeliveryLogEntry) -> DeliveryLogEntry:
        return self._save(AdminNotificationLogModel(), entry, None)

    def list_for_category(
        self,
        category: RecipientCategory,
        *,
        recipient_id: str | None = None,
        limit: int | None = 100,
    ) -> list[DeliveryLogEntry]:
        model_class, recipient_column = _CATEGORY_TABLES[category]
        query = self.session.query(model_class)
        if recipient_id is not None:
            query = query.filter(getattr(model_class, recipient_column) == recipient_id)
        query = query.order_by(model_class.id)
        if limit is not None:
            query = query.limit(limit)
        models: Iterable = query.all()
        return [self._to_entity(model, recipient_column) for model in models]

    def list_admin_summaries(self, *, limit: int | None = 100) -> list[DeliveryLogEntry]:
        query = self.session.query(AdminNotificationLogModel).order_by(
            AdminNotificationLogModel.id
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model, None) for model in query.all()]

    def _save(self, model, entry: DeliveryLogEntry, recipient_column: str | None) -> DeliveryLogEntry:
        model.title = entry.title
        model.description = entry.description
        model.image_url = entry.image_url
        model.created_at = ensure_app_naive_datetime(entry.created_at or now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model, recipient_column)

    @staticmethod
    def _to_entity(model, recipient_column: str | None) -> DeliveryLogEntry:
        return DeliveryLogEntry(
            id=model.id,
            recipient_id=getattr(model, recipient_column) if recipient_column else None,
            title=model.title,
            description=model.description,
            image_url=model.image_url,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["DeliveryLogRepository"]
