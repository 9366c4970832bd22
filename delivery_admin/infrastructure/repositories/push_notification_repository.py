"""Persistence helpers for push notification definitions."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from delivery_admin.domain.entities import PushNotification, RecipientCategory
from delivery_admin.infrastructure.models import PushNotificationModel
from delivery_admin.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class PushNotificationRepository:
    """Provide CRUD operations for :class:`PushNotification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> PushNotification | None:
        model = self.session.get(PushNotificationModel, notification_id)
        if model is None:
            return None
        return self._to_entity(model)

    def list(
        self,
        *,
        category: RecipientCategory | None = None,
        title_query: str | None = None,
    ) -> Sequence[PushNotification]:
        """Return notifications targeting ``category`` whose title contains ``title_query``."""

        query = self.session.query(PushNotificationModel)
        if category is not None:
            query = query.filter(getattr(PushNotificationModel, category.value).is_(True))
        if title_query:
            query = query.filter(
                PushNotificationModel.title.icontains(title_query.strip(), autoescape=True)
            )
        query = query.order_by(
            PushNotificationModel.created_at.desc(), PushNotificationModel.id.desc()
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, notification: PushNotification) -> PushNotification:
        model = PushNotificationModel()
        model.title = notification.title
        model.description = notification.description
        model.image_url = notification.image_url
        model.geofence_ids = list(notification.geofence_ids)
        model.merchant = notification.targets_merchant
        model.driver = notification.targets_driver
        model.customer = notification.targets_customer
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, notification_id: int) -> bool:
        """Delete a notification by id.

        Returns ``True`` when a record was removed and ``False`` when the
        requested notification was not found.
        """

        model = self.session.get(PushNotificationModel, notification_id)
        if model is None:
            return False

        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: PushNotificationModel) -> PushNotification:
        return PushNotification(
            id=model.id,
            title=model.title,
            description=model.description,
            image_url=model.image_url,
            geofence_ids=[str(geofence_id) for geofence_id in model.geofence_ids or []],
            targets_merchant=bool(model.merchant),
            targets_driver=bool(model.driver),
            targets_customer=bool(model.customer),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["PushNotificationRepository"]
