"""Persistence helpers for push device tokens."""

from __future__ import annotations

from sqlalchemy.orm import Session

from delivery_admin.domain.entities import PushToken
from delivery_admin.infrastructure.models import PushTokenModel
from delivery_admin.utils import ensure_app_timezone


class PushTokenRepository:
    """Register and look up the FCM tokens of a recipient."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def register(self, recipient_id: str, token: str) -> PushToken:
        """Store ``token`` for ``recipient_id`` unless it is already known."""

        model = (
            self.session.query(PushTokenModel)
            .filter(PushTokenModel.recipient_id == recipient_id)
            .filter(PushTokenModel.token == token)
            .one_or_none()
        )
        if model is None:
            model = PushTokenModel(recipient_id=recipient_id, token=token)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def list_tokens(self, recipient_id: str) -> list[str]:
        query = (
            self.session.query(PushTokenModel.token)
            .filter(PushTokenModel.recipient_id == recipient_id)
            .order_by(PushTokenModel.id)
        )
        return [token for (token,) in query.all()]

    @staticmethod
    def _to_entity(model: PushTokenModel) -> PushToken:
        return PushToken(
            id=model.id,
            recipient_id=model.recipient_id,
            token=model.token,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["PushTokenRepository"]
