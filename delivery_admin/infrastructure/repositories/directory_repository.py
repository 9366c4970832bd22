"""Read access to the customer, merchant and agent directories."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from delivery_admin.domain.entities import DirectoryMember, RecipientCategory
from delivery_admin.infrastructure.models import AgentModel, CustomerModel, MerchantModel

_MODELS = {
    RecipientCategory.CUSTOMER: CustomerModel,
    RecipientCategory.MERCHANT: MerchantModel,
    RecipientCategory.DRIVER: AgentModel,
}


class DirectoryRepository:
    """Look up the members of one recipient category."""

    def __init__(self, session: Session, category: RecipientCategory) -> None:
        self.session = session
        self.category = category
        self._model = _MODELS[category]

    def list_by_geofences(self, geofence_ids: Iterable[str]) -> list[DirectoryMember]:
        """Return every member whose geofence is one of ``geofence_ids``."""

        ids = [geofence_id for geofence_id in geofence_ids if geofence_id]
        if not ids:
            return []
        query = (
            self.session.query(self._model)
            .filter(self._model.geofence_id.in_(ids))
            .order_by(self._model.id)
        )
        return [
            DirectoryMember(id=model.id, geofence_id=model.geofence_id)
            for model in query.all()
        ]

    def add(self, member_id: str, *, geofence_id: str | None, name: str | None = None) -> DirectoryMember:
        model = self._model(id=member_id, geofence_id=geofence_id, name=name)
        self.session.add(model)
        self.session.commit()
        return DirectoryMember(id=model.id, geofence_id=model.geofence_id)


__all__ = ["DirectoryRepository"]
