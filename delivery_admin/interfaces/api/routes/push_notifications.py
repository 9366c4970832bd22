"""Endpoints to manage and send administrator push notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from delivery_admin.application.use_cases.notifications import FanoutOrchestrator
from delivery_admin.domain.entities import PushNotification, RecipientCategory
from delivery_admin.infrastructure import storage
from delivery_admin.infrastructure.database import get_db
from delivery_admin.infrastructure.repositories import PushNotificationRepository
from delivery_admin.interfaces.api.dependencies import get_fanout_orchestrator, require_admin
from delivery_admin.interfaces.api.schemas import (
    PushNotificationRead,
    PushNotificationSendResponse,
)

router = APIRouter(
    prefix="/push-notifications",
    tags=["push-notifications"],
    dependencies=[Depends(require_admin)],
)
logger = logging.getLogger(__name__)

NOT_FOUND_DETAIL = "Push Notification not found"


def _to_read_model(notification: PushNotification) -> PushNotificationRead:
    return PushNotificationRead.model_validate(notification)


@router.post("/", response_model=PushNotificationRead, status_code=status.HTTP_201_CREATED)
def create_push_notification(
    title: str = Form(..., min_length=1),
    description: str = Form(..., min_length=1),
    geofence_ids: list[str] = Form(...),
    merchant: bool = Form(False),
    driver: bool = Form(False),
    customer: bool = Form(False),
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
) -> PushNotificationRead:
    """Store a push notification and its image."""

    if not (merchant or driver or customer):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please choose a value for merchant, driver, and customer.",
        )
    geofences = [geofence_id.strip() for geofence_id in geofence_ids if geofence_id.strip()]
    if not geofences:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please choose at least one geofence.",
        )

    try:
        data = image.file.read()
        image_url = storage.upload_image(
            data, image.filename or "", content_type=image.content_type
        )
    except RuntimeError as exc:
        logger.error("Could not store push notification image: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Image storage is not available",
        ) from exc

    notification = PushNotification(
        id=None,
        title=title.strip(),
        description=description.strip(),
        image_url=image_url,
        geofence_ids=geofences,
        targets_merchant=merchant,
        targets_driver=driver,
        targets_customer=customer,
    )
    saved = PushNotificationRepository(db).create(notification)
    return _to_read_model(saved)


@router.get("/", response_model=list[PushNotificationRead])
def list_push_notifications(
    category: RecipientCategory | None = Query(default=None, alias="type"),
    query: str | None = Query(default=None, max_length=200),
    db: Session = Depends(get_db),
) -> list[PushNotificationRead]:
    """Return notifications, optionally filtered by audience and title."""

    notifications = PushNotificationRepository(db).list(category=category, title_query=query)
    return [_to_read_model(notification) for notification in notifications]


@router.delete("/{notification_id}")
def delete_push_notification(
    notification_id: int,
    db: Session = Depends(get_db),
) -> dict[str, str]:
    """Delete a notification together with its stored image."""

    repository = PushNotificationRepository(db)
    notification = repository.get(notification_id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)

    try:
        storage.delete_image(notification.image_url)
    except RuntimeError as exc:
        logger.warning(
            "Could not delete image of push notification %s: %s", notification_id, exc
        )
    repository.delete(notification_id)
    return {"success": "Push Notification deleted successfully"}


@router.post("/{notification_id}/send", response_model=PushNotificationSendResponse)
async def send_push_notification(
    notification_id: int,
    orchestrator: FanoutOrchestrator = Depends(get_fanout_orchestrator),
) -> PushNotificationSendResponse:
    """Accept a send and deliver it in the background.

    The response only confirms that processing started. Delivery failures are
    written to the operational error log and can be inspected through the
    notification logs.
    """

    result = await orchestrator.trigger_send(notification_id)
    if result.not_found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)
    return PushNotificationSendResponse(
        success=True, message="Push notification processing started"
    )
