"""Delivery log endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from delivery_admin.config import get_settings
from delivery_admin.domain.entities import DeliveryLogEntry, RecipientCategory
from delivery_admin.infrastructure.database import get_db
from delivery_admin.infrastructure.notifications import notification_manager
from delivery_admin.infrastructure.repositories import DeliveryLogRepository, PushTokenRepository
from delivery_admin.interfaces.api.dependencies import is_valid_admin_key, require_admin
from delivery_admin.interfaces.api.schemas import DeliveryLogRead, PushTokenCreate, PushTokenRead

router = APIRouter(tags=["notifications"])


def _to_read_model(entry: DeliveryLogEntry) -> DeliveryLogRead:
    return DeliveryLogRead.model_validate(entry)


@router.get(
    "/notification-logs/admin",
    response_model=list[DeliveryLogRead],
    dependencies=[Depends(require_admin)],
)
def list_admin_notification_logs(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[DeliveryLogRead]:
    """Return one entry per completed send."""

    entries = DeliveryLogRepository(db).list_admin_summaries(limit=limit)
    return [_to_read_model(entry) for entry in entries]


@router.get(
    "/notification-logs/{category}",
    response_model=list[DeliveryLogRead],
    dependencies=[Depends(require_admin)],
)
def list_notification_logs(
    category: RecipientCategory,
    recipient_id: str | None = Query(default=None, max_length=64),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
) -> list[DeliveryLogRead]:
    """Return delivery log entries of ``category``, optionally for one recipient."""

    entries = DeliveryLogRepository(db).list_for_category(
        category, recipient_id=recipient_id, limit=limit
    )
    return [_to_read_model(entry) for entry in entries]


@router.post("/push-tokens", response_model=PushTokenRead, status_code=status.HTTP_201_CREATED)
def register_push_token(
    payload: PushTokenCreate,
    db: Session = Depends(get_db),
) -> PushTokenRead:
    """Register a device token so the recipient receives push messages."""

    token = PushTokenRepository(db).register(payload.recipient_id, payload.token)
    return PushTokenRead.model_validate(token)


@router.websocket("/notifications/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams push notifications to a recipient."""

    recipient_id = (websocket.query_params.get("recipient_id") or "").strip()
    if not recipient_id:
        await websocket.close(code=1008)
        return

    if recipient_id == get_settings().admin_channel_id and not is_valid_admin_key(
        websocket.query_params.get("api_key")
    ):
        await websocket.close(code=1008)
        return

    await notification_manager.connect(recipient_id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (KeyError, ValueError):
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        notification_manager.disconnect(recipient_id, websocket)
    except Exception:  # pragma: no cover - unexpected socket failure
        notification_manager.disconnect(recipient_id, websocket)
        raise
