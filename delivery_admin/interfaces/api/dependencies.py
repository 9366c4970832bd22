"""FastAPI dependency utilities."""

from __future__ import annotations

import secrets

from fastapi import BackgroundTasks, Header, HTTPException, status
from sqlalchemy.orm import Session, sessionmaker

from delivery_admin.application.use_cases.notifications import (
    AudienceResolver,
    CategoryAudience,
    FailurePolicy,
    FanoutDispatcher,
    FanoutOrchestrator,
)
from delivery_admin.application.use_cases.notifications.orchestrator import Spawn
from delivery_admin.application.use_cases.notifications.ports import (
    OperationalErrorLog,
    RealtimeChannel,
)
from delivery_admin.config import Settings, get_settings
from delivery_admin.domain.entities import RecipientCategory
from delivery_admin.infrastructure.database import SessionLocal
from delivery_admin.infrastructure.error_log import FileOperationalErrorLog
from delivery_admin.infrastructure.fanout import (
    SqlAudienceDirectory,
    SqlDeliveryLogStore,
    SqlNotificationLookup,
    SqlPushTokenSource,
)
from delivery_admin.infrastructure.notifications import (
    FcmPushChannel,
    realtime_event_publisher,
)


def is_valid_admin_key(provided: str | None, settings: Settings | None = None) -> bool:
    """Return ``True`` when ``provided`` matches the configured admin key.

    Without a configured key every caller is accepted.
    """

    expected = (settings or get_settings()).admin_api_key
    if not expected:
        return True
    return secrets.compare_digest(provided or "", expected)


def require_admin(x_api_key: str | None = Header(default=None)) -> None:
    """Reject requests that do not carry the admin API key."""

    if not is_valid_admin_key(x_api_key):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )


def build_fanout_orchestrator(
    session_factory: sessionmaker[Session],
    settings: Settings,
    *,
    spawn: Spawn | None = None,
    realtime_channel: RealtimeChannel | None = None,
    error_log: OperationalErrorLog | None = None,
) -> FanoutOrchestrator:
    """Wire the fan-out engine to the database, FCM and websocket channels."""

    resolver = AudienceResolver(
        [
            CategoryAudience(category, SqlAudienceDirectory(session_factory, category))
            for category in RecipientCategory
        ]
    )
    push_channel = FcmPushChannel(
        SqlPushTokenSource(session_factory),
        project_id=settings.fcm_project_id,
        access_token=settings.fcm_access_token,
        timeout=settings.fcm_timeout_seconds,
    )
    dispatcher = FanoutDispatcher(
        SqlDeliveryLogStore(session_factory),
        push_channel,
        realtime_channel or realtime_event_publisher,
        admin_channel_id=settings.admin_channel_id,
        failure_policy=FailurePolicy(settings.fanout_failure_policy),
    )
    return FanoutOrchestrator(
        SqlNotificationLookup(session_factory),
        resolver,
        dispatcher,
        error_log or FileOperationalErrorLog(settings.error_log_dir),
        spawn=spawn,
    )


def get_fanout_orchestrator(background_tasks: BackgroundTasks) -> FanoutOrchestrator:
    """Return an orchestrator whose sends run after the response is sent."""

    return build_fanout_orchestrator(
        SessionLocal, get_settings(), spawn=background_tasks.add_task
    )
