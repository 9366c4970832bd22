"""Deliver a push notification to an already resolved audience."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from delivery_admin.domain.entities import (
    DeliveryLogEntry,
    PushNotification,
    ResolvedRecipient,
)
from delivery_admin.utils import isoformat_or_none

from .ports import DeliveryLogStore, PushChannel, RealtimeChannel

logger = logging.getLogger(__name__)

PUSH_NOTIFICATION_EVENT = "pushNotification"


class FailurePolicy(str, Enum):
    """What a recipient failure does to the rest of the send."""

    ISOLATE = "isolate"
    ABORT = "abort"


@dataclass
class RecipientFailure:
    recipient: ResolvedRecipient
    error: Exception


@dataclass
class DispatchReport:
    """Outcome of one dispatch run."""

    notification_id: int | None
    delivered: list[ResolvedRecipient] = field(default_factory=list)
    failures: list[RecipientFailure] = field(default_factory=list)
    summary_written: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.failures


def build_push_payload(notification: PushNotification) -> dict[str, Any]:
    """Return the payload handed to the push delivery service."""

    return {
        "title": notification.title,
        "body": notification.description,
        "image": notification.image_url,
    }


def build_realtime_payload(notification: PushNotification) -> dict[str, Any]:
    """Return the payload broadcast to realtime subscribers."""

    return {
        "title": notification.title,
        "description": notification.description,
        "imageUrl": notification.image_url,
        "createdAt": isoformat_or_none(notification.created_at),
    }


class FanoutDispatcher:
    """Send a notification to each recipient, one after the other.

    For every recipient the push channel is called first, then the category
    log entry is appended and finally the realtime event is broadcast to the
    recipient and to ``admin_channel_id``. A recipient is finished before the
    next one starts. One admin summary entry closes the send.

    With :attr:`FailurePolicy.ABORT` the first failure propagates and nothing
    after it runs, the admin summary included. With
    :attr:`FailurePolicy.ISOLATE` the failure is collected in the report and
    the remaining recipients are still served.
    """

    def __init__(
        self,
        log_store: DeliveryLogStore,
        push_channel: PushChannel,
        realtime_channel: RealtimeChannel,
        *,
        admin_channel_id: str,
        failure_policy: FailurePolicy = FailurePolicy.ISOLATE,
    ) -> None:
        if not admin_channel_id:
            raise ValueError("admin_channel_id is required")
        self._log_store = log_store
        self._push_channel = push_channel
        self._realtime_channel = realtime_channel
        self._admin_channel_id = admin_channel_id
        self._failure_policy = FailurePolicy(failure_policy)

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    async def dispatch(
        self,
        notification: PushNotification,
        recipients: Sequence[ResolvedRecipient],
    ) -> DispatchReport:
        report = DispatchReport(notification_id=notification.id)
        push_payload = build_push_payload(notification)
        realtime_payload = build_realtime_payload(notification)

        for recipient in recipients:
            try:
                await self._deliver(notification, recipient, push_payload, realtime_payload)
            except Exception as exc:
                if self._failure_policy is FailurePolicy.ABORT:
                    raise
                logger.warning(
                    "Push notification %s could not be delivered to %s %s: %s",
                    notification.id,
                    recipient.category.value,
                    recipient.recipient_id,
                    exc,
                )
                report.failures.append(RecipientFailure(recipient=recipient, error=exc))
                continue
            report.delivered.append(recipient)

        await self._log_store.append_admin_summary(DeliveryLogEntry.snapshot(notification))
        report.summary_written = True
        logger.info(
            "Push notification %s delivered to %d of %d recipient(s)",
            notification.id,
            len(report.delivered),
            len(recipients),
        )
        return report

    async def _deliver(
        self,
        notification: PushNotification,
        recipient: ResolvedRecipient,
        push_payload: dict[str, Any],
        realtime_payload: dict[str, Any],
    ) -> None:
        await self._push_channel.send(
            recipient.recipient_id, PUSH_NOTIFICATION_EVENT, dict(push_payload)
        )
        await self._log_store.append(
            recipient.category,
            DeliveryLogEntry.snapshot(notification, recipient_id=recipient.recipient_id),
        )
        self._realtime_channel.broadcast(
            recipient.recipient_id, PUSH_NOTIFICATION_EVENT, dict(realtime_payload)
        )
        self._realtime_channel.broadcast(
            self._admin_channel_id, PUSH_NOTIFICATION_EVENT, dict(realtime_payload)
        )


__all__ = [
    "DispatchReport",
    "FailurePolicy",
    "FanoutDispatcher",
    "PUSH_NOTIFICATION_EVENT",
    "RecipientFailure",
    "build_push_payload",
    "build_realtime_payload",
]
