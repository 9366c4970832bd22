"""Push delivery through the Firebase Cloud Messaging HTTP v1 API."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from delivery_admin.domain.exceptions import PushDeliveryError

logger = logging.getLogger(__name__)

FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"

TokenSource = Callable[[str], Awaitable[Sequence[str]]]


class FcmPushChannel:
    """Send a notification to every device token registered for a recipient.

    A recipient without tokens is skipped. The send succeeds when at least one
    token is accepted and raises :class:`PushDeliveryError` when all of them
    are rejected. Without a project id and access token the channel is
    disabled and every send is skipped.
    """

    def __init__(
        self,
        token_source: TokenSource,
        *,
        project_id: str | None,
        access_token: str | None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_source = token_source
        self._project_id = project_id
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._project_id and self._access_token)

    async def send(self, recipient_id: str, event_type: str, payload: dict[str, Any]) -> None:
        if not self.enabled:
            logger.info("FCM configuration incomplete; skipping push delivery to %s", recipient_id)
            return

        tokens = [token for token in await self._token_source(recipient_id) if token]
        if not tokens:
            logger.info("No push token registered for %s", recipient_id)
            return

        url = FCM_SEND_URL.format(project_id=self._project_id)
        headers = {"Authorization": f"Bearer {self._access_token}"}
        errors: list[str] = []
        delivered = False
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            for token in tokens:
                try:
                    response = await client.post(
                        url, json=build_fcm_message(token, event_type, payload), headers=headers
                    )
                    response.raise_for_status()
                except httpx.HTTPStatusError as exc:
                    logger.warning(
                        "FCM rejected token of %s with status %s",
                        recipient_id,
                        exc.response.status_code,
                    )
                    errors.append(f"status {exc.response.status_code}")
                    continue
                except httpx.HTTPError as exc:
                    logger.warning("FCM request for %s failed: %s", recipient_id, exc)
                    errors.append(str(exc) or exc.__class__.__name__)
                    continue
                delivered = True

        if not delivered:
            raise PushDeliveryError(recipient_id, "; ".join(errors))


def build_fcm_message(token: str, event_type: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Return the FCM v1 request body for ``token``."""

    notification = {
        key: payload[key] for key in ("title", "body", "image") if payload.get(key)
    }
    return {
        "message": {
            "token": token,
            "notification": notification,
            "data": {"eventType": event_type},
        }
    }


__all__ = ["FCM_SEND_URL", "FcmPushChannel", "build_fcm_message"]
