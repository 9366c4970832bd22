"""Errors raised while resolving and delivering push notifications."""

from __future__ import annotations

from collections.abc import Sequence


class NotificationNotFoundError(LookupError):
    """The requested push notification does not exist."""

    def __init__(self, notification_id: int) -> None:
        super().__init__(f"Push Notification {notification_id} not found")
        self.notification_id = notification_id


class ResolutionError(RuntimeError):
    """A directory lookup failed while building the audience."""


class PushDeliveryError(RuntimeError):
    """The push delivery service rejected a message for a recipient."""

    def __init__(self, recipient_id: str, message: str) -> None:
        super().__init__(f"Push delivery failed for {recipient_id}: {message}")
        self.recipient_id = recipient_id


class DispatchError(RuntimeError):
    """One or more recipients of a send could not be served."""

    def __init__(self, notification_id: int | None, failures: Sequence[tuple[str, BaseException]]) -> None:
        details = "; ".join(f"{recipient_id}: {error}" for recipient_id, error in failures)
        super().__init__(
            f"{len(failures)} recipient(s) of push notification {notification_id} failed: {details}"
        )
        self.notification_id = notification_id
        self.failures = list(failures)


__all__ = [
    "DispatchError",
    "NotificationNotFoundError",
    "PushDeliveryError",
    "ResolutionError",
]
