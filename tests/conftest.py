"""Shared pytest fixtures: test settings and in-memory fakes for the fan-out ports."""

from __future__ import annotations

import asyncio
import os
import sys
import tempfile
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DIR = Path(tempfile.mkdtemp(prefix="delivery-admin-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DIR / 'test.db'}"
os.environ["ERROR_LOG_DIR"] = str(TEST_DIR / "logs")
for _name in ("FCM_PROJECT_ID", "FCM_ACCESS_TOKEN", "ADMIN_API_KEY", "ADMIN_CHANNEL_ID"):
    os.environ.pop(_name, None)

from delivery_admin.application.use_cases.notifications import (  # noqa: E402
    AudienceResolver,
    CategoryAudience,
    FailurePolicy,
    FanoutDispatcher,
    FanoutOrchestrator,
)
from delivery_admin.domain.entities import (  # noqa: E402
    DeliveryLogEntry,
    DirectoryMember,
    PushNotification,
    RecipientCategory,
)
from delivery_admin.domain.exceptions import PushDeliveryError  # noqa: E402


class FakeDirectory:
    """Directory returning the configured members that match the geofences."""

    def __init__(self, journal: list[tuple], category: RecipientCategory) -> None:
        self.journal = journal
        self.category = category
        self.members: list[DirectoryMember] = []
        self.delay = 0.0
        self.error: Exception | None = None
        self.calls: list[list[str]] = []

    def add(self, member_id: str, geofence_id: str = "G1") -> None:
        self.members.append(DirectoryMember(id=member_id, geofence_id=geofence_id))

    async def members_in_geofences(self, geofence_ids):
        self.calls.append(list(geofence_ids))
        self.journal.append(("lookup", self.category.value))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return [member for member in self.members if member.geofence_id in geofence_ids]


class FakeLogStore:
    def __init__(self, journal: list[tuple]) -> None:
        self.journal = journal
        self.entries: list[tuple[str, DeliveryLogEntry]] = []
        self.fail_for: set[str] = set()

    async def append(self, category: RecipientCategory, entry: DeliveryLogEntry) -> None:
        if entry.recipient_id in self.fail_for:
            raise RuntimeError(f"log store unavailable for {entry.recipient_id}")
        self.entries.append((category.value, entry))
        self.journal.append(("log", entry.recipient_id))

    async def append_admin_summary(self, entry: DeliveryLogEntry) -> None:
        self.entries.append(("admin", entry))
        self.journal.append(("log", "admin"))

    def recipients(self, category: str) -> list[str | None]:
        return [entry.recipient_id for kind, entry in self.entries if kind == category]


class FakePushChannel:
    def __init__(self, journal: list[tuple]) -> None:
        self.journal = journal
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.fail_for: set[str] = set()

    async def send(self, recipient_id: str, event_type: str, payload: dict[str, Any]) -> None:
        self.calls.append((recipient_id, event_type, payload))
        self.journal.append(("push", recipient_id))
        if recipient_id in self.fail_for:
            raise PushDeliveryError(recipient_id, "status 500")


class FakeRealtimeChannel:
    def __init__(self, journal: list[tuple]) -> None:
        self.journal = journal
        self.broadcasts: list[tuple[str, str, dict[str, Any]]] = []

    def broadcast(self, recipient_id: str, event_name: str, payload: dict[str, Any]) -> None:
        self.broadcasts.append((recipient_id, event_name, payload))
        self.journal.append(("realtime", recipient_id))


class FakeErrorLog:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def record(self, message: str) -> None:
        self.messages.append(message)


class FakeNotificationLookup:
    def __init__(self) -> None:
        self.notifications: dict[int, PushNotification] = {}

    def add(self, notification: PushNotification) -> PushNotification:
        self.notifications[notification.id] = notification
        return notification

    async def find_by_id(self, notification_id: int) -> PushNotification | None:
        return self.notifications.get(notification_id)


class Fanout:
    """Bundle of fakes wired into a real resolver, dispatcher and orchestrator."""

    def __init__(self) -> None:
        self.journal: list[tuple] = []
        self.directories = {
            category: FakeDirectory(self.journal, category) for category in RecipientCategory
        }
        self.log_store = FakeLogStore(self.journal)
        self.push = FakePushChannel(self.journal)
        self.realtime = FakeRealtimeChannel(self.journal)
        self.error_log = FakeErrorLog()
        self.lookup = FakeNotificationLookup()

    @property
    def customers(self) -> FakeDirectory:
        return self.directories[RecipientCategory.CUSTOMER]

    @property
    def merchants(self) -> FakeDirectory:
        return self.directories[RecipientCategory.MERCHANT]

    @property
    def drivers(self) -> FakeDirectory:
        return self.directories[RecipientCategory.DRIVER]

    def resolver(self) -> AudienceResolver:
        return AudienceResolver(
            [CategoryAudience(category, self.directories[category]) for category in RecipientCategory]
        )

    def dispatcher(
        self,
        *,
        failure_policy: FailurePolicy = FailurePolicy.ISOLATE,
        admin_channel_id: str = "admin",
    ) -> FanoutDispatcher:
        return FanoutDispatcher(
            self.log_store,
            self.push,
            self.realtime,
            admin_channel_id=admin_channel_id,
            failure_policy=failure_policy,
        )

    def orchestrator(
        self,
        *,
        failure_policy: FailurePolicy = FailurePolicy.ISOLATE,
        spawn=None,
    ) -> FanoutOrchestrator:
        return FanoutOrchestrator(
            self.lookup,
            self.resolver(),
            self.dispatcher(failure_policy=failure_policy),
            self.error_log,
            spawn=spawn,
        )


def make_notification(notification_id: int = 1, **overrides: Any) -> PushNotification:
    values: dict[str, Any] = {
        "id": notification_id,
        "title": "Monsoon offer",
        "description": "Free delivery on all orders today",
        "image_url": "https://cdn.example.com/PushNotificationImages/offer.png",
        "geofence_ids": ["G1"],
    }
    values.update(overrides)
    return PushNotification(**values)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fanout() -> Fanout:
    return Fanout()


@pytest.fixture
def notification_factory():
    return make_notification
