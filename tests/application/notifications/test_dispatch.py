"""Tests for the sequential fan-out dispatcher."""

import pytest

from delivery_admin.application.use_cases.notifications import (
    PUSH_NOTIFICATION_EVENT,
    FailurePolicy,
)
from delivery_admin.domain.entities import RecipientCategory, ResolvedRecipient
from delivery_admin.domain.exceptions import PushDeliveryError


def _customers(*ids):
    return [ResolvedRecipient(recipient_id, RecipientCategory.CUSTOMER) for recipient_id in ids]


@pytest.mark.anyio
async def test_dispatch_logs_pushes_and_broadcasts_every_recipient(fanout, notification_factory):
    notification = notification_factory(targets_customer=True)

    report = await fanout.dispatcher().dispatch(notification, _customers("c1", "c2"))

    assert fanout.log_store.recipients("customer") == ["c1", "c2"]
    assert fanout.log_store.recipients("admin") == [None]
    assert [kind for kind, _ in fanout.log_store.entries] == ["customer", "customer", "admin"]
    assert fanout.push.calls == [
        (
            "c1",
            PUSH_NOTIFICATION_EVENT,
            {
                "title": "Monsoon offer",
                "body": "Free delivery on all orders today",
                "image": "https://cdn.example.com/PushNotificationImages/offer.png",
            },
        ),
        (
            "c2",
            PUSH_NOTIFICATION_EVENT,
            {
                "title": "Monsoon offer",
                "body": "Free delivery on all orders today",
                "image": "https://cdn.example.com/PushNotificationImages/offer.png",
            },
        ),
    ]
    assert [recipient for recipient, _, _ in fanout.realtime.broadcasts] == [
        "c1",
        "admin",
        "c2",
        "admin",
    ]
    assert report.delivered == _customers("c1", "c2")
    assert report.summary_written is True
    assert report.succeeded


@pytest.mark.anyio
async def test_log_entries_snapshot_the_notification(fanout, notification_factory):
    notification = notification_factory(targets_customer=True)

    await fanout.dispatcher().dispatch(notification, _customers("c1"))

    entry = fanout.log_store.entries[0][1]
    assert entry.recipient_id == "c1"
    assert (entry.title, entry.description, entry.image_url) == (
        notification.title,
        notification.description,
        notification.image_url,
    )


@pytest.mark.anyio
async def test_realtime_payload_carries_creation_time(fanout, notification_factory):
    from datetime import datetime, timezone

    created_at = datetime(2024, 7, 1, 9, 30, tzinfo=timezone.utc)
    notification = notification_factory(targets_customer=True, created_at=created_at)

    await fanout.dispatcher().dispatch(notification, _customers("c1"))

    _, event_name, payload = fanout.realtime.broadcasts[0]
    assert event_name == PUSH_NOTIFICATION_EVENT
    assert payload == {
        "title": notification.title,
        "description": notification.description,
        "imageUrl": notification.image_url,
        "createdAt": "2024-07-01T09:30:00+00:00",
    }


@pytest.mark.anyio
async def test_each_recipient_completes_before_the_next_starts(fanout, notification_factory):
    notification = notification_factory(targets_customer=True)

    await fanout.dispatcher().dispatch(notification, _customers("c1", "c2"))

    assert fanout.journal == [
        ("push", "c1"),
        ("log", "c1"),
        ("realtime", "c1"),
        ("realtime", "admin"),
        ("push", "c2"),
        ("log", "c2"),
        ("realtime", "c2"),
        ("realtime", "admin"),
        ("log", "admin"),
    ]


@pytest.mark.anyio
async def test_zero_recipients_still_writes_the_admin_summary(fanout, notification_factory):
    report = await fanout.dispatcher().dispatch(notification_factory(), [])

    assert [kind for kind, _ in fanout.log_store.entries] == ["admin"]
    assert fanout.push.calls == []
    assert fanout.realtime.broadcasts == []
    assert report.summary_written is True


@pytest.mark.anyio
async def test_admin_channel_comes_from_configuration(fanout, notification_factory):
    dispatcher = fanout.dispatcher(admin_channel_id="ops-panel")

    await dispatcher.dispatch(notification_factory(targets_customer=True), _customers("c1"))

    assert [recipient for recipient, _, _ in fanout.realtime.broadcasts] == ["c1", "ops-panel"]


def test_admin_channel_is_required(fanout):
    with pytest.raises(ValueError):
        fanout.dispatcher(admin_channel_id="")


@pytest.mark.anyio
async def test_abort_policy_stops_at_the_first_push_failure(fanout, notification_factory):
    """Recipient k failing leaves log entries for 1..k-1 and no admin summary."""

    fanout.push.fail_for = {"c2"}
    dispatcher = fanout.dispatcher(failure_policy=FailurePolicy.ABORT)

    with pytest.raises(PushDeliveryError):
        await dispatcher.dispatch(
            notification_factory(targets_customer=True), _customers("c1", "c2", "c3")
        )

    assert fanout.log_store.recipients("customer") == ["c1"]
    assert fanout.log_store.recipients("admin") == []
    assert [recipient for recipient, _, _ in fanout.push.calls] == ["c1", "c2"]


@pytest.mark.anyio
async def test_abort_policy_stops_at_a_log_write_failure(fanout, notification_factory):
    fanout.log_store.fail_for = {"c1"}
    dispatcher = fanout.dispatcher(failure_policy=FailurePolicy.ABORT)

    with pytest.raises(RuntimeError, match="log store unavailable"):
        await dispatcher.dispatch(
            notification_factory(targets_customer=True), _customers("c1", "c2")
        )

    assert fanout.log_store.entries == []
    assert [recipient for recipient, _, _ in fanout.push.calls] == ["c1"]
    assert fanout.realtime.broadcasts == []


@pytest.mark.anyio
async def test_isolate_policy_keeps_serving_after_a_failure(fanout, notification_factory):
    fanout.push.fail_for = {"c2"}

    report = await fanout.dispatcher().dispatch(
        notification_factory(targets_customer=True), _customers("c1", "c2", "c3")
    )

    assert fanout.log_store.recipients("customer") == ["c1", "c3"]
    assert fanout.log_store.recipients("admin") == [None]
    assert report.delivered == _customers("c1", "c3")
    assert [failure.recipient.recipient_id for failure in report.failures] == ["c2"]
    assert isinstance(report.failures[0].error, PushDeliveryError)
    assert not report.succeeded
    assert "c2" not in [recipient for recipient, _, _ in fanout.realtime.broadcasts]
