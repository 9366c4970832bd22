"""Tests for the audience resolution of push notifications."""

import pytest

from delivery_admin.domain.entities import RecipientCategory, ResolvedRecipient
from delivery_admin.domain.exceptions import ResolutionError


@pytest.mark.anyio
async def test_resolves_categories_in_customer_merchant_driver_order(fanout, notification_factory):
    """Drivers answering first must not change the customer, merchant, driver order."""

    fanout.customers.add("c1")
    fanout.customers.delay = 0.02
    fanout.merchants.add("m1")
    fanout.merchants.delay = 0.01
    fanout.drivers.add("d1")
    notification = notification_factory(
        targets_customer=True, targets_merchant=True, targets_driver=True
    )

    recipients = await fanout.resolver().resolve(notification)

    assert recipients == [
        ResolvedRecipient("c1", RecipientCategory.CUSTOMER),
        ResolvedRecipient("m1", RecipientCategory.MERCHANT),
        ResolvedRecipient("d1", RecipientCategory.DRIVER),
    ]


@pytest.mark.anyio
async def test_only_flagged_categories_are_queried(fanout, notification_factory):
    fanout.customers.add("c1")
    fanout.drivers.add("d1")
    notification = notification_factory(targets_driver=True, geofence_ids=["G1", "G2"])

    recipients = await fanout.resolver().resolve(notification)

    assert recipients == [ResolvedRecipient("d1", RecipientCategory.DRIVER)]
    assert fanout.customers.calls == []
    assert fanout.merchants.calls == []
    assert fanout.drivers.calls == [["G1", "G2"]]


@pytest.mark.anyio
async def test_members_outside_the_geofences_are_ignored(fanout, notification_factory):
    fanout.customers.add("c1", geofence_id="G1")
    fanout.customers.add("c2", geofence_id="G9")
    fanout.customers.add("c3", geofence_id="G2")
    notification = notification_factory(targets_customer=True, geofence_ids=["G1", "G2"])

    recipients = await fanout.resolver().resolve(notification)

    assert [recipient.recipient_id for recipient in recipients] == ["c1", "c3"]


@pytest.mark.anyio
async def test_no_target_flags_resolves_to_an_empty_audience(fanout, notification_factory):
    fanout.customers.add("c1")

    recipients = await fanout.resolver().resolve(notification_factory())

    assert recipients == []
    assert fanout.customers.calls == []


@pytest.mark.anyio
async def test_empty_directory_is_not_an_error(fanout, notification_factory):
    fanout.merchants.add("m1")
    notification = notification_factory(targets_customer=True, targets_merchant=True)

    recipients = await fanout.resolver().resolve(notification)

    assert recipients == [ResolvedRecipient("m1", RecipientCategory.MERCHANT)]


@pytest.mark.anyio
async def test_directory_failure_is_reported_as_resolution_error(fanout, notification_factory):
    fanout.merchants.error = ConnectionError("directory offline")
    notification = notification_factory(targets_customer=True, targets_merchant=True)

    with pytest.raises(ResolutionError, match="merchant"):
        await fanout.resolver().resolve(notification)
