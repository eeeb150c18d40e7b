from __future__ import annotations

import pytest
from conftest import FlakyStorage

from autoconnex._constants import DRAFT_STORAGE_KEY, LISTINGS_STORAGE_KEY
from autoconnex.config import AutoConnexConfig
from autoconnex.exceptions import ListingValidationError, PersistenceError
from autoconnex.flow import publish_draft
from autoconnex.models.draft import DraftState
from autoconnex.models.listing import PricingDetails, SellListingData, WriteOffDetails
from autoconnex.state.draft import DraftStore
from autoconnex.state.listings import ListingStore
from autoconnex.storage.memory import InMemoryStorage
from autoconnex.validation import ensure_publishable, is_publishable, publish_issues


async def _filled_drafts(storage: InMemoryStorage, data: SellListingData) -> DraftStore:
    drafts = DraftStore(storage)
    drafts.set_vehicle_details(data.vehicle_details)  # type: ignore[arg-type]
    drafts.set_photos(data.photos)
    drafts.set_condition_report(data.condition_report)
    drafts.set_after_market_extras(data.after_market_extras)
    drafts.set_write_off(data.write_off)
    drafts.set_pricing(data.pricing)
    drafts.set_pickup_location(data.pickup_location)
    drafts.set_step(7)
    await drafts.save_draft()
    return drafts


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------


def test_complete_listing_is_publishable(listing_data: SellListingData) -> None:
    assert publish_issues(listing_data) == []
    assert is_publishable(listing_data)
    ensure_publishable(listing_data)


def test_empty_draft_reports_every_issue() -> None:
    issues = publish_issues(SellListingData())
    assert "Vehicle details are required" in issues
    assert "Please upload at least 1 photo" in issues
    assert "Asking price must be greater than zero" in issues
    assert "Pickup suburb is required" in issues


def test_write_off_needs_explanation(listing_data: SellListingData) -> None:
    data = listing_data.model_copy(update={"write_off": WriteOffDetails(is_write_off=True)})
    assert publish_issues(data) == ["Please explain the write-off history"]


def test_photo_limits_follow_config(listing_data: SellListingData) -> None:
    config = AutoConnexConfig(min_photos=3, max_photos=5)
    assert publish_issues(listing_data, config) == ["Please upload at least 3 photos"]


def test_ensure_publishable_collects_issues() -> None:
    with pytest.raises(ListingValidationError) as excinfo:
        ensure_publishable(SellListingData())
    assert len(excinfo.value.issues) >= 3


# ------------------------------------------------------------------
# publish_draft
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_publish_moves_draft_to_listings(listing_data: SellListingData) -> None:
    storage = InMemoryStorage()
    drafts = await _filled_drafts(storage, listing_data)
    listings = ListingStore(storage)

    listing_id = await publish_draft(drafts, listings)

    published = listings.get_listing_by_id(listing_id)
    assert published is not None
    assert published.to_listing_data() == listing_data
    assert drafts.state == DraftState()
    assert DRAFT_STORAGE_KEY not in storage.snapshot()
    assert LISTINGS_STORAGE_KEY in storage.snapshot()


@pytest.mark.asyncio
async def test_strict_publish_rejects_incomplete_draft(listing_data: SellListingData) -> None:
    storage = InMemoryStorage()
    drafts = await _filled_drafts(storage, listing_data)
    drafts.set_pricing(PricingDetails(asking_price=0))
    listings = ListingStore(storage)

    with pytest.raises(ListingValidationError):
        await publish_draft(drafts, listings)

    assert listings.listings == ()
    assert LISTINGS_STORAGE_KEY not in storage.snapshot()
    assert drafts.current_step == 7


@pytest.mark.asyncio
async def test_lenient_publish_only_needs_vehicle(listing_data: SellListingData) -> None:
    storage = InMemoryStorage()
    drafts = DraftStore(storage)
    drafts.set_vehicle_details(listing_data.vehicle_details)  # type: ignore[arg-type]
    listings = ListingStore(storage)

    listing_id = await publish_draft(drafts, listings, strict=False)

    assert listings.get_listing_by_id(listing_id) is not None


@pytest.mark.asyncio
async def test_failed_add_keeps_draft(flaky_storage: FlakyStorage, listing_data: SellListingData) -> None:
    drafts = await _filled_drafts(flaky_storage, listing_data)
    listings = ListingStore(flaky_storage)
    flaky_storage.failing.add("set")

    with pytest.raises(PersistenceError):
        await publish_draft(drafts, listings)

    assert listings.listings == ()
    assert drafts.listing_data == listing_data
    assert drafts.has_draft is True
    assert DRAFT_STORAGE_KEY in flaky_storage.snapshot()
    assert ("remove", DRAFT_STORAGE_KEY) not in flaky_storage.calls
