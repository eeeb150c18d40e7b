"""Draft payload and published listing records."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from autoconnex.models._base import AutoConnexModel, UtcDatetime
from autoconnex.models.vehicle import VehicleBasicDetails


class Severity(StrEnum):
    """Severity of a defect; ignored on pros and cons."""

    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"


class ListingStatus(StrEnum):
    """Lifecycle status of a published listing.

    Any status may move to any other; there is no terminal state.
    """

    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


class ConditionItem(AutoConnexModel):
    id: str
    description: str
    severity: Severity | None = None


class ConditionReport(AutoConnexModel):
    """Seller's condition report.  List order is display order; duplicates are allowed."""

    pros: list[ConditionItem] = Field(default_factory=list)
    cons: list[ConditionItem] = Field(default_factory=list)
    defects: list[ConditionItem] = Field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.pros) + len(self.cons) + len(self.defects)


class AfterMarketExtra(AutoConnexModel):
    id: str
    name: str
    cost: float = Field(default=0.0, ge=0)
    """Declared cost in AUD.  The sell flow does not ask for it yet, so it is usually ``0``."""


class WriteOffDetails(AutoConnexModel):
    """Repairable write-off disclosure.

    ``explanation`` only carries meaning when ``is_write_off`` is true.
    """

    is_write_off: bool = False
    explanation: str | None = None


class PricingDetails(AutoConnexModel):
    asking_price: float = Field(default=0.0, ge=0)
    negotiable: bool = True


class PickupLocation(AutoConnexModel):
    street_address: str = ""
    suburb: str = ""
    state: str = ""
    postcode: str = ""


class SellListingData(AutoConnexModel):
    """Everything collected by the sell flow.

    ``vehicle_details`` stays ``None`` until the registration lookup step
    completes.  ``photos`` holds opaque URIs; index 0 is the cover photo.
    """

    vehicle_details: VehicleBasicDetails | None = None
    photos: list[str] = Field(default_factory=list)
    condition_report: ConditionReport = Field(default_factory=ConditionReport)
    after_market_extras: list[AfterMarketExtra] = Field(default_factory=list)
    write_off: WriteOffDetails = Field(default_factory=WriteOffDetails)
    pricing: PricingDetails = Field(default_factory=PricingDetails)
    pickup_location: PickupLocation = Field(default_factory=PickupLocation)

    @property
    def cover_photo(self) -> str | None:
        return self.photos[0] if self.photos else None


# Fields a published listing shares with the draft payload.
LISTING_DATA_FIELDS: tuple[str, ...] = tuple(SellListingData.model_fields)

# Fields that may be changed after publishing.
MERGEABLE_FIELDS: frozenset[str] = frozenset({"status", *LISTING_DATA_FIELDS})


class PublishedListing(AutoConnexModel):
    """A finalized listing.

    ``listing_id`` and ``created_at`` are assigned once at publish time.
    ``updated_at`` moves forward on every change.
    """

    listing_id: str
    status: ListingStatus = ListingStatus.AVAILABLE
    created_at: UtcDatetime
    updated_at: UtcDatetime

    vehicle_details: VehicleBasicDetails
    photos: list[str] = Field(default_factory=list)
    condition_report: ConditionReport = Field(default_factory=ConditionReport)
    after_market_extras: list[AfterMarketExtra] = Field(default_factory=list)
    write_off: WriteOffDetails = Field(default_factory=WriteOffDetails)
    pricing: PricingDetails = Field(default_factory=PricingDetails)
    pickup_location: PickupLocation = Field(default_factory=PickupLocation)

    @property
    def cover_photo(self) -> str | None:
        return self.photos[0] if self.photos else None

    def to_listing_data(self) -> SellListingData:
        """The listing's content as a draft payload (e.g. for an edit screen)."""
        return SellListingData.model_validate({name: getattr(self, name) for name in LISTING_DATA_FIELDS})
