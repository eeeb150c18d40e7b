"""Data models for draft and published listings."""

from autoconnex.models._base import AutoConnexModel, UtcDatetime, ensure_utc
from autoconnex.models.draft import DraftSnapshot, DraftState, ListingsState
from autoconnex.models.listing import (
    LISTING_DATA_FIELDS,
    MERGEABLE_FIELDS,
    AfterMarketExtra,
    ConditionItem,
    ConditionReport,
    ListingStatus,
    PickupLocation,
    PricingDetails,
    PublishedListing,
    SellListingData,
    Severity,
    WriteOffDetails,
)
from autoconnex.models.vehicle import FuelType, Transmission, VehicleBasicDetails

__all__ = [
    "AfterMarketExtra",
    "AutoConnexModel",
    "ConditionItem",
    "ConditionReport",
    "DraftSnapshot",
    "DraftState",
    "FuelType",
    "LISTING_DATA_FIELDS",
    "ListingStatus",
    "ListingsState",
    "MERGEABLE_FIELDS",
    "PickupLocation",
    "PricingDetails",
    "PublishedListing",
    "SellListingData",
    "Severity",
    "Transmission",
    "UtcDatetime",
    "VehicleBasicDetails",
    "WriteOffDetails",
    "ensure_utc",
]
