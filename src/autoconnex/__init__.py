"""autoconnex - Listing lifecycle state for a used-vehicle marketplace."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("autoconnex")
except PackageNotFoundError:
    __version__ = "0+local"
from autoconnex._constants import SellStep
from autoconnex._ids import generate_id, generate_listing_id
from autoconnex.config import AutoConnexConfig
from autoconnex.exceptions import (
    AutoConnexConfigError,
    AutoConnexError,
    ListingValidationError,
    PersistenceError,
    VehicleLookupError,
)
from autoconnex.flow import publish_draft
from autoconnex.formatting import format_mileage, format_price, mask_vin, total_extras_value
from autoconnex.lookup import MockVehicleLookup, VehicleLookupService, normalize_registration
from autoconnex.models import (
    AfterMarketExtra,
    ConditionItem,
    ConditionReport,
    DraftSnapshot,
    DraftState,
    FuelType,
    ListingStatus,
    ListingsState,
    PickupLocation,
    PricingDetails,
    PublishedListing,
    SellListingData,
    Severity,
    Transmission,
    VehicleBasicDetails,
    WriteOffDetails,
)
from autoconnex.state import DraftStore, ListingStore
from autoconnex.storage import InMemoryStorage, JsonFileStorage, StorageAdapter
from autoconnex.validation import ensure_publishable, is_publishable, publish_issues

__all__ = [
    "__version__",
    "AfterMarketExtra",
    "AutoConnexConfig",
    "AutoConnexConfigError",
    "AutoConnexError",
    "ConditionItem",
    "ConditionReport",
    "DraftSnapshot",
    "DraftState",
    "DraftStore",
    "FuelType",
    "InMemoryStorage",
    "JsonFileStorage",
    "ListingStatus",
    "ListingStore",
    "ListingValidationError",
    "ListingsState",
    "MockVehicleLookup",
    "PersistenceError",
    "PickupLocation",
    "PricingDetails",
    "PublishedListing",
    "SellListingData",
    "SellStep",
    "Severity",
    "StorageAdapter",
    "Transmission",
    "VehicleBasicDetails",
    "VehicleLookupError",
    "VehicleLookupService",
    "WriteOffDetails",
    "ensure_publishable",
    "format_mileage",
    "format_price",
    "generate_id",
    "generate_listing_id",
    "is_publishable",
    "mask_vin",
    "normalize_registration",
    "publish_draft",
    "publish_issues",
    "total_extras_value",
]
