"""Publish-readiness checks for a draft.

These mirror what each sell-flow step requires before the seller may move
on.  :meth:`ListingStore.add_listing` itself only insists on vehicle
details; callers that want the full set use :func:`ensure_publishable`.
"""

from __future__ import annotations

from autoconnex.config import AutoConnexConfig
from autoconnex.exceptions import ListingValidationError
from autoconnex.models.listing import SellListingData


def publish_issues(data: SellListingData, config: AutoConnexConfig | None = None) -> list[str]:
    """Return human-readable reasons *data* cannot be published yet."""
    cfg = config or AutoConnexConfig()
    issues: list[str] = []

    if data.vehicle_details is None:
        issues.append("Vehicle details are required")

    photo_count = len(data.photos)
    if photo_count < cfg.min_photos:
        plural = "s" if cfg.min_photos > 1 else ""
        issues.append(f"Please upload at least {cfg.min_photos} photo{plural}")
    elif photo_count > cfg.max_photos:
        issues.append(f"You can upload up to {cfg.max_photos} photos")

    if data.pricing.asking_price <= 0:
        issues.append("Asking price must be greater than zero")

    if data.write_off.is_write_off and not (data.write_off.explanation or "").strip():
        issues.append("Please explain the write-off history")

    location = data.pickup_location
    if not location.suburb.strip():
        issues.append("Pickup suburb is required")
    if not location.state.strip():
        issues.append("Pickup state is required")
    if not location.postcode.strip():
        issues.append("Pickup postcode is required")

    return issues


def is_publishable(data: SellListingData, config: AutoConnexConfig | None = None) -> bool:
    return not publish_issues(data, config)


def ensure_publishable(data: SellListingData, config: AutoConnexConfig | None = None) -> None:
    """Raise :class:`ListingValidationError` listing every missing requirement."""
    issues = publish_issues(data, config)
    if issues:
        raise ListingValidationError("; ".join(issues), issues=issues)
