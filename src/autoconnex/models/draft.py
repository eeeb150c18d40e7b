"""Draft store state and the persisted draft snapshot."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from autoconnex._constants import FIRST_STEP, clamp_step
from autoconnex.models._base import AutoConnexModel, UtcDatetime, utcnow
from autoconnex.models.listing import PublishedListing, SellListingData


class DraftSnapshot(AutoConnexModel):
    """Persisted draft: ``{currentStep, listingData, savedAt}``."""

    current_step: int = FIRST_STEP
    listing_data: SellListingData = Field(default_factory=SellListingData)
    saved_at: UtcDatetime = Field(default_factory=utcnow)

    @field_validator("current_step", mode="before")
    @classmethod
    def _clamp_step(cls, value: Any) -> int:
        return clamp_step(int(value))


class DraftState(AutoConnexModel):
    """In-memory state of the draft store."""

    current_step: int = FIRST_STEP
    listing_data: SellListingData = Field(default_factory=SellListingData)
    has_draft: bool = False
    is_dirty: bool = False
    is_loading: bool = False
    is_saving: bool = False


class ListingsState(AutoConnexModel):
    """In-memory state of the published listing store."""

    listings: tuple[PublishedListing, ...] = ()
    is_loading: bool = False
    is_saving: bool = False
