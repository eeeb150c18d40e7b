"""Draft store: the single in-progress listing of the sell flow.

Mutators update in-memory state synchronously and mark the draft dirty.
Nothing reaches storage until :meth:`DraftStore.save_draft` is awaited.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from autoconnex._constants import TOTAL_STEPS, clamp_step
from autoconnex._redact import redact_for_log
from autoconnex.config import AutoConnexConfig
from autoconnex.exceptions import ListingValidationError, PersistenceError
from autoconnex.models._base import utcnow
from autoconnex.models.draft import DraftSnapshot, DraftState
from autoconnex.models.listing import (
    AfterMarketExtra,
    ConditionReport,
    PickupLocation,
    PricingDetails,
    SellListingData,
    WriteOffDetails,
)
from autoconnex.models.vehicle import VehicleBasicDetails
from autoconnex.state._persistence import (
    Listeners,
    WriteQueue,
    decode_json,
    encode_json,
    storage_get,
    storage_remove,
    storage_set,
)
from autoconnex.storage.base import StorageAdapter

_logger = logging.getLogger(__name__)


class DraftStore:
    """Holds the single draft listing and mediates step navigation.

    Usage::

        store = DraftStore(JsonFileStorage("state.json"))
        await store.check_for_draft()
        if store.has_draft:
            await store.load_draft()
        store.set_vehicle_details(details)
        store.next_step()
        await store.save_draft()
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        config: AutoConnexConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._storage = storage
        self._config = config or AutoConnexConfig()
        self._clock = clock
        self._state = DraftState()
        self._queue = WriteQueue("draft")
        self._listeners: Listeners[DraftState] = Listeners("draft")
        self._saves_in_flight = 0

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def config(self) -> AutoConnexConfig:
        return self._config

    @property
    def state(self) -> DraftState:
        return self._state

    @property
    def current_step(self) -> int:
        return self._state.current_step

    @property
    def listing_data(self) -> SellListingData:
        return self._state.listing_data

    @property
    def has_draft(self) -> bool:
        return self._state.has_draft

    @property
    def is_dirty(self) -> bool:
        return self._state.is_dirty

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_saving(self) -> bool:
        return self._state.is_saving

    def subscribe(self, callback: Callable[[DraftState], None]) -> Callable[[], None]:
        """Call *callback* with the new state after every change."""
        return self._listeners.subscribe(callback)

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        self._listeners.notify(self._state)

    def _update_listing(self, **changes: Any) -> None:
        listing_data = self._state.listing_data.model_copy(update=changes)
        self._update(listing_data=listing_data, is_dirty=True)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def set_step(self, step: int) -> None:
        """Jump to *step*, clamped to ``[1, 7]``."""
        clamped = clamp_step(step)
        if clamped != step:
            _logger.debug("Clamped requested step %s to %d", step, clamped)
        self._update(current_step=clamped)

    def next_step(self) -> None:
        self._update(current_step=min(self._state.current_step + 1, TOTAL_STEPS))

    def prev_step(self) -> None:
        self._update(current_step=clamp_step(self._state.current_step - 1))

    # ------------------------------------------------------------------
    # Field setters
    # ------------------------------------------------------------------

    def set_vehicle_details(self, details: VehicleBasicDetails) -> None:
        self._update_listing(vehicle_details=details)

    def set_photos(self, photos: Sequence[str]) -> None:
        if len(photos) > self._config.max_photos:
            raise ListingValidationError(f"A listing can hold at most {self._config.max_photos} photos")
        self._update_listing(photos=list(photos))

    def add_photo(self, photo_uri: str) -> None:
        """Append a photo; the first photo added becomes the cover."""
        photos = self._state.listing_data.photos
        if len(photos) >= self._config.max_photos:
            raise ListingValidationError(f"A listing can hold at most {self._config.max_photos} photos")
        self._update_listing(photos=[*photos, photo_uri])

    def remove_photo(self, index: int) -> None:
        """Remove the photo at *index*.

        Out-of-range indices (including negative ones) leave the photos as
        they are.
        """
        photos = self._state.listing_data.photos
        self._update_listing(photos=[uri for i, uri in enumerate(photos) if i != index])

    def reorder_photos(self, from_index: int, to_index: int) -> None:
        """Move the photo at *from_index* so it ends up at *to_index*.

        An out-of-range *from_index* is a no-op; *to_index* is clamped into
        the valid range.
        """
        photos = list(self._state.listing_data.photos)
        if not 0 <= from_index < len(photos):
            _logger.debug("Ignoring reorder from out-of-range index %d (%d photos)", from_index, len(photos))
            self._update_listing(photos=photos)
            return
        moved = photos.pop(from_index)
        target = max(0, min(to_index, len(photos)))
        photos.insert(target, moved)
        self._update_listing(photos=photos)

    def set_condition_report(self, report: ConditionReport) -> None:
        self._update_listing(condition_report=report)

    def set_after_market_extras(self, extras: Sequence[AfterMarketExtra]) -> None:
        self._update_listing(after_market_extras=list(extras))

    def set_write_off(self, write_off: WriteOffDetails) -> None:
        self._update_listing(write_off=write_off)

    def set_pricing(self, pricing: PricingDetails) -> None:
        self._update_listing(pricing=pricing)

    def set_pickup_location(self, location: PickupLocation) -> None:
        self._update_listing(pickup_location=location)

    # ------------------------------------------------------------------
    # Draft persistence
    # ------------------------------------------------------------------

    async def check_for_draft(self) -> bool:
        """Startup probe for a saved draft.

        Read failures are logged and reported as "no draft".
        """
        key = self._config.draft_storage_key
        try:
            async with self._queue.slot():
                raw = await storage_get(self._storage, key)
        except PersistenceError as exc:
            _logger.warning("Failed to check for draft: %s", exc)
            return False
        if raw:
            self._update(has_draft=True)
            return True
        return False

    async def save_draft(self) -> None:
        """Persist the current step and listing data.

        Raises
        ------
        PersistenceError
            If the write fails.  ``is_dirty`` is left unchanged.
        """
        key = self._config.draft_storage_key
        snapshot = DraftSnapshot(
            current_step=self._state.current_step,
            listing_data=self._state.listing_data,
            saved_at=self._clock(),
        )
        payload = snapshot.to_storage()
        self._saves_in_flight += 1
        self._update(is_saving=True)
        try:
            async with self._queue.slot():
                await storage_set(self._storage, key, encode_json(payload))
        finally:
            self._saves_in_flight -= 1
            if self._saves_in_flight == 0:
                self._update(is_saving=False)

        _logger.debug("Saved draft: %s", redact_for_log(payload))
        # Edits made while the write was in flight are not on disk yet.
        unchanged = (
            self._state.current_step == snapshot.current_step and self._state.listing_data == snapshot.listing_data
        )
        self._update(has_draft=True, is_dirty=self._state.is_dirty and not unchanged)

    async def load_draft(self) -> bool:
        """Replace the in-memory draft with the saved one, if any.

        Returns ``True`` when a draft was found and loaded; state is left
        untouched otherwise.

        Raises
        ------
        PersistenceError
            If the read fails or the stored draft cannot be parsed.
        """
        key = self._config.draft_storage_key
        self._update(is_loading=True)
        try:
            async with self._queue.slot():
                raw = await storage_get(self._storage, key)
            snapshot = decode_json(key, raw, DraftSnapshot.from_storage) if raw else None
        except PersistenceError:
            self._update(is_loading=False)
            raise

        if snapshot is None:
            self._update(is_loading=False)
            return False

        _logger.debug("Loaded draft saved at %s (step %d)", snapshot.saved_at.isoformat(), snapshot.current_step)
        self._update(
            current_step=snapshot.current_step,
            listing_data=snapshot.listing_data,
            has_draft=True,
            is_dirty=False,
            is_loading=False,
        )
        return True

    async def clear_draft(self) -> None:
        """Delete the saved draft.  In-memory listing data is kept.

        Raises
        ------
        PersistenceError
            If the removal fails.
        """
        key = self._config.draft_storage_key
        async with self._queue.slot():
            await storage_remove(self._storage, key)
        self._update(has_draft=False)

    def reset_flow(self) -> None:
        """Return to the initial state.  Storage is not touched."""
        self._state = DraftState()
        self._listeners.notify(self._state)
