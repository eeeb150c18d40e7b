"""Published listing store.

Owns the seller's finalized listings and their status lifecycle.  Every
mutation follows the same commit sequence:

1. wait for the store's write slot
2. compute the next collection from the latest committed one
3. write the full collection to storage
4. only then swap it into memory

A failed write therefore raises :class:`PersistenceError` and leaves memory
exactly as it was, matching what is in storage.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import TypeAdapter, ValidationError

from autoconnex._ids import generate_listing_id
from autoconnex._redact import redact_for_log
from autoconnex.config import AutoConnexConfig
from autoconnex.exceptions import ListingValidationError, PersistenceError
from autoconnex.models._base import utcnow
from autoconnex.models.draft import ListingsState
from autoconnex.models.listing import (
    LISTING_DATA_FIELDS,
    MERGEABLE_FIELDS,
    ListingStatus,
    PublishedListing,
    SellListingData,
)
from autoconnex.state._persistence import (
    Listeners,
    WriteQueue,
    decode_json,
    encode_json,
    storage_get,
    storage_set,
)
from autoconnex.storage.base import StorageAdapter

_logger = logging.getLogger(__name__)

_LISTINGS_ADAPTER = TypeAdapter(list[PublishedListing])

Listings = tuple[PublishedListing, ...]


def _parse_listings(data: Any) -> Listings:
    return tuple(_LISTINGS_ADAPTER.validate_python(data))


def _normalize_changes(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map snake_case or camelCase keys to field names, rejecting fixed fields."""
    changes: dict[str, Any] = {}
    for key, value in fields.items():
        name = PublishedListing.field_name_for(key)
        if name is None:
            raise ListingValidationError(f"Unknown listing field: {key!r}")
        if name not in MERGEABLE_FIELDS:
            raise ListingValidationError(f"Listing field {name!r} cannot be updated")
        changes[name] = value
    return changes


class ListingStore:
    """Durable collection of published listings.

    Parameters
    ----------
    storage : StorageAdapter
        Where the collection is persisted.
    config : AutoConnexConfig, optional
        Supplies the storage key.
    clock : callable, optional
        Returns the current UTC time; used for ``created_at``/``updated_at``.
    id_factory : callable, optional
        Produces new listing ids (``listing_<ms>_<suffix>`` by default).
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        config: AutoConnexConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = generate_listing_id,
    ) -> None:
        self._storage = storage
        self._config = config or AutoConnexConfig()
        self._clock = clock
        self._id_factory = id_factory
        self._state = ListingsState()
        self._queue = WriteQueue("listings")
        self._listeners: Listeners[ListingsState] = Listeners("listings")

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> ListingsState:
        return self._state

    @property
    def listings(self) -> Listings:
        return self._state.listings

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def is_saving(self) -> bool:
        return self._state.is_saving

    def subscribe(self, callback: Callable[[ListingsState], None]) -> Callable[[], None]:
        """Call *callback* with the new state after every change."""
        return self._listeners.subscribe(callback)

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        self._listeners.notify(self._state)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_listings_by_status(self, status: ListingStatus | str) -> list[PublishedListing]:
        wanted = ListingStatus(status)
        return [listing for listing in self._state.listings if listing.status == wanted]

    def get_listing_by_id(self, listing_id: str) -> PublishedListing | None:
        for listing in self._state.listings:
            if listing.listing_id == listing_id:
                return listing
        return None

    def count_by_status(self) -> dict[ListingStatus, int]:
        counts = {status: 0 for status in ListingStatus}
        for listing in self._state.listings:
            counts[listing.status] += 1
        return counts

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def _read(self) -> Listings | None:
        key = self._config.listings_storage_key
        async with self._queue.slot():
            raw = await storage_get(self._storage, key)
        if not raw:
            return None
        return decode_json(key, raw, _parse_listings)

    async def refresh_listings(self) -> None:
        """Replace the in-memory collection with what is in storage.

        Raises
        ------
        PersistenceError
            If the read fails or the stored collection cannot be parsed.
        """
        self._update(is_loading=True)
        try:
            listings = await self._read()
        except PersistenceError:
            self._update(is_loading=False)
            raise
        _logger.debug("Loaded %d listings", len(listings or ()))
        self._update(listings=listings or (), is_loading=False)

    async def load_listings(self) -> bool:
        """Startup load.  Failures are logged and the collection is kept.

        Returns ``True`` if the collection was (re)loaded.
        """
        try:
            await self.refresh_listings()
        except PersistenceError as exc:
            _logger.warning("Failed to load listings: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _next_timestamp(self, previous: datetime | None = None) -> datetime:
        now = self._clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    async def _commit(self, compute: Callable[[Listings], Listings]) -> Listings:
        async with self._queue.slot():
            updated = compute(self._state.listings)
            payload = [listing.to_storage() for listing in updated]
            self._update(is_saving=True)
            try:
                await storage_set(self._storage, self._config.listings_storage_key, encode_json(payload))
            except PersistenceError:
                self._update(is_saving=False)
                raise
            self._update(listings=updated, is_saving=False)
        return updated

    async def add_listing(self, data: SellListingData) -> str:
        """Publish *data* and return the new listing id.

        Raises
        ------
        ListingValidationError
            If ``data.vehicle_details`` is missing.  Nothing is written.
        PersistenceError
            If the write fails.  The listing is not added.
        """
        if data.vehicle_details is None:
            raise ListingValidationError("Vehicle details are required")

        listing_id = self._id_factory()
        now = self._clock()
        listing = PublishedListing.model_validate(
            {
                "listing_id": listing_id,
                "status": ListingStatus.AVAILABLE,
                "created_at": now,
                "updated_at": now,
                **{name: getattr(data, name) for name in LISTING_DATA_FIELDS},
            }
        )

        await self._commit(lambda current: (*current, listing))
        _logger.debug("Added listing %s: %s", listing_id, redact_for_log(listing.to_storage()))
        return listing_id

    async def update_listing(
        self,
        listing_id: str,
        fields: Mapping[str, Any] | None = None,
        /,
        **kwargs: Any,
    ) -> None:
        """Merge *fields* into the listing with *listing_id*.

        Keys may be field names or their camelCase storage aliases.
        ``listing_id``, ``created_at`` and ``updated_at`` cannot be set.
        An unknown id changes nothing, but the collection is still written.

        Raises
        ------
        ListingValidationError
            For unknown or fixed fields, or values that fail validation.
        PersistenceError
            If the write fails.  The listing is left unchanged.
        """
        changes = _normalize_changes({**(fields or {}), **kwargs})

        def _apply(current: Listings) -> Listings:
            updated: list[PublishedListing] = []
            for listing in current:
                if listing.listing_id != listing_id:
                    updated.append(listing)
                    continue
                merged = {name: getattr(listing, name) for name in PublishedListing.model_fields}
                merged.update(changes)
                merged["updated_at"] = self._next_timestamp(listing.updated_at)
                try:
                    updated.append(PublishedListing.model_validate(merged))
                except ValidationError as exc:
                    raise ListingValidationError(
                        f"Invalid update for listing {listing_id}",
                        issues=[str(err["msg"]) for err in exc.errors()],
                    ) from exc
            return tuple(updated)

        await self._commit(_apply)
        if self.get_listing_by_id(listing_id) is None:
            _logger.debug("update_listing: no listing with id %s", listing_id)
        else:
            _logger.debug("Updated listing %s fields: %s", listing_id, ", ".join(sorted(changes)))

    async def update_listing_status(self, listing_id: str, status: ListingStatus | str) -> None:
        """Move a listing to *status*.  Every transition is allowed."""
        await self.update_listing(listing_id, status=status)

    async def delete_listing(self, listing_id: str) -> None:
        """Remove the listing with *listing_id*; unknown ids are a no-op.

        Raises
        ------
        PersistenceError
            If the write fails.  The listing is kept.
        """
        await self._commit(lambda current: tuple(item for item in current if item.listing_id != listing_id))
        _logger.debug("Deleted listing %s", listing_id)
