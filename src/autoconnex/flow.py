"""Publish orchestration: hand the draft over to the listing store."""

from __future__ import annotations

import logging

from autoconnex.state.draft import DraftStore
from autoconnex.state.listings import ListingStore
from autoconnex.validation import ensure_publishable

_logger = logging.getLogger(__name__)


async def publish_draft(drafts: DraftStore, listings: ListingStore, *, strict: bool = True) -> str:
    """Publish the current draft and start a fresh one.

    Sequence: validate (when *strict*), add the listing, delete the saved
    draft, reset the flow.  If adding the listing fails the draft is left
    untouched so the seller can retry.

    Returns the new listing id.

    Raises
    ------
    ListingValidationError
        If the draft is incomplete.
    PersistenceError
        If the listing or the draft removal cannot be written.  When only
        the draft removal fails, the listing has already been published.
    """
    data = drafts.listing_data
    if strict:
        ensure_publishable(data, drafts.config)

    listing_id = await listings.add_listing(data)
    _logger.debug("Published draft as %s", listing_id)

    await drafts.clear_draft()
    drafts.reset_flow()
    return listing_id
