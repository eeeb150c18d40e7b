#!/usr/bin/env python3
"""Walk a listing through the sell flow against a JSON storage file.

Looks up a registration with the mock lookup service, fills in a draft,
publishes it and prints the seller's listings.  State persists in the
storage file between runs, so a later ``list`` or ``status`` call sees
what ``publish`` wrote.

Usage
-----
::

    python scripts/sell_flow_demo.py publish ABC123 NSW --price 21500 --suburb Sydney --postcode 2000
    python scripts/sell_flow_demo.py list
    python scripts/sell_flow_demo.py status listing_1767225600000_k3j9x0abc sold
    python scripts/sell_flow_demo.py delete listing_1767225600000_k3j9x0abc

Options::

    --storage FILE      Storage file (default: $AUTOCONNEX_STORAGE_PATH or ./autoconnex.json)
    --json              Output listings as machine-readable JSON
    --verbose, -v       Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from autoconnex import (  # noqa: E402
    AutoConnexConfig,
    AutoConnexError,
    DraftStore,
    JsonFileStorage,
    ListingStatus,
    ListingStore,
    MockVehicleLookup,
    PickupLocation,
    PricingDetails,
    format_mileage,
    format_price,
    publish_draft,
)

_DEFAULT_STORAGE = "autoconnex.json"


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


async def _publish(args: argparse.Namespace, drafts: DraftStore, listings: ListingStore) -> None:
    lookup = MockVehicleLookup(config=drafts.config)
    vehicle = await lookup.lookup(args.registration, args.state)
    if vehicle is None:
        print(f"No vehicle found for {args.registration} in {args.state}", file=sys.stderr)
        raise SystemExit(1)

    if await drafts.check_for_draft():
        print("Discarding previously saved draft")
        await drafts.clear_draft()

    drafts.set_vehicle_details(vehicle)
    drafts.next_step()
    for photo in args.photo or ["file:///demo/cover.jpg"]:
        drafts.add_photo(photo)
    drafts.set_pricing(PricingDetails(asking_price=args.price, negotiable=not args.firm))
    drafts.set_pickup_location(
        PickupLocation(suburb=args.suburb, state=vehicle.state, postcode=args.postcode),
    )
    drafts.set_step(7)
    await drafts.save_draft()

    listing_id = await publish_draft(drafts, listings)
    print(f"Published {vehicle.title} as {listing_id}")


def _print_listings(listings: ListingStore, json_mode: bool) -> None:
    if json_mode:
        print(json.dumps([listing.to_storage() for listing in listings.listings], indent=2, ensure_ascii=False))
        return

    out = [_section("MY LISTINGS")]
    for status, count in listings.count_by_status().items():
        out.append(f"  {status.value:<10}: {count}")
    for listing in listings.listings:
        vehicle = listing.vehicle_details
        out.append("")
        out.append(f"  {listing.listing_id}  [{listing.status.value}]")
        out.append(f"    {vehicle.title}  {vehicle.masked_vin}")
        out.append(f"    {format_price(listing.pricing.asking_price)}  {format_mileage(vehicle.mileage)}")
        out.append(f"    updated {listing.updated_at.isoformat()}")
    print("\n".join(out))


async def main() -> None:
    parser = argparse.ArgumentParser(description="Drive the autoconnex sell flow from the command line.")
    parser.add_argument("--storage", help="Storage file (default: $AUTOCONNEX_STORAGE_PATH or ./autoconnex.json)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Look up a registration and publish it")
    publish.add_argument("registration")
    publish.add_argument("state", help="Short state code, e.g. NSW")
    publish.add_argument("--price", type=float, required=True)
    publish.add_argument("--firm", action="store_true", help="Price is not negotiable")
    publish.add_argument("--suburb", required=True)
    publish.add_argument("--postcode", required=True)
    publish.add_argument("--photo", action="append", help="Photo URI (repeatable)")

    sub.add_parser("list", help="Print published listings")

    status = sub.add_parser("status", help="Change a listing's status")
    status.add_argument("listing_id")
    status.add_argument("status", choices=[s.value for s in ListingStatus])

    delete = sub.add_parser("delete", help="Delete a listing")
    delete.add_argument("listing_id")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    config = AutoConnexConfig.from_env()
    storage = JsonFileStorage(args.storage or config.storage_path or _DEFAULT_STORAGE)
    drafts = DraftStore(storage, config=config)
    listings = ListingStore(storage, config=config)

    try:
        await listings.refresh_listings()
        if args.command == "publish":
            await _publish(args, drafts, listings)
        elif args.command == "status":
            await listings.update_listing_status(args.listing_id, args.status)
        elif args.command == "delete":
            await listings.delete_listing(args.listing_id)
    except AutoConnexError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    _print_listings(listings, args.json_mode)


if __name__ == "__main__":
    asyncio.run(main())
