"""Identifier generation.

Ids are ``<epoch-ms>_<9 base-36 chars>``.  They are not collision-proof,
only collision-unlikely.
"""

from __future__ import annotations

import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9

LISTING_ID_PREFIX = "listing_"


def _now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def _random_suffix(length: int = _SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def generate_id(now_ms: int | None = None) -> str:
    """Id for list items (condition items, extras)."""
    ts = _now_ms() if now_ms is None else now_ms
    return f"{ts}_{_random_suffix()}"


def generate_listing_id(now_ms: int | None = None) -> str:
    """Id assigned to a listing at publish time."""
    return f"{LISTING_ID_PREFIX}{generate_id(now_ms)}"
