"""Helpers for safe debug logging.

Listings carry a full VIN and the seller's street address.  This module
masks or drops those before payloads are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from autoconnex.formatting import mask_vin

_MASKED_VALUE_KEYS: frozenset[str] = frozenset({"vin"})

_DROPPED_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "streetaddress",
        "street_address",
    }
)


def redact_for_log(value: Any, *, max_string: int = 256, max_items: int = 10, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs.

    VINs are masked, street addresses are replaced with ``<redacted>``,
    long strings are truncated and long lists are summarised.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            lowered = key.lower()
            if lowered in _DROPPED_VALUE_KEYS:
                redacted[key] = "<redacted>"
            elif lowered in _MASKED_VALUE_KEYS and isinstance(v, str):
                redacted[key] = mask_vin(v)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        items = [
            redact_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1) for v in value[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<+{len(value) - max_items} more>")
        return items

    return repr(value)
