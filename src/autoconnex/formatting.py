"""Pure display-formatting helpers.

None of these functions change stored data; the full VIN, for example, is
always persisted and only masked when rendered.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autoconnex.models.listing import AfterMarketExtra

# A full VIN is 17 characters; shorter values are shown as-is.
_VIN_LENGTH = 17
_VIN_VISIBLE_PREFIX = 3
_VIN_VISIBLE_SUFFIX = 4


def mask_vin(vin: str) -> str:
    """Mask a VIN for display, keeping the first 3 and last 4 characters.

    >>> mask_vin("1HGCM82633A123456")
    '1HG**********3456'
    """
    if not vin or len(vin) < _VIN_LENGTH:
        return vin
    hidden = len(vin) - _VIN_VISIBLE_PREFIX - _VIN_VISIBLE_SUFFIX
    return f"{vin[:_VIN_VISIBLE_PREFIX]}{'*' * hidden}{vin[-_VIN_VISIBLE_SUFFIX:]}"


def format_price(price: float) -> str:
    """Format an AUD amount with thousands separators (``$45,000``)."""
    amount = Decimal(str(price)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if amount == amount.to_integral_value():
        return f"${int(amount):,}"
    return f"${amount:,.2f}"


def format_mileage(mileage: int) -> str:
    """Format an odometer reading in thousands of km (``45k km``)."""
    thousands = (Decimal(mileage) / 1000).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{thousands}k km"


def total_extras_value(extras: Iterable[AfterMarketExtra]) -> float:
    """Sum of the declared cost of all after-market extras."""
    return sum((extra.cost for extra in extras), 0.0)
