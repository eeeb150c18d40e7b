"""Internal constants shared across the library."""

from enum import IntEnum

DRAFT_STORAGE_KEY = "@auto_connex:sell_draft"
LISTINGS_STORAGE_KEY = "@auto_connex:my_listings"

FIRST_STEP = 1
TOTAL_STEPS = 7

MIN_PHOTOS = 1
MAX_PHOTOS = 20

# Short-form Australian state/territory codes accepted by the rego lookup.
AUSTRALIAN_STATES: tuple[str, ...] = ("NSW", "VIC", "QLD", "WA", "SA", "TAS", "ACT", "NT")

# Registration plates are at most 7 alphanumerics.
REGISTRATION_MAX_LENGTH = 7


class SellStep(IntEnum):
    """The seven screens of the sell flow, in navigation order."""

    REGO_LOOKUP = 1
    VEHICLE_DETAILS = 2
    PHOTOS = 3
    CONDITION_REPORT = 4
    AFTER_MARKET_EXTRAS = 5
    PRICING = 6
    REVIEW_PUBLISH = 7


def clamp_step(step: int) -> int:
    """Clamp *step* into the ``[FIRST_STEP, TOTAL_STEPS]`` range."""
    return max(FIRST_STEP, min(TOTAL_STEPS, int(step)))
