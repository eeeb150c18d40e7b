from __future__ import annotations

import re

import pytest

from autoconnex._ids import generate_id, generate_listing_id
from autoconnex.formatting import format_mileage, format_price, mask_vin, total_extras_value
from autoconnex.models.listing import AfterMarketExtra

LISTING_ID_PATTERN = re.compile(r"^listing_\d+_[0-9a-z]{9}$")


class TestMaskVin:
    def test_masks_full_vin(self) -> None:
        assert mask_vin("1HGCM82633A123456") == "1HG**********3456"

    @pytest.mark.parametrize("vin", ["", "SHORT", "1HGCM82633A12345"])
    def test_short_values_unchanged(self, vin: str) -> None:
        assert mask_vin(vin) == vin

    def test_does_not_change_length(self) -> None:
        assert len(mask_vin("1HGCM82633A123456")) == 17


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        (0, "$0"),
        (950, "$950"),
        (45000, "$45,000"),
        (1234567, "$1,234,567"),
        (19999.5, "$19,999.50"),
    ],
)
def test_format_price(price: float, expected: str) -> None:
    assert format_price(price) == expected


@pytest.mark.parametrize(
    ("mileage", "expected"),
    [
        (0, "0k km"),
        (45000, "45k km"),
        (45500, "46k km"),
        (123400, "123k km"),
    ],
)
def test_format_mileage(mileage: int, expected: str) -> None:
    assert format_mileage(mileage) == expected


def test_total_extras_value() -> None:
    extras = [
        AfterMarketExtra(id="1", name="Tow bar", cost=850),
        AfterMarketExtra(id="2", name="Tint"),
        AfterMarketExtra(id="3", name="Bull bar", cost=1200.5),
    ]
    assert total_extras_value(extras) == 2050.5
    assert total_extras_value([]) == 0


def test_generate_id_shape() -> None:
    assert re.fullmatch(r"\d+_[0-9a-z]{9}", generate_id())
    assert generate_id(now_ms=1700000000000).startswith("1700000000000_")


def test_generate_listing_id_shape() -> None:
    assert LISTING_ID_PATTERN.match(generate_listing_id())
    assert generate_listing_id(now_ms=42).startswith("listing_42_")


def test_generated_ids_are_distinct() -> None:
    ids = {generate_listing_id(now_ms=1) for _ in range(200)}
    assert len(ids) == 200
