from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from autoconnex.models.listing import (
    AfterMarketExtra,
    ConditionItem,
    ConditionReport,
    PickupLocation,
    PricingDetails,
    SellListingData,
    Severity,
    WriteOffDetails,
)
from autoconnex.models.vehicle import FuelType, Transmission, VehicleBasicDetails
from autoconnex.storage.memory import InMemoryStorage


class FlakyStorage(InMemoryStorage):
    """In-memory storage whose operations can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []

    def _maybe_fail(self, operation: str, key: str) -> None:
        self.calls.append((operation, key))
        if operation in self.failing:
            raise OSError(f"disk error during {operation}")

    async def get(self, key: str) -> str | None:
        self._maybe_fail("get", key)
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        self._maybe_fail("set", key)
        await super().set(key, value)

    async def remove(self, key: str) -> None:
        self._maybe_fail("remove", key)
        await super().remove(key)


class GatedStorage(InMemoryStorage):
    """Storage whose first ``set`` blocks until ``gate`` is released."""

    def __init__(self) -> None:
        super().__init__()
        self.gate = asyncio.Event()
        self.writes: list[str] = []
        self._first = True

    async def set(self, key: str, value: str) -> None:
        if self._first:
            self._first = False
            await self.gate.wait()
        self.writes.append(value)
        await super().set(key, value)


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def flaky_storage() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture
def gated_storage() -> GatedStorage:
    return GatedStorage()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def vehicle() -> VehicleBasicDetails:
    return VehicleBasicDetails(
        registration="ABC123",
        state="NSW",
        make="Toyota",
        model="Corolla",
        variant="SX",
        year=2020,
        color="White",
        body_type="Sedan",
        transmission=Transmission.AUTOMATIC,
        fuel_type=FuelType.PETROL,
        engine_size="1.8L",
        vin="1HGCM82633A123456",
        mileage=45000,
        has_logbook=True,
    )


@pytest.fixture
def listing_data(vehicle: VehicleBasicDetails) -> SellListingData:
    return SellListingData(
        vehicle_details=vehicle,
        photos=["uri1", "uri2"],
        condition_report=ConditionReport(
            pros=[ConditionItem(id="p1", description="New tyres")],
            cons=[ConditionItem(id="c1", description="Stone chip on bonnet")],
            defects=[ConditionItem(id="d1", description="Rear bumper scuff", severity=Severity.MINOR)],
        ),
        after_market_extras=[AfterMarketExtra(id="e1", name="Tow bar")],
        write_off=WriteOffDetails(is_write_off=False),
        pricing=PricingDetails(asking_price=21500, negotiable=True),
        pickup_location=PickupLocation(
            street_address="1 George Street",
            suburb="Sydney",
            state="NSW",
            postcode="2000",
        ),
    )
