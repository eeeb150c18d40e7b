"""Vehicle registration lookup.

The sell flow starts by resolving a registration plate and state code to
vehicle details.  Lookups report "not found" as ``None`` so callers can
show a dedicated message; transport failures raise
:class:`VehicleLookupError`.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from autoconnex._constants import AUSTRALIAN_STATES, REGISTRATION_MAX_LENGTH
from autoconnex.config import AutoConnexConfig
from autoconnex.exceptions import ListingValidationError, VehicleLookupError
from autoconnex.models.vehicle import FuelType, Transmission, VehicleBasicDetails

_logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def normalize_registration(text: str) -> str:
    """Uppercase, strip everything but letters and digits, cap at 7 chars."""
    return _NON_ALNUM.sub("", text.upper())[:REGISTRATION_MAX_LENGTH]


def normalize_state_code(state_code: str) -> str:
    """Validate a short-form Australian state code (``"nsw"`` -> ``"NSW"``)."""
    code = state_code.strip().upper()
    if code not in AUSTRALIAN_STATES:
        raise ListingValidationError(f"Unknown state code: {state_code!r}")
    return code


@runtime_checkable
class VehicleLookupService(Protocol):
    """Resolves a registration to vehicle details."""

    async def lookup(self, registration: str, state_code: str) -> VehicleBasicDetails | None:
        """Return the vehicle, or ``None`` if no vehicle is registered under that plate."""
        ...


def _sample_vehicles() -> list[VehicleBasicDetails]:
    return [
        VehicleBasicDetails(
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
        ),
        VehicleBasicDetails(
            registration="XYZ789",
            state="VIC",
            make="Mazda",
            model="CX-5",
            variant="Maxx Sport",
            year=2019,
            color="Soul Red",
            body_type="SUV",
            transmission=Transmission.AUTOMATIC,
            fuel_type=FuelType.PETROL,
            engine_size="2.5L",
            vin="JM0KF4W7A00123456",
            mileage=62000,
            has_logbook=True,
        ),
        VehicleBasicDetails(
            registration="UTE42",
            state="QLD",
            make="Ford",
            model="Ranger",
            variant="XLT",
            year=2021,
            color="Blue",
            body_type="Ute",
            transmission=Transmission.MANUAL,
            fuel_type=FuelType.DIESEL,
            engine_size="3.2L",
            vin="MPBUMFF50MX123456",
            mileage=38500,
            has_logbook=False,
        ),
        VehicleBasicDetails(
            registration="EV2023",
            state="NSW",
            make="Tesla",
            model="Model 3",
            variant="Long Range",
            year=2023,
            color="Midnight Silver",
            body_type="Sedan",
            transmission=Transmission.AUTOMATIC,
            fuel_type=FuelType.ELECTRIC,
            engine_size="",
            vin="5YJ3E1EB7PF123456",
            mileage=12000,
            has_logbook=True,
        ),
    ]


class MockVehicleLookup:
    """In-memory lookup service with simulated latency.

    Parameters
    ----------
    vehicles : iterable of VehicleBasicDetails, optional
        Registry to answer from.  Defaults to a small sample set.
    config : AutoConnexConfig, optional
        Supplies the simulated latency range.
    """

    def __init__(
        self,
        vehicles: Iterable[VehicleBasicDetails] | None = None,
        *,
        config: AutoConnexConfig | None = None,
    ) -> None:
        self._config = config or AutoConnexConfig()
        self._vehicles: dict[tuple[str, str], VehicleBasicDetails] = {}
        self._failure: Exception | None = None
        self.calls = 0
        for vehicle in _sample_vehicles() if vehicles is None else vehicles:
            self.register(vehicle)

    def register(self, vehicle: VehicleBasicDetails) -> None:
        key = (normalize_registration(vehicle.registration), vehicle.state.upper())
        self._vehicles[key] = vehicle

    def fail_next(self, error: Exception | None = None) -> None:
        """Make the next lookup fail with a transport error."""
        self._failure = error or ConnectionError("simulated network failure")

    async def _simulate_latency(self) -> None:
        low, high = self._config.lookup_min_delay, self._config.lookup_max_delay
        if high > 0:
            await asyncio.sleep(random.uniform(low, high))

    async def lookup(self, registration: str, state_code: str) -> VehicleBasicDetails | None:
        """Resolve *registration* in *state_code*.

        Raises
        ------
        ListingValidationError
            If the registration is empty or the state code is unknown.
        VehicleLookupError
            If the (simulated) transport fails.
        """
        rego = normalize_registration(registration)
        if not rego:
            raise ListingValidationError("Please enter a registration number")
        state = normalize_state_code(state_code)

        self.calls += 1
        await self._simulate_latency()

        if self._failure is not None:
            failure, self._failure = self._failure, None
            raise VehicleLookupError(
                f"Failed to look up {rego} ({state}): {failure}",
                registration=rego,
                state_code=state,
            ) from failure

        vehicle = self._vehicles.get((rego, state))
        if vehicle is None:
            _logger.debug("No vehicle registered as %s in %s", rego, state)
        return vehicle
