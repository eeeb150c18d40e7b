"""Vehicle identity record resolved by the registration lookup."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from autoconnex.formatting import mask_vin
from autoconnex.models._base import AutoConnexModel


class Transmission(StrEnum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


class FuelType(StrEnum):
    PETROL = "petrol"
    DIESEL = "diesel"
    HYBRID = "hybrid"
    ELECTRIC = "electric"


class VehicleBasicDetails(AutoConnexModel):
    """Identity and build details of the vehicle being sold.

    Populated at step 1 from the registration lookup and editable at
    step 2.  The full VIN is stored; use :attr:`masked_vin` for display.
    """

    registration: str
    """Registration plate (e.g. ``"ABC123"``)."""
    state: str
    """State code the vehicle is registered in (e.g. ``"NSW"``)."""
    make: str
    model: str
    variant: str = ""
    year: int
    color: str = ""
    body_type: str = ""
    """Body style (e.g. ``"Sedan"``, ``"SUV"``)."""
    transmission: Transmission
    fuel_type: FuelType
    engine_size: str = ""
    """Free-form engine size (e.g. ``"1.8L"``)."""
    vin: str = ""
    """Full, unmasked Vehicle Identification Number."""
    mileage: int = Field(default=0, ge=0)
    """Odometer reading in km."""
    has_logbook: bool = False
    """Whether a service logbook history is available."""

    @field_validator("registration", "state", "vin")
    @classmethod
    def _strip_upper(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def masked_vin(self) -> str:
        return mask_vin(self.vin)

    @property
    def title(self) -> str:
        """Display title, e.g. ``"2020 Toyota Corolla SX"``."""
        parts = [str(self.year), self.make, self.model, self.variant]
        return " ".join(part for part in parts if part)
