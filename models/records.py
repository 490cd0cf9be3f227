"""Domain models shared across services."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class InvalidInput(ValueError):
    """Raised when a category code or quantity falls outside its valid domain."""


class EmissionCategory(str, Enum):
    """Emission sources tracked by the footprint calculator."""

    transport = "transport"
    electricity = "electricity"
    diet = "diet"


class VehicleKind(str, Enum):
    petrol_car = "Petrol Car"
    diesel_car = "Diesel Car"
    motorbike = "Motorbike"
    bus = "Bus"
    train = "Train"
    flight = "Flight"


class DietKind(str, Enum):
    meat_heavy = "Meat heavy"
    average = "Average"
    vegetarian = "Vegetarian"
    vegan = "Vegan"


class ConsumerCategory(str, Enum):
    """Tariff categories for electricity consumers."""

    domestic = "Domestic"
    commercial = "Commercial"
    industrial = "Industrial"


# Menu codes shown to console users.
VEHICLE_CODES: Dict[int, VehicleKind] = {
    1: VehicleKind.petrol_car,
    2: VehicleKind.diesel_car,
    3: VehicleKind.motorbike,
    4: VehicleKind.bus,
    5: VehicleKind.train,
    6: VehicleKind.flight,
}

DIET_CODES: Dict[int, DietKind] = {
    1: DietKind.meat_heavy,
    2: DietKind.average,
    3: DietKind.vegetarian,
    4: DietKind.vegan,
}

CONSUMER_CODES: Dict[int, ConsumerCategory] = {
    1: ConsumerCategory.domestic,
    2: ConsumerCategory.commercial,
    3: ConsumerCategory.industrial,
}


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        str_strip_whitespace=True,
        allow_inf_nan=False,
        revalidate_instances="always",
    )


class TransportRecord(_Record):
    category: Literal["transport"] = "transport"
    vehicle: VehicleKind
    annual_km: float = Field(..., ge=0)


class ElectricityRecord(_Record):
    category: Literal["electricity"] = "electricity"
    annual_kwh: float = Field(..., ge=0)


class DietRecord(_Record):
    category: Literal["diet"] = "diet"
    diet: DietKind


EmissionRecord = Annotated[
    Union[TransportRecord, ElectricityRecord, DietRecord],
    Field(discriminator="category"),
]


class ConsumerRecord(_Record):
    """A consumer entered for billing. The bill itself is always derived."""

    consumer_id: str = Field(..., min_length=1)
    name: str
    category: ConsumerCategory
    units: int = Field(..., ge=0)
