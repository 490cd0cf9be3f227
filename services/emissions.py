"""Annual carbon footprint estimates and offset pricing."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from models.records import (
    DietKind,
    DietRecord,
    ElectricityRecord,
    EmissionCategory,
    EmissionRecord,
    InvalidInput,
    TransportRecord,
    VehicleKind,
)
from services.validation import parse_diet, parse_electricity, parse_transport

logger = logging.getLogger(__name__)

# kg CO2 per km travelled.
TRANSPORT_FACTORS: Dict[VehicleKind, float] = {
    VehicleKind.petrol_car: 0.192,
    VehicleKind.diesel_car: 0.171,
    VehicleKind.motorbike: 0.072,
    VehicleKind.bus: 0.027,
    VehicleKind.train: 0.041,
    VehicleKind.flight: 0.255,
}

# kg CO2 per kWh consumed.
ELECTRICITY_FACTOR = 0.82

# Flat annual kg CO2 per diet, not scaled by anything.
DIET_ANNUAL_KG: Dict[DietKind, float] = {
    DietKind.meat_heavy: 3200.0,
    DietKind.average: 2500.0,
    DietKind.vegetarian: 1700.0,
    DietKind.vegan: 1500.0,
}

OFFSET_PRICE_PER_TONNE = 850

_RECORD_ADAPTER: TypeAdapter[EmissionRecord] = TypeAdapter(EmissionRecord)


@dataclass
class FootprintSummary:
    """Totals for the emission records held in a session."""

    breakdown: Dict[EmissionCategory, float] = field(default_factory=dict)
    total_kg: float = 0.0
    tons: float = 0.0
    offset_cost_rupees: int = 0


def _transport(record: TransportRecord) -> float:
    return record.annual_km * TRANSPORT_FACTORS[record.vehicle]


def _electricity(record: ElectricityRecord) -> float:
    return record.annual_kwh * ELECTRICITY_FACTOR


def _diet(record: DietRecord) -> float:
    return DIET_ANNUAL_KG[record.diet]


_CALCULATORS: Dict[str, Callable[..., float]] = {
    EmissionCategory.transport.value: _transport,
    EmissionCategory.electricity.value: _electricity,
    EmissionCategory.diet.value: _diet,
}


def _revalidate(record: object) -> Union[TransportRecord, ElectricityRecord, DietRecord]:
    # Record models revalidate instances too, so unchecked ``model_construct``
    # records are held to the same domain as parsed ones.
    try:
        return _RECORD_ADAPTER.validate_python(record)
    except ValidationError as exc:
        logger.warning("Rejected emission record", extra={"reason": str(exc.errors()[0]["msg"])})
        raise InvalidInput("Invalid emission record.") from exc


def compute_emission(record: EmissionRecord) -> float:
    """Return the annual kg CO2 for a single record.

    Mappings such as ``{"category": "electricity", "annual_kwh": 100}`` are
    accepted and validated first.
    """
    validated = _revalidate(record)
    emission = _CALCULATORS[validated.category](validated)
    logger.debug(
        "Computed emission",
        extra={"category": validated.category, "amount": round(emission, 3)},
    )
    return emission


def estimate_emission(
    kind: Union[EmissionCategory, str],
    value: Union[float, int, str, Tuple[Union[int, str, VehicleKind], float], DietKind],
) -> float:
    """Validate raw console input for ``kind`` and compute its emission.

    Transport takes a ``(vehicle, km)`` pair, electricity the annual kWh and
    diet a diet choice.
    """
    try:
        category = EmissionCategory(kind)
    except ValueError as exc:
        raise InvalidInput(f"Unknown emission category {kind!r}.") from exc

    if category is EmissionCategory.transport:
        if not isinstance(value, tuple) or len(value) != 2:
            raise InvalidInput("Invalid transport input.")
        vehicle, km = value
        return compute_emission(parse_transport(vehicle, km))
    if category is EmissionCategory.electricity:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise InvalidInput("Invalid electricity input.")
        return compute_emission(parse_electricity(value))
    return compute_emission(parse_diet(value))  # type: ignore[arg-type]


def offset_cost(tons: float) -> int:
    """Offset price in whole rupees, rounding halves up."""
    return int(math.floor(tons * OFFSET_PRICE_PER_TONNE + 0.5))


def aggregate(records: Iterable[EmissionRecord]) -> Optional[FootprintSummary]:
    """Sum emissions across records, keeping the latest record per category.

    Returns ``None`` when there is nothing to report.
    """
    latest: Dict[EmissionCategory, EmissionRecord] = {}
    for record in records:
        validated = _revalidate(record)
        latest[EmissionCategory(validated.category)] = validated

    if not latest:
        logger.debug("No emission records to aggregate")
        return None

    summary = FootprintSummary()
    for category, record in latest.items():
        emission = compute_emission(record)
        summary.breakdown[category] = emission
        summary.total_kg += emission

    summary.tons = summary.total_kg / 1000
    summary.offset_cost_rupees = offset_cost(summary.tons)
    logger.info(
        "Aggregated footprint",
        extra={"record_count": len(latest), "total_kg": round(summary.total_kg, 2)},
    )
    return summary
