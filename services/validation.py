"""Turn raw menu codes and quantities into validated, immutable records."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from models.records import (
    CONSUMER_CODES,
    DIET_CODES,
    VEHICLE_CODES,
    ConsumerCategory,
    ConsumerRecord,
    DietKind,
    DietRecord,
    ElectricityRecord,
    InvalidInput,
    TransportRecord,
    VehicleKind,
)

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)
_M = TypeVar("_M", bound=BaseModel)


def resolve_choice(
    choice: Union[int, str, _E],
    codes: Dict[int, _E],
    enum_type: Type[_E],
    label: str,
) -> _E:
    """Resolve a menu code, enum member, member name or display value.

    ``"2"``, ``2``, ``"diesel_car"`` and ``"Diesel Car"`` all name the same
    vehicle kind. Anything else raises :class:`InvalidInput`.
    """
    if isinstance(choice, enum_type):
        return choice
    if isinstance(choice, bool):
        raise InvalidInput(f"Invalid {label} input.")
    if isinstance(choice, int):
        resolved = codes.get(choice)
        if resolved is None:
            raise InvalidInput(f"Invalid {label} input.")
        return resolved
    if isinstance(choice, str):
        candidate = choice.strip()
        if candidate.isdigit():
            return resolve_choice(int(candidate), codes, enum_type, label)
        for member in enum_type:
            if candidate.lower() in {member.name, member.value.lower()}:
                return member
    raise InvalidInput(f"Invalid {label} input.")


def _build(model: Type[_M], label: str, **fields: Any) -> _M:
    try:
        return model(**fields)
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.warning(
            "Rejected %s input", label, extra={"category": label, "reason": reasons}
        )
        raise InvalidInput(f"Invalid {label} input: {reasons}") from exc


def _require_non_negative(value: float, message: str, label: str) -> None:
    if value < 0:
        logger.warning(
            "Rejected %s input", label, extra={"category": label, "reason": message}
        )
        raise InvalidInput(message)


def parse_transport(vehicle: Union[int, str, VehicleKind], annual_km: float) -> TransportRecord:
    kind = resolve_choice(vehicle, VEHICLE_CODES, VehicleKind, "transport")
    _require_non_negative(annual_km, "Invalid transport input.", "transport")
    return _build(TransportRecord, "transport", vehicle=kind, annual_km=annual_km)


def parse_electricity(annual_kwh: float) -> ElectricityRecord:
    _require_non_negative(
        annual_kwh, "Electricity consumption cannot be negative.", "electricity"
    )
    return _build(ElectricityRecord, "electricity", annual_kwh=annual_kwh)


def parse_diet(diet: Union[int, str, DietKind]) -> DietRecord:
    kind = resolve_choice(diet, DIET_CODES, DietKind, "diet")
    return _build(DietRecord, "diet", diet=kind)


def parse_category(category: Union[int, str, ConsumerCategory]) -> ConsumerCategory:
    return resolve_choice(category, CONSUMER_CODES, ConsumerCategory, "consumer type")


def parse_consumer(
    consumer_id: str,
    name: str,
    units: int,
    category: Union[int, str, ConsumerCategory],
) -> ConsumerRecord:
    resolved = parse_category(category)
    _require_non_negative(units, "Units consumed cannot be negative.", "consumer")
    return _build(
        ConsumerRecord,
        "consumer",
        consumer_id=consumer_id,
        name=name,
        category=resolved,
        units=units,
    )
