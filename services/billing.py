"""Tiered electricity tariffs for each consumer category."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from pydantic import StrictInt, TypeAdapter, ValidationError

from models.records import ConsumerCategory, ConsumerRecord, InvalidInput
from services.validation import parse_category

logger = logging.getLogger(__name__)

# (upper bound of the tier in units, rate per unit). ``None`` means unbounded.
Tier = Tuple[Optional[int], float]

DOMESTIC_TIERS: Sequence[Tier] = (
    (100, 1.5),
    (300, 2.5),
    (500, 4.0),
    (None, 6.0),
)

COMMERCIAL_RATE = 6.5
COMMERCIAL_TAX = 0.10

INDUSTRIAL_TIERS: Sequence[Tier] = (
    (500, 5.0),
    (1500, 6.5),
    (None, 8.0),
)
INDUSTRIAL_FUEL_CHARGE = 0.05
INDUSTRIAL_DEMAND_CHARGE = 250.0

_UNITS_ADAPTER: TypeAdapter[int] = TypeAdapter(StrictInt)


def tiered_charge(units: int, tiers: Sequence[Tier]) -> float:
    """Charge each slice of ``units`` at the rate of the tier it falls in."""
    total = 0.0
    lower = 0
    for upper, rate in tiers:
        if units <= lower:
            break
        ceiling = units if upper is None else min(units, upper)
        total += (ceiling - lower) * rate
        if upper is None:
            break
        lower = upper
    return total


def _domestic(units: int) -> float:
    return tiered_charge(units, DOMESTIC_TIERS)


def _commercial(units: int) -> float:
    subtotal = units * COMMERCIAL_RATE
    return subtotal + subtotal * COMMERCIAL_TAX


def _industrial(units: int) -> float:
    subtotal = tiered_charge(units, INDUSTRIAL_TIERS)
    surcharged = subtotal + subtotal * INDUSTRIAL_FUEL_CHARGE
    return surcharged + INDUSTRIAL_DEMAND_CHARGE


_TARIFFS: Dict[ConsumerCategory, Callable[[int], float]] = {
    ConsumerCategory.domestic: _domestic,
    ConsumerCategory.commercial: _commercial,
    ConsumerCategory.industrial: _industrial,
}


def compute_bill(category: Union[ConsumerCategory, int, str], units: int) -> float:
    """Return the bill for ``units`` consumed under ``category``.

    ``category`` may be a :class:`ConsumerCategory`, its menu code (1-3) or its
    name. Raises :class:`InvalidInput` for units that are negative or not
    a whole number, and for an unknown category.
    """
    resolved = parse_category(category)
    try:
        units = _UNITS_ADAPTER.validate_python(units)
    except ValidationError as exc:
        logger.warning(
            "Rejected bill request",
            extra={"category": resolved.value, "reason": "units must be a whole number"},
        )
        raise InvalidInput("Units consumed must be a whole number.") from exc
    if units < 0:
        logger.warning(
            "Rejected bill request",
            extra={"category": resolved.value, "units": units, "reason": "negative units"},
        )
        raise InvalidInput("Units consumed cannot be negative.")

    amount = _TARIFFS[resolved](units)
    logger.debug(
        "Computed bill",
        extra={"category": resolved.value, "units": units, "amount": round(amount, 2)},
    )
    return amount


def bill_for(record: ConsumerRecord) -> float:
    """Recompute the bill for a stored consumer record."""
    return compute_bill(record.category, record.units)
