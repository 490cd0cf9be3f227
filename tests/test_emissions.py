"""Unit tests for footprint estimates and aggregation."""

from __future__ import annotations

import math

import pytest

from models.records import (
    DietKind,
    DietRecord,
    ElectricityRecord,
    EmissionCategory,
    InvalidInput,
    TransportRecord,
    VehicleKind,
)
from services.emissions import (
    TRANSPORT_FACTORS,
    aggregate,
    compute_emission,
    estimate_emission,
    offset_cost,
)
from services.validation import parse_diet, parse_electricity, parse_transport


@pytest.mark.parametrize("vehicle", list(VehicleKind))
def test_transport_is_linear_in_km(vehicle: VehicleKind) -> None:
    factor = TRANSPORT_FACTORS[vehicle]

    assert compute_emission(TransportRecord(vehicle=vehicle, annual_km=0)) == 0
    assert compute_emission(TransportRecord(vehicle=vehicle, annual_km=1000)) == pytest.approx(
        1000 * factor
    )
    assert compute_emission(TransportRecord(vehicle=vehicle, annual_km=2500)) == pytest.approx(
        2500 * factor
    )


def test_electricity_uses_grid_factor() -> None:
    assert compute_emission(ElectricityRecord(annual_kwh=1000)) == pytest.approx(820.0)


def test_diet_is_a_flat_lookup() -> None:
    assert compute_emission(DietRecord(diet=DietKind.vegan)) == 1500
    assert estimate_emission("diet", "Vegan") == 1500
    assert estimate_emission(EmissionCategory.diet, 4) == 1500
    assert estimate_emission("diet", 1) == 3200


def test_estimate_emission_validates_raw_input() -> None:
    assert estimate_emission("transport", (2, 1000)) == pytest.approx(171.0)
    assert estimate_emission("electricity", 100) == pytest.approx(82.0)

    with pytest.raises(InvalidInput):
        estimate_emission("transport", (7, 1000))
    with pytest.raises(InvalidInput):
        estimate_emission("transport", 1000)
    with pytest.raises(InvalidInput):
        estimate_emission("shopping", 10)


@pytest.mark.parametrize(
    "build",
    [
        lambda: parse_transport(1, -1),
        lambda: parse_electricity(-0.5),
        lambda: estimate_emission("electricity", -10),
        lambda: parse_transport(9, 10),
        lambda: parse_diet(9),
        lambda: parse_diet("carnivore"),
    ],
)
def test_out_of_domain_input_raises(build) -> None:
    with pytest.raises(InvalidInput):
        build()


def test_compute_emission_validates_mappings() -> None:
    assert compute_emission({"category": "electricity", "annual_kwh": 100}) == pytest.approx(82.0)

    with pytest.raises(InvalidInput):
        compute_emission({"category": "electricity", "annual_kwh": -1})
    with pytest.raises(InvalidInput):
        compute_emission({"category": "transport", "vehicle": "Hovercraft", "annual_km": 1})


def test_records_are_immutable() -> None:
    record = parse_electricity(100)

    with pytest.raises(Exception):
        record.annual_kwh = 5  # type: ignore[misc]


def test_aggregate_without_records_reports_no_data() -> None:
    assert aggregate([]) is None


def test_aggregate_totals_and_offset_cost() -> None:
    records = [
        parse_transport(1, 10000),  # 1920
        parse_electricity(1000),  # 820
        parse_diet(2),  # 2500
    ]

    summary = aggregate(records)

    assert summary is not None
    assert summary.total_kg == pytest.approx(5240.0)
    assert summary.tons == pytest.approx(5.24)
    assert summary.offset_cost_rupees == 4454
    assert list(summary.breakdown) == [
        EmissionCategory.transport,
        EmissionCategory.electricity,
        EmissionCategory.diet,
    ]


def test_aggregate_keeps_latest_record_per_category() -> None:
    summary = aggregate([parse_diet(1), parse_diet(4)])

    assert summary is not None
    assert summary.breakdown == {EmissionCategory.diet: 1500}
    assert summary.total_kg == 1500


def test_offset_cost_rounds_halves_up() -> None:
    # 0.5 t -> 425, 0.001 t -> 0.85 -> 1
    assert offset_cost(0.5) == 425
    assert offset_cost(0.001) == 1
    assert offset_cost(0.0) == 0


@pytest.mark.parametrize(
    "build",
    [
        lambda: parse_electricity(math.inf),
        lambda: parse_transport(1, math.inf),
        lambda: parse_electricity(math.nan),
        lambda: estimate_emission("electricity", math.inf),
    ],
)
def test_non_finite_quantities_raise(build) -> None:
    with pytest.raises(InvalidInput):
        build()


def test_unvalidated_records_are_checked_before_computing() -> None:
    negative = ElectricityRecord.model_construct(annual_kwh=-5.0)
    unbounded = TransportRecord.model_construct(vehicle=VehicleKind.bus, annual_km=math.inf)

    with pytest.raises(InvalidInput):
        compute_emission(negative)
    with pytest.raises(InvalidInput):
        aggregate([unbounded])
