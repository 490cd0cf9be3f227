from __future__ import annotations

from typing import Iterable, Sequence

import typer

from datastore.session import BillLine
from models.records import EmissionCategory
from services.emissions import OFFSET_PRICE_PER_TONNE, FootprintSummary

NO_FOOTPRINT_DATA = "No data available. Please input at least one source."
NO_BILLS = "No bills to display."

_LABEL_WIDTH = 15


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_menu(title: str, options: Sequence[str]) -> None:
    typer.echo()
    echo_heading(title)
    typer.echo("-" * len(title))
    for index, option in enumerate(options, start=1):
        typer.echo(f"{index}. {option}")


def echo_error(message: object) -> None:
    typer.secho(f"Error: {message}", fg=typer.colors.RED)


def _labelled(label: str, text: str) -> str:
    return f"{label + ':':<{_LABEL_WIDTH}}{text}"


def render_footprint(summary: FootprintSummary | None) -> None:
    if summary is None:
        typer.echo(NO_FOOTPRINT_DATA)
        return

    typer.echo()
    echo_heading("==== Annual Footprint ====")
    for category, emission in summary.breakdown.items():
        typer.echo(_labelled(_category_label(category), f"{emission:.2f} kg CO2"))
    typer.echo("-------------------------------")
    typer.echo(
        _labelled("Total", f"{summary.total_kg:.2f} kg CO2  (≈ {summary.tons:.2f} t)")
    )
    typer.echo()
    typer.echo(
        f"Approx. offset cost @ Rs.{OFFSET_PRICE_PER_TONNE}/t = Rs.{summary.offset_cost_rupees}"
    )


def _category_label(category: EmissionCategory) -> str:
    return category.value.capitalize()


def render_bill(line: BillLine) -> None:
    consumer = line.consumer
    typer.echo()
    echo_heading("---- Bill Details ----")
    typer.echo(f"Consumer: {consumer.name} ({consumer.category.value})")
    typer.echo(f"Units: {consumer.units}")
    typer.echo(f"Total Bill: Rs.{line.amount:.2f}")


def render_bills(lines: Iterable[BillLine]) -> None:
    lines = list(lines)
    if not lines:
        typer.echo(NO_BILLS)
        return

    typer.echo()
    echo_heading(f"{'ID':<10} {'Name':<15} {'Units':<10} {'Type':<12} {'Bill (Rs.)':<10}")
    typer.echo("-" * 53)
    for line in lines:
        consumer = line.consumer
        typer.echo(
            f"{consumer.consumer_id:<10} {consumer.name:<15} {consumer.units:<10d} "
            f"{consumer.category.value:<12} Rs.{line.amount:.2f}"
        )
