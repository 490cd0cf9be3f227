from __future__ import annotations

from typing import Optional

import typer

from cli.render import (
    echo_error,
    echo_menu,
    render_bill,
    render_bills,
    render_footprint,
)
from datastore.session import BillLedger, FootprintSession
from logging_config import configure_logging
from models.records import InvalidInput
from services.billing import compute_bill
from services.validation import (
    parse_category,
    parse_consumer,
    parse_diet,
    parse_electricity,
    parse_transport,
)
from settings import LOG_LEVELS

FOOTPRINT_OPTIONS = (
    "Enter / Modify Transport Data",
    "Enter / Modify Electricity Data",
    "Enter / Modify Diet Data",
    "Calculate Carbon Footprint & Offset Cost",
    "Exit",
)

BILL_OPTIONS = (
    "Generate New Bill",
    "Display All Bills",
    "Exit",
)

VEHICLE_PROMPT = (
    "Vehicle type? (1 Petrol Car, 2 Diesel Car, 3 Motorbike, 4 Bus, 5 Train, 6 Flight)"
)
DIET_PROMPT = "Diet type? (1 Meat heavy, 2 Average, 3 Vegetarian, 4 Vegan)"
CONSUMER_TYPE_PROMPT = "Enter Type (1-Domestic, 2-Commercial, 3-Industrial)"


app = typer.Typer(
    help="Carbon footprint and electricity bill calculators.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or WARNING).",
    ),
) -> None:
    """Entry point for the CLI."""
    level = log_level.strip().upper() if log_level else None
    if level is not None and level not in LOG_LEVELS:
        echo_error(f"Unknown log level '{log_level}'. Choose one of: {', '.join(LOG_LEVELS)}.")
        raise typer.Exit(code=1)
    configure_logging(level)


def _add_transport(session: FootprintSession) -> None:
    typer.echo("\n-- Transport Data --")
    vehicle = typer.prompt(VEHICLE_PROMPT, type=int)
    km = typer.prompt("Annual kilometres", type=float)
    session.record(parse_transport(vehicle, km))
    typer.echo("Saved.")


def _add_electricity(session: FootprintSession) -> None:
    typer.echo("\n-- Electricity Data --")
    kwh = typer.prompt("Annual kWh consumption", type=float)
    session.record(parse_electricity(kwh))
    typer.echo("Saved.")


def _add_diet(session: FootprintSession) -> None:
    typer.echo("\n-- Diet Data --")
    diet = typer.prompt(DIET_PROMPT, type=int)
    session.record(parse_diet(diet))
    typer.echo("Saved.")


@app.command("footprint")
def footprint_command() -> None:
    """Interactively estimate an annual carbon footprint and offset cost."""
    session = FootprintSession()
    handlers = {
        1: _add_transport,
        2: _add_electricity,
        3: _add_diet,
        4: lambda current: render_footprint(current.summary()),
    }
    while True:
        echo_menu("MAIN MENU", FOOTPRINT_OPTIONS)
        choice = typer.prompt("Choose option (1-5)", type=int)
        if choice == 5:
            typer.echo("Exiting... Goodbye!")
            return
        try:
            handler = handlers.get(choice)
            if handler is None:
                raise InvalidInput("Option out of range.")
            handler(session)
        except InvalidInput as exc:
            echo_error(exc)


def _generate_bill(ledger: BillLedger) -> None:
    consumer_id = typer.prompt("Enter Consumer ID")
    name = typer.prompt("Enter Name")
    units = typer.prompt("Enter Units Consumed", type=int)
    category = typer.prompt(CONSUMER_TYPE_PROMPT, type=int)
    line = ledger.add(parse_consumer(consumer_id, name, units, category))
    render_bill(line)


@app.command("bills")
def bills_command() -> None:
    """Interactively generate electricity bills and list them."""
    ledger = BillLedger()
    while True:
        echo_menu("MAIN MENU", BILL_OPTIONS)
        choice = typer.prompt("Enter option (1-3)", type=int)
        if choice == 1:
            try:
                _generate_bill(ledger)
            except InvalidInput as exc:
                echo_error(exc)
        elif choice == 2:
            render_bills(ledger.lines())
        elif choice == 3:
            typer.echo("Exiting...")
            return
        else:
            typer.echo("Invalid option.")


@app.command("estimate")
def estimate_command(
    vehicle: Optional[str] = typer.Option(
        None, "--vehicle", "-v", help="Vehicle code (1-6) or name, e.g. 'Diesel Car'."
    ),
    km: Optional[float] = typer.Option(
        None, "--km", help="Annual kilometres travelled by the vehicle (needs --vehicle)."
    ),
    kwh: Optional[float] = typer.Option(None, "--kwh", help="Annual electricity use in kWh."),
    diet: Optional[str] = typer.Option(
        None, "--diet", "-d", help="Diet code (1-4) or name, e.g. 'Vegan'."
    ),
) -> None:
    """Estimate a footprint in one shot from command-line options."""
    if vehicle is None and km is not None:
        echo_error("--km needs --vehicle.")
        raise typer.Exit(code=1)
    session = FootprintSession()
    try:
        if vehicle is not None:
            session.record(parse_transport(vehicle, km if km is not None else 0.0))
        if kwh is not None:
            session.record(parse_electricity(kwh))
        if diet is not None:
            session.record(parse_diet(diet))
    except InvalidInput as exc:
        echo_error(exc)
        raise typer.Exit(code=1)
    render_footprint(session.summary())


@app.command("quote")
def quote_command(
    category: str = typer.Argument(..., help="Consumer type: 1-3 or domestic/commercial/industrial."),
    units: int = typer.Argument(..., help="Units consumed."),
) -> None:
    """Print the bill for a single consumption figure."""
    try:
        resolved = parse_category(category)
        amount = compute_bill(resolved, units)
    except InvalidInput as exc:
        echo_error(exc)
        raise typer.Exit(code=1)
    typer.echo(f"{resolved.value} bill for {units} units: Rs.{amount:.2f}")
