"""Unified CLI for the courtroom hearing scheduler.

This module provides a single entry point for scheduler operations:
- Slot availability for a courtroom and date
- Configuration and seed validation
- HTTP API server
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from docket_cli import __version__

# Initialize Typer app and console
app = typer.Typer(
    name="docket",
    help="Courtroom hearing scheduling and availability",
    add_completion=False,
)
console = Console(legacy_windows=False)

CONFIG_OPTION = typer.Option(
    ..., "--config", "-c", exists=True, dir_okay=False, readable=True,
    help="Path to config (.toml or .json)",
)


@app.command()
def slots(
    config: Path = CONFIG_OPTION,
    court_id: str = typer.Option(..., "--court", help="Court identifier"),
    day: str = typer.Option(..., "--date", help="Date (YYYY-MM-DD)"),
    free_only: bool = typer.Option(False, "--free-only", help="List only free slots"),
) -> None:
    """Show free and booked slots for a courtroom on a date."""
    try:
        from .config import build_docket, load_docket_config

        docket = build_docket(load_docket_config(config))
        availability = docket.availability.describe_day(court_id, date.fromisoformat(day))

        court = availability.court
        table = Table(title=f"{court.name} ({court.court_id}) - {availability.hearing_date.isoformat()}")
        table.add_column("Time", style="cyan")
        table.add_column("Status")
        table.add_column("Hearing")
        table.add_column("Case")

        booked_at = {h.start_time: h for h in availability.booked}
        for slot in court.slot_grid():
            if slot in availability.available:
                table.add_row(slot.strftime("%H:%M"), "[green]free[/green]", "", "")
            elif not free_only:
                hearing = booked_at.get(slot)
                table.add_row(
                    slot.strftime("%H:%M"),
                    "[red]booked[/red]",
                    hearing.hearing_id if hearing else "(overlap)",
                    hearing.case_id if hearing else "",
                )

        console.print(table)
        if availability.is_fully_booked:
            console.print("[bold red]Fully booked[/bold red]")
        console.print(
            f"{availability.available_count} of {availability.total_slots} slots free"
        )

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def check(
    config: Path = CONFIG_OPTION,
) -> None:
    """Validate a configuration and its seeded hearings."""
    try:
        from .config import build_docket, load_docket_config

        cfg = load_docket_config(config)
        docket = build_docket(cfg)

        console.print(f"[green]OK[/green] {len(docket.courts)} courts, "
                      f"{len(docket.cases.list_cases())} cases, "
                      f"{len(docket.hearings)} hearings")
        console.print(f"Overlap policy: {cfg.overlap_policy}")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def serve(
    config: Path = CONFIG_OPTION,
    host: str = typer.Option(None, "--host", help="Bind address (overrides config)"),
    port: int = typer.Option(None, "--port", help="Port (overrides config)"),
) -> None:
    """Run the HTTP API."""
    try:
        import uvicorn

        from docket.api.app import create_app
        from .config import build_docket, load_docket_config

        cfg = load_docket_config(config)
        api = create_app(build_docket(cfg))
        bind_host = host or cfg.server.host
        bind_port = port or cfg.server.port
        console.print(f"[bold blue]Serving on http://{bind_host}:{bind_port}[/bold blue]")
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    uvicorn.run(api, host=bind_host, port=bind_port)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Docket CLI v{__version__}")
    console.print("Courtroom hearing scheduling and availability")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
