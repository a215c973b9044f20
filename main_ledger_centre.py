"""Mini README: Entry point CLI for the Farm Ledger service.

This script exposes a Typer CLI that starts the FastAPI application, resets
the configured ledger store to its seed data, and prints or exports reports
without running the web service. Settings are drawn from ``FARMLEDGER_*``
environment variables when available.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from farmledger.configuration import get_settings
from farmledger.ledger import LedgerRepository, build_store
from farmledger.logging_utils import configure_root_logger
from farmledger.reports import (
    FarmerNotFound,
    build_farmer_report,
    build_overall_report,
    format_pkr,
    render_farmer_report,
    render_overall_report,
)

cli = typer.Typer(help="Run and manage the Farm Ledger bookkeeping service.")


def _repository() -> LedgerRepository:
    return LedgerRepository(build_store(get_settings()))


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open 0.0.0.0 directly, so point them at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        "Starting Farm Ledger on "
        f"{effective_host}:{effective_port}.\n"
        "Open your browser at "
        f"http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "farmledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def reset(
    yes: bool = typer.Option(False, "--yes", help="Skip the confirmation prompt."),
) -> None:
    """Discard all recorded entries and restore the seed ledger."""

    if not yes:
        typer.confirm("This deletes every farmer, income and expense. Continue?", abort=True)
    document = _repository().reset()
    typer.echo(
        f"Ledger reset: {len(document.farmers)} farmer(s), {len(document.expenses)} expense(s)."
    )


@cli.command()
def report(
    farmer_id: Optional[int] = typer.Option(None, help="Report on a single farmer."),
    output: Optional[Path] = typer.Option(None, help="Write the printable HTML report here."),
) -> None:
    """Print ledger totals or export a printable HTML report."""

    settings = get_settings()
    document = _repository().get_document()

    if farmer_id is None:
        overall = build_overall_report(document)
        if output:
            output.write_text(
                render_overall_report(overall, currency_prefix=settings.currency_prefix),
                encoding="utf-8",
            )
            typer.echo(f"Overall report written to {output}")
            return
        for row in overall.rows:
            typer.echo(
                f"{row.farmer_name:<20} {row.crop:<12} "
                f"{format_pkr(row.income, settings.currency_prefix):>14} "
                f"{format_pkr(row.expense, settings.currency_prefix):>14} "
                f"{format_pkr(row.profit, settings.currency_prefix):>14}"
            )
        typer.echo(f"Total Income:   {format_pkr(overall.total_income, settings.currency_prefix)}")
        typer.echo(f"Total Expense:  {format_pkr(overall.total_expense, settings.currency_prefix)}")
        typer.echo(f"Overall Profit: {format_pkr(overall.total_profit, settings.currency_prefix)}")
        return

    result = build_farmer_report(document, farmer_id)
    if isinstance(result, FarmerNotFound):
        typer.echo(f"{result.message}: {farmer_id}", err=True)
        raise typer.Exit(code=1)
    if output:
        output.write_text(
            render_farmer_report(result, currency_prefix=settings.currency_prefix),
            encoding="utf-8",
        )
        typer.echo(f"Report for {result.farmer_name} written to {output}")
        return
    typer.echo(f"{result.farmer_name} ({result.crop}, {result.area})")
    typer.echo(f"Income:  {format_pkr(result.income_total, settings.currency_prefix)}")
    typer.echo(f"Expense: {format_pkr(result.expense_total, settings.currency_prefix)}")
    typer.echo(f"Profit:  {format_pkr(result.profit, settings.currency_prefix)}")


if __name__ == "__main__":
    cli()
