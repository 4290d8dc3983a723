"""CLI entry point for pfv."""

import os
import sys

import typer
from rich.console import Console

from pfv.commands.admin import init_command
from pfv.commands.report import report_command
from pfv.commands.transactions import add_command, delete_command, list_command
from pfv.config import Settings, load_settings
from pfv.logging_setup import LOG_LEVEL_ENV, configure_logging

app = typer.Typer(
    name="pfv",
    help="Personal Finance Visualizer - record expenses and see your monthly totals",
    add_completion=False,
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Personal Finance Visualizer - record expenses and see your monthly totals."""
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)

    configure_logging("DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV) or settings.log_level)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> Settings:
    settings: Settings = ctx.obj
    return settings


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Rewrite the config file even if pfv is already set up"),
) -> None:
    """Initialize pfv database and configuration."""
    init_command(_settings(ctx), force)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Argument(..., help="Amount spent (use '--' before negative amounts)"),
    date: str = typer.Argument(..., help="Date of the transaction (YYYY-MM-DD)"),
    description: str = typer.Argument(..., help="What the money was spent on"),
) -> None:
    """Record a transaction."""
    add_command(_settings(ctx), amount, date, description)


@app.command()
def delete(
    ctx: typer.Context,
    transaction_id: str = typer.Argument(..., help="Transaction ID (from 'pfv list')"),
) -> None:
    """Delete a transaction."""
    delete_command(_settings(ctx), transaction_id)


@app.command(name="list")
def list_transactions(
    ctx: typer.Context,
    limit: int = typer.Option(50, min=0, help="Maximum transactions to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all your transactions"),
) -> None:
    """List your transactions, newest first."""
    list_command(_settings(ctx), limit, all)


@app.command()
def report(
    ctx: typer.Context,
    order: str = typer.Option(None, "--order", help="Month order: 'first-seen' or 'chronological'"),
    histogram: bool = typer.Option(True, help="Show histogram of your monthly spending"),
) -> None:
    """Show your monthly expense totals."""
    report_command(_settings(ctx), order, histogram)


if __name__ == "__main__":
    app()
