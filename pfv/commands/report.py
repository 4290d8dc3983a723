"""Monthly expense report command."""

import sys

from rich.console import Console

from pfv.commands.transactions import format_amount, open_store
from pfv.config import Settings
from pfv.dates import parse_calendar_date
from pfv.domain.report import (
    MonthlyBucket,
    aggregate_monthly,
    calculate_grand_total,
    calculate_histogram_bar_length,
)

console = Console()


def render_bucket_line(
    bucket: MonthlyBucket,
    currency: str,
    histogram: bool,
    max_total: float,
    bar_width: int,
) -> None:
    """Render single month line.

    Args:
        bucket: MonthlyBucket with month total.
        currency: Currency symbol for display.
        histogram: Whether to show histogram bars.
        max_total: Largest absolute month total, for histogram scaling.
        bar_width: Width of histogram bar in characters.
    """
    amount_display = format_amount(bucket.total, currency)

    if histogram and max_total:
        bar_length = calculate_histogram_bar_length(bucket.total, max_total, bar_width)
        bar = "█" * bar_length
        style = "green" if bucket.total < 0 else "magenta"
        console.print(f"  {bucket.label:10} {amount_display:>14} [{style}]{bar}[/{style}]")
    else:
        console.print(f"  {bucket.label}: {amount_display}")


def report_command(
    settings: Settings,
    order: str | None = None,
    histogram: bool = True,
) -> None:
    """Show monthly expense totals."""
    store = open_store(settings)
    transactions = store.transactions

    try:
        buckets = aggregate_monthly(transactions, order or settings.report_order)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if not buckets:
        console.print("[dim]No transactions to report yet[/dim]")
        return

    console.print("[bold cyan]Monthly Expenses[/bold cyan]\n")

    max_total = max(abs(bucket.total) for bucket in buckets)
    for bucket in buckets:
        render_bucket_line(bucket, settings.currency, histogram, max_total, settings.bar_width)

    total = calculate_grand_total(buckets)
    console.print(f"\n  [bold]Total:[/bold] {format_amount(total, settings.currency)}")

    skipped = sum(1 for txn in transactions if parse_calendar_date(txn.date) is None)
    if skipped:
        console.print(f"[dim]{skipped} transaction(s) with an unrecognized date not included[/dim]")
