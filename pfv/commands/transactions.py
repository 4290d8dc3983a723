"""Transaction management commands (add, delete, list)."""

import sqlite3
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pfv.config import Settings
from pfv.dates import normalize_date
from pfv.store.blob import SqliteBlobStore
from pfv.store.schema import init_database
from pfv.store.transaction_store import TransactionStore

console = Console()


def format_amount(amount: float, currency: str) -> str:
    """Format an amount with its currency symbol (e.g., "-$3.50")."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"


def open_store(settings: Settings) -> TransactionStore:
    """Open the ledger configured in settings.

    The database is initialized up front so that an unwritable location is
    reported to the user instead of being swallowed on the first save.
    """
    try:
        init_database(settings.db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)

    return TransactionStore(SqliteBlobStore(settings.db_path), key=settings.ledger_key)


def add_command(settings: Settings, amount: str, date: str, description: str) -> None:
    """Add a transaction.

    Args:
        settings: Resolved settings.
        amount: Transaction amount.
        date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, or other formats).
        description: Transaction description.
    """
    try:
        normalized_date = normalize_date(date) if date.strip() else date
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)

    store = open_store(settings)
    txn = store.add(amount, normalized_date, description)

    if txn is None:
        console.print("[yellow]Transaction not recorded[/yellow]")
        console.print("[dim]Amount, date and description are required, and the amount must be a number[/dim]")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date}")
    console.print(f"  Description: {escape(txn.description)}")
    console.print(f"  Amount: {format_amount(txn.amount, settings.currency)}")


def delete_command(settings: Settings, transaction_id: str) -> None:
    """Delete a transaction.

    Args:
        settings: Resolved settings.
        transaction_id: Transaction ID (from 'pfv list').
    """
    store = open_store(settings)
    txn = store.get(transaction_id)

    if not store.delete(transaction_id):
        console.print(f"[yellow]No transaction with ID {transaction_id}[/yellow]")
        return

    console.print(f"[green]✓[/green] Deleted transaction {transaction_id}:")
    if txn is not None:
        console.print(f"  Date: {txn.date}")
        console.print(f"  Description: {escape(txn.description)}")
        console.print(f"  Amount: {format_amount(txn.amount, settings.currency)}")


def list_command(settings: Settings, limit: int = 50, all: bool = False) -> None:
    """List transactions, most recently added first."""
    store = open_store(settings)
    transactions = store.transactions if all else store.transactions[:limit]

    if not transactions:
        console.print("[yellow]No transactions yet[/yellow]")
        return

    title = (
        f"Transactions (showing all {len(transactions)})"
        if all
        else f"Transactions (showing {len(transactions)} of {len(store)})"
    )
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        amount_display = format_amount(txn.amount, settings.currency)
        if txn.amount < 0:
            amount_display = f"[green]{amount_display}[/green]"
        table.add_row(txn.id, escape(txn.date), escape(txn.description), amount_display)

    console.print(table)
