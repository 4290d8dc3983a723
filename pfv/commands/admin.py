"""Admin commands for initializing pfv."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from pfv.config import Settings, create_default_config, get_config_path
from pfv.store.schema import init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(settings: Settings, force: bool = False) -> None:
    """Initialize pfv database and configuration.

    Existing transactions are never removed; --force only rewrites the config
    file and re-runs schema setup.
    """
    db_path = settings.db_path
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'pfv init --force' to reset the config file[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
