"""Database management CLI commands."""

import typer

from src.users_api.runtime.init_db import init_db

from .utils import console, get_database_service

db_app = typer.Typer(help="Manage the users database")


@db_app.command("init")
def init() -> None:
    """Create the users table if it does not exist."""
    try:
        init_db(get_database_service())
    except Exception as e:
        console.print(f"[red]Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print("[green]Database initialized[/green]")
