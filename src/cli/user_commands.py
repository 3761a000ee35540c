"""User management CLI commands."""

import asyncio
from typing import NoReturn

import typer
from rich.table import Table

from src.users_api.core.result import Failure

from .utils import console, get_users_resource

users_app = typer.Typer(help="Manage users")


def _fail(result: Failure) -> NoReturn:
    if isinstance(result.detail, list):
        for error in result.detail:
            console.print(f"[red]{error['field']}: {error['message']}[/red]")
    else:
        console.print(f"[red]{result.detail}[/red]")
    raise typer.Exit(code=1)


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    result = asyncio.run(get_users_resource().list_users())
    if isinstance(result, Failure):
        _fail(result)

    if not result.data:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    for user in result.data:
        table.add_row(str(user["id"]), user["username"], user["email"])

    console.print(table)
    console.print(f"\n[green]Found {len(result.data)} users[/green]")


@users_app.command("add")
def add_user(
    username: str = typer.Argument(..., help="Username for the new user"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
) -> None:
    """Add a user."""
    result = asyncio.run(
        get_users_resource().create({"username": username, "email": email})
    )
    if isinstance(result, Failure):
        _fail(result)
    console.print(f"[green]Created user '{username}' with id {result.extra['id']}[/green]")
