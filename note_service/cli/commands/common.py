"""
Helpers shared by the note commands.

Commands hand ``run_api_call`` the client and one coroutine to run; it
closes the client afterwards and turns transport failures into a
non-zero exit.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import typer
from rich.console import Console
from rich.table import Table

from note_service.cli.client import APIClient

console = Console()


def run_api_call(
    client: APIClient,
    action: Callable[[APIClient], Awaitable[httpx.Response]],
) -> httpx.Response:
    async def _run() -> httpx.Response:
        try:
            return await action(client)
        finally:
            await client.close()

    try:
        return asyncio.run(_run())
    except httpx.ConnectError:
        console.print("[red]Error: Cannot connect to backend[/red]")
        console.print("[dim]Is the server running? Start with: python cli.py --service server[/dim]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def fail(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def display_note(note: dict[str, Any], title: str) -> None:
    """Render one note as a two-column table."""
    info = note["info"]
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("id", str(note["id"]))
    table.add_row("title", info["title"])
    table.add_row("context", info["context"])
    table.add_row("author", info["author"])
    table.add_row("public", "yes" if info["is_public"] else "no")
    table.add_row("created_at", note["created_at"])
    table.add_row("updated_at", note["updated_at"])
    console.print(table)


def display_note_rows(notes: list[dict[str, Any]]) -> None:
    """Render a list of notes, one row each."""
    table = Table(title="Notes", show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Public")
    table.add_column("Updated")
    for note in notes:
        info = note["info"]
        table.add_row(
            str(note["id"]),
            info["title"],
            info["author"],
            "yes" if info["is_public"] else "no",
            note["updated_at"],
        )
    console.print(table)
