"""
RPC Commands.

The same note operations over the note_v1.NoteV1 RPC service. Update
sends wrapper fields, so ``--title ""`` clears a title while an omitted
option leaves the field untouched.

Examples:
    note-client rpc create -t "Groceries" --public
    note-client rpc get 42
    note-client rpc update 42 --private --context ""
"""

from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import typer

from note_service.cli.client import APIClient, get_api_client
from note_service.cli.commands.common import (
    console,
    display_note,
    display_note_rows,
    fail,
    run_api_call,
)

app = typer.Typer(help="Note commands (note_v1.NoteV1 RPC)")


def _call(action: Callable[[APIClient], Awaitable[httpx.Response]]) -> dict[str, Any]:
    """Run one RPC and return the response message, or print the RPC status and exit."""
    response = run_api_call(get_api_client(), action)
    if response.status_code == 200:
        return response.json()

    message = f"HTTP {response.status_code}"
    try:
        status = response.json()
        message = f"{status.get('code', message)}: {status.get('message', '')}"
    except ValueError:
        pass
    fail(message)


@app.command()
def create(
    title: str = typer.Option("", "--title", "-t", help="Note title"),
    context: str = typer.Option("", "--context", "-c", help="Note body"),
    author: str = typer.Option("", "--author", "-a", help="Author name"),
    public: bool = typer.Option(False, "--public/--private", help="Note visibility"),
) -> None:
    """Create a note and print its id."""
    info = {"title": title, "context": context, "author": author, "is_public": public}
    message = _call(lambda client: client.rpc_create(info))
    console.print(f"[green]Note {message['id']} created[/green]")


@app.command()
def get(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Show a note by id."""
    message = _call(lambda client: client.rpc_get(note_id))
    display_note(message["note"], "Note")


@app.command("list")
def list_notes(
    limit: int = typer.Option(20, "--limit", "-l", help="Notes to return; 0 or less returns none"),
    offset: int = typer.Option(0, "--offset", "-o", min=0, help="Notes to skip"),
) -> None:
    """List notes in creation order."""
    message = _call(lambda client: client.rpc_list(limit, offset))
    display_note_rows(message.get("notes", []))


@app.command()
def update(
    note_id: int = typer.Argument(..., help="Note id"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    context: str | None = typer.Option(None, "--context", "-c", help="New body"),
    author: str | None = typer.Option(None, "--author", "-a", help="New author"),
    public: bool | None = typer.Option(None, "--public/--private", help="New visibility"),
) -> None:
    """Patch a note. Only the options given are wrapped and sent."""
    info = {
        name: {"value": value}
        for name, value in (
            ("title", title),
            ("context", context),
            ("author", author),
            ("is_public", public),
        )
        if value is not None
    }
    _call(lambda client: client.rpc_update(note_id, info))
    console.print(f"[green]Note {note_id} updated[/green]")


@app.command()
def delete(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Delete a note permanently."""
    _call(lambda client: client.rpc_delete(note_id))
    console.print(f"[green]Note {note_id} deleted[/green]")
