"""
Note Commands.

Create, read, list, patch and delete notes through the HTTP API of a
running server.
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

app = typer.Typer(help="Note commands (HTTP API)")


def _call(action: Callable[[APIClient], Awaitable[httpx.Response]]) -> httpx.Response:
    return run_api_call(get_api_client(), action)


def _check(response: httpx.Response, expected: int) -> dict[str, Any]:
    """Return the decoded body, or print the envelope error and exit."""
    if response.status_code == expected:
        return response.json() if response.content else {}

    message = f"HTTP {response.status_code}"
    try:
        error = response.json().get("error") or {}
        message = f"{error.get('code', message)}: {error.get('message', '')}"
    except ValueError:
        pass
    fail(message)


@app.command()
def create(
    title: str = typer.Option(..., "--title", "-t", help="Note title"),
    context: str = typer.Option("", "--context", "-c", help="Note body"),
    author: str = typer.Option("", "--author", "-a", help="Author name"),
    public: bool = typer.Option(False, "--public/--private", help="Note visibility"),
) -> None:
    """
    Create a note.

    Examples:
        note-client notes create -t "Groceries" -c "Milk, eggs" -a Ada --public
    """
    info = {"title": title, "context": context, "author": author, "is_public": public}
    body = _check(_call(lambda client: client.create_note(info)), 201)
    display_note(body["data"], "Note created")


@app.command()
def get(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Show a note by id."""
    body = _check(_call(lambda client: client.get_note(note_id)), 200)
    display_note(body["data"], "Note")


@app.command("list")
def list_notes(
    limit: int = typer.Option(20, "--limit", "-l", min=1, max=100, help="Page size"),
    offset: int = typer.Option(0, "--offset", "-o", min=0, help="Notes to skip"),
) -> None:
    """List notes in creation order."""
    body = _check(_call(lambda client: client.list_notes(limit, offset)), 200)
    display_note_rows(body["data"])

    pagination = body["pagination"]
    console.print(
        f"[dim]{len(body['data'])} of {pagination['total']} "
        f"(offset {pagination['offset']})[/dim]"
    )


@app.command()
def update(
    note_id: int = typer.Argument(..., help="Note id"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    context: str | None = typer.Option(None, "--context", "-c", help="New body"),
    author: str | None = typer.Option(None, "--author", "-a", help="New author"),
    public: bool | None = typer.Option(None, "--public/--private", help="New visibility"),
) -> None:
    """
    Patch a note. Only the options given are sent.

    Examples:
        note-client notes update 42 --private
        note-client notes update 42 --context ""
    """
    changes = {
        name: value
        for name, value in (
            ("title", title),
            ("context", context),
            ("author", author),
            ("is_public", public),
        )
        if value is not None
    }
    body = _check(_call(lambda client: client.update_note(note_id, changes)), 200)
    display_note(body["data"], "Note updated")


@app.command()
def delete(note_id: int = typer.Argument(..., help="Note id")) -> None:
    """Delete a note permanently."""
    _check(_call(lambda client: client.delete_note(note_id)), 204)
    console.print(f"[green]Note {note_id} deleted[/green]")
