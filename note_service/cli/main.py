"""
Note Client CLI.

Command-line client for the notes HTTP API and the note_v1.NoteV1 RPC service.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    note-client --help
    note-client notes create -t "Groceries" -c "Milk, eggs" -a Ada --public
    note-client notes get 42
    note-client notes list --limit 10 --offset 20
    note-client notes update 42 --private
    note-client notes delete 42
    note-client rpc get 42
    note-client rpc update 42 --title ""
    note-client health ping
    note-client --url http://10.0.0.5:8081 notes list

Options:
    --url             Server base URL (default from application.yaml)
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
"""

import typer

from note_service.cli.client import configure_api_client
from note_service.cli.commands import health_app, notes_app, rpc_app

app = typer.Typer(
    name="note-client",
    help="Note Service client - create, read, update and delete notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(notes_app, name="notes")
app.add_typer(rpc_app, name="rpc")
app.add_typer(health_app, name="health")


@app.callback()
def main(
    url: str | None = typer.Option(
        None,
        "--url",
        help="Server base URL (default from config/settings/application.yaml)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Note Service client.

    Talks to a running server over HTTP (notes) or RPC (rpc).
    """
    if url:
        configure_api_client(url)

    if debug or verbose:
        from note_service.backend.core.logging import setup_logging
        setup_logging(level="DEBUG" if debug else "INFO", format_type="console")


if __name__ == "__main__":
    app()
