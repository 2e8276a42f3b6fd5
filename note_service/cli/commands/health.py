"""
Health Check Commands.

Commands for checking that the backend is reachable.
"""

import asyncio

import httpx
import typer
from rich.console import Console

from note_service.cli.client import get_api_client

app = typer.Typer(help="Health check commands")
console = Console()


@app.command()
def ping() -> None:
    """
    Simple ping to check if backend is reachable.

    Returns success if backend responds, failure otherwise.
    """
    asyncio.run(_ping())


async def _ping() -> None:
    client = get_api_client()
    try:
        response = await client.ping()
    except httpx.HTTPError as e:
        console.print(f"[red]Backend unreachable: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await client.close()

    if response.status_code != 200:
        console.print(f"[red]Unexpected response: {response.status_code}[/red]")
        raise typer.Exit(1)
    console.print("[green]Backend is reachable[/green]")
