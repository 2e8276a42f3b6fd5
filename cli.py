#!/usr/bin/env python3
"""
Note Service CLI.

Runs and inspects the note service. Use --service to pick what to do;
--action controls the lifecycle of the server.

Usage:
    python cli.py --help
    python cli.py --service server --verbose
    python cli.py --service server --action status
    python cli.py --service health
    python cli.py --service config
    python cli.py --service test --test-type unit
"""

import asyncio
import os
import signal
import subprocess
import sys
import time
from pathlib import Path

import click
import httpx
import structlog

from note_service.backend.api.rpc.note_v1 import SERVICE_NAME as RPC_SERVICE
from note_service.backend.core.logging import get_logger, setup_logging

PROJECT_ROOT = Path(__file__).parent

APP_IMPORT_PATH = "note_service.backend.main:app"
CONFIG_ERRORS = (RuntimeError, FileNotFoundError, ValueError)


def validate_project_root() -> Path:
    """Exit unless .project_root sits next to this script."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


def _fail(logger, message: str, **extra) -> None:
    logger.error(message, extra=extra)
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


def _server_settings(logger, host: str | None, port: int | None) -> tuple[str, int]:
    """Resolve host and port from options, falling back to application.yaml."""
    from note_service.backend.core.config import get_app_config

    try:
        server = get_app_config().application.server
    except CONFIG_ERRORS as e:
        _fail(logger, "Could not load config/settings/application.yaml", error=str(e))
    return host or server.host, port or server.port


def _pids_on_port(port: int) -> list[int]:
    result = subprocess.run(["lsof", "-ti", f":{port}"], capture_output=True, text=True)
    return [int(pid) for pid in result.stdout.split() if pid.strip()]


# =============================================================================
# Server
# =============================================================================


def server_start(logger, host: str, port: int, reload: bool) -> None:
    """Run uvicorn on the application until interrupted."""
    cmd = [sys.executable, "-m", "uvicorn", APP_IMPORT_PATH, "--host", host, "--port", str(port)]
    if reload:
        cmd.append("--reload")

    from note_service.backend.core.config import get_app_config

    application = get_app_config().application
    logger.info("Starting server", extra={"host": host, "port": port, "reload": reload})
    click.echo(f"HTTP API: http://{host}:{port}{application.api_prefix}/notes")
    click.echo(f"RPC:      http://{host}:{port}{application.rpc_prefix}/{RPC_SERVICE}/<Method>")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server exited with error", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def server_stop(logger, port: int) -> None:
    """Send SIGINT to whatever listens on the server port."""
    pids = _pids_on_port(port)
    if not pids:
        click.echo(f"No server running on port {port}.")
        return

    for pid in pids:
        os.kill(pid, signal.SIGINT)
        logger.info("Sent SIGINT", extra={"pid": pid, "port": port})
    click.echo(f"Server on port {port} stopped (PID: {', '.join(map(str, pids))}).")


def server_status(port: int) -> None:
    pids = _pids_on_port(port)
    if pids:
        click.echo(f"Server is running on port {port} (PID: {', '.join(map(str, pids))}).")
    else:
        click.echo(f"Server is not running on port {port}.")


def run_server(logger, action: str, host: str | None, port: int | None, reload: bool) -> None:
    server_host, server_port = _server_settings(logger, host, port)

    if action == "status":
        server_status(server_port)
    elif action == "stop":
        server_stop(logger, server_port)
    else:
        if action == "restart":
            server_stop(logger, server_port)
            time.sleep(2)
        server_start(logger, server_host, server_port, reload)


# =============================================================================
# Health
# =============================================================================


async def _smoke_test() -> list[tuple[str, bool, str | None]]:
    """
    Drive a fresh in-process application through both transports.

    Creates, reads, patches and deletes one note over HTTP and one over
    RPC. Nothing leaves the process.
    """
    from note_service.backend.core.config import get_app_config
    from note_service.backend.main import create_app

    application = get_app_config().application
    notes = application.api_prefix.rstrip("/") + "/notes"
    rpc = f"{application.rpc_prefix.rstrip('/')}/{RPC_SERVICE}"

    app = create_app()
    results = []
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://health-check",
    ) as client:
        info = {"title": "health", "context": "", "author": "cli", "is_public": False}

        created = await client.post(notes, json=info)
        note_id = created.json()["data"]["id"] if created.status_code == 201 else None
        results.append(("HTTP create", created.status_code == 201, f"id={note_id}"))

        if note_id is not None:
            patched = await client.patch(f"{notes}/{note_id}", json={"is_public": True})
            ok = patched.status_code == 200 and patched.json()["data"]["info"]["is_public"]
            results.append(("HTTP patch", bool(ok), None))
            deleted = await client.delete(f"{notes}/{note_id}")
            results.append(("HTTP delete", deleted.status_code == 204, None))

        created = await client.post(f"{rpc}/Create", json={"info": info})
        rpc_id = created.json().get("id") if created.status_code == 200 else None
        results.append(("RPC Create", rpc_id is not None, f"id={rpc_id}"))

        if rpc_id is not None:
            await client.post(f"{rpc}/Update", json={"id": rpc_id, "info": {"title": {"value": ""}}})
            fetched = await client.post(f"{rpc}/Get", json={"id": rpc_id})
            ok = fetched.status_code == 200 and fetched.json()["note"]["info"]["title"] == ""
            results.append(("RPC Update/Get", ok, None))
            deleted = await client.post(f"{rpc}/Delete", json={"id": rpc_id})
            results.append(("RPC Delete", deleted.status_code == 200, None))

    return results


def check_health(logger) -> None:
    """Validate configuration and run an in-process smoke test."""
    click.echo("Checking application health...\n")

    from note_service.backend.core.config import get_app_config

    checks: list[tuple[str, bool, str | None]] = []
    try:
        app_config = get_app_config()
        checks.append(("YAML configuration", True, app_config.application.name))
    except CONFIG_ERRORS as e:
        checks.append(("YAML configuration", False, str(e)))
        logger.error("Configuration failed", extra={"error": str(e)})
    else:
        checks.extend(asyncio.run(_smoke_test()))

    click.echo("-" * 50)
    for name, passed, detail in checks:
        status = click.style("PASS", fg="green") if passed else click.style("FAIL", fg="red")
        click.echo(f"  {status}  {name}" + (f" ({detail})" if detail else ""))
    click.echo("-" * 50)

    failed = [name for name, passed, _ in checks if not passed]
    logger.info("Health check finished", extra={"failed": failed})
    if failed:
        click.echo(click.style(f"\n{len(failed)} check(s) failed.", fg="yellow"))
        sys.exit(1)
    click.echo(click.style("\nAll checks passed!", fg="green"))


# =============================================================================
# Config, tests, info
# =============================================================================


def _echo_tree(values: dict, indent: int = 2) -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_tree(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def show_config(logger) -> None:
    """Print every validated settings file."""
    from note_service.backend.core.config import get_app_config

    try:
        app_config = get_app_config()
    except CONFIG_ERRORS as e:
        _fail(logger, f"Could not load configuration: {e}")

    sections = {
        "application.yaml": app_config.application,
        "store.yaml": app_config.store,
        "concurrency.yaml": app_config.concurrency,
        "logging.yaml": app_config.logging,
    }
    for filename, schema in sections.items():
        click.echo(f"\n{filename}")
        click.echo("-" * 40)
        _echo_tree(schema.model_dump())


def run_tests(logger, test_type: str) -> None:
    target = {"unit": "tests/unit", "integration": "tests/integration"}.get(test_type, "tests/")
    cmd = [sys.executable, "-m", "pytest", target, "-v"]

    logger.info("Running tests", extra={"type": test_type})
    click.echo(f"Running: {' '.join(cmd)}\n")
    sys.exit(subprocess.run(cmd).returncode)


def show_info() -> None:
    click.echo("Note Service\n")
    click.echo("Services:")
    click.echo("  server   HTTP API and note_v1 RPC under uvicorn (--action start|stop|restart|status)")
    click.echo("  health   Validate configuration and smoke-test both transports in-process")
    click.echo("  config   Print the loaded configuration")
    click.echo("  test     Run the test suite (--test-type all|unit|integration)")
    click.echo("  info     Show this message")
    click.echo("\nClient for a running server:")
    click.echo("  note-client --help")


@click.command()
@click.option(
    "--service", "-s",
    type=click.Choice(["server", "health", "config", "test", "info"]),
    default="info",
    help="Service or command to run.",
)
@click.option(
    "--action", "-a",
    type=click.Choice(["start", "stop", "restart", "status"]),
    default="start",
    help="Server lifecycle action.",
)
@click.option("--verbose", "-v", is_flag=True, help="INFO level logging.")
@click.option("--debug", "-d", is_flag=True, help="DEBUG level logging.")
@click.option("--host", default=None, help="Server host (default from application.yaml).")
@click.option("--port", default=None, type=int, help="Server port (default from application.yaml).")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes (server only).")
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test selection for --service test.",
)
def main(
    service: str,
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    test_type: str,
) -> None:
    """
    Note Service CLI.

    \b
    Examples:
        python cli.py --service server --reload --verbose
        python cli.py --service server --action restart --port 8099
        python cli.py --service health --debug
        python cli.py --service config
        python cli.py --service test --test-type unit
    """
    validate_project_root()

    log_level = "DEBUG" if debug else "INFO" if verbose else "WARNING"
    setup_logging(level=log_level, format_type="console", enable_file_logging=False)
    structlog.contextvars.bind_contextvars(source="cli")
    logger = get_logger(__name__)
    logger.debug("CLI invoked", extra={"service": service, "action": action})

    if service == "server":
        run_server(logger, action, host, port, reload)
    elif service == "health":
        check_health(logger)
    elif service == "config":
        show_config(logger)
    elif service == "test":
        run_tests(logger, test_type)
    else:
        show_info()


if __name__ == "__main__":
    main()
