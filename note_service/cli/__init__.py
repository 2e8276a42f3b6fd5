"""
CLI Client Module.

Command-line note client built with Typer for talking to the
HTTP API of a running server.

Architecture:
- CLI is a thin presentation layer
- All note logic lives in the backend
- CLI calls backend via HTTP (httpx)
- Sends X-Frontend-ID: cli header for log routing

Usage:
    python note_client.py --help
    python note_client.py notes create --title "Groceries"
    python note_client.py notes get 42
"""
