"""
Note Service.

- backend/: Note store, services, HTTP and RPC APIs, configuration
- cli/: Note client CLI (Typer + Rich)
"""
