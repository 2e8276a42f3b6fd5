"""
CLI Commands.

Organized by domain/feature area.
"""

from note_service.cli.commands.health import app as health_app
from note_service.cli.commands.notes import app as notes_app
from note_service.cli.commands.rpc import app as rpc_app

__all__ = [
    "health_app",
    "notes_app",
    "rpc_app",
]
