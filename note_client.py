#!/usr/bin/env python3
"""
Note Client entry point.

Usage:
    python note_client.py --help
    python note_client.py notes list
"""

from note_service.cli.main import app

if __name__ == "__main__":
    app()
