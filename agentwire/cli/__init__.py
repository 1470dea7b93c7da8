"""Command-line interface for agentwire."""

from agentwire.cli.app import app, main

__all__ = ["app", "main"]
