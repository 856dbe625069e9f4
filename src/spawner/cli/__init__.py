"""Spawner command-line interface."""

from spawner.cli.main import cli, main

__all__ = ["cli", "main"]
