"""preconfab command-line interface module.

Components:
- main: Typer application with the generate and check commands
"""

from preconfab.cli.main import app, main

__all__ = ["app", "main"]
