"""CLI package for findctl.

This package contains the Typer application and all subcommands.
"""

from findctl.cli.main import app

__all__ = ["app"]
