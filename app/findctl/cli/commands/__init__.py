"""CLI commands for findctl.

This package contains all subcommand implementations.
"""

from findctl.cli.commands import config, search, sessions

__all__ = ["config", "search", "sessions"]
