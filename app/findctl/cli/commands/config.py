"""Configuration commands.

Provides commands to inspect and change ~/.config/findctl/config.toml.
"""

from typing import Annotated

import typer

from findctl.core.config import (
    MAX_DEPTH,
    MIN_DEPTH,
    ConfigError,
    load_config,
    save_config,
)
from findctl.core.paths import get_config_path
from findctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and change findctl settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    console.print(f"[dim]Config file: {get_config_path()}[/dim]")
    console.print(f"[bold_header]default_depth:[/] {config.default_depth}")
    console.print(f"[bold_header]sessions_dir:[/] {config.effective_sessions_dir}")
    console.print(f"[bold_header]file_progress_interval:[/] {config.file_progress_interval}")
    console.print(
        f"[bold_header]directory_progress_interval:[/] {config.directory_progress_interval}"
    )


@app.command("set-depth")
def set_depth(
    depth: Annotated[
        int,
        typer.Argument(min=MIN_DEPTH, max=MAX_DEPTH, help="Default search depth (1-10)."),
    ],
) -> None:
    """Set the default search depth."""
    try:
        config = load_config()
        updated = config.model_copy(update={"default_depth": depth})
        path = save_config(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Default depth set to {depth} ({path})")
