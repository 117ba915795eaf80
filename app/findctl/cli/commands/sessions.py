"""Saved session commands.

Provides commands to list, show and delete saved search sessions.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from findctl.core.config import ConfigError, load_config
from findctl.sessions.models import SearchSession
from findctl.sessions.store import (
    SessionStore,
    SessionStoreError,
    display_name,
)
from findctl.utils.formatting import (
    console,
    create_results_table,
    format_entry_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="List, show and delete saved search sessions.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for session display."""

    TABLE = "table"
    JSON = "json"


def _get_store() -> SessionStore:
    """Build the session store from the user configuration."""
    try:
        config = load_config()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    return SessionStore(config.effective_sessions_dir)


@app.command("list")
def list_sessions(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """List saved sessions, newest first."""
    store = _get_store()
    keys = store.list_keys()

    if not keys:
        print_info("No saved sessions found.")
        return

    if json_output:
        data = [{"key": key, "name": display_name(key)} for key in keys]
        console.print_json(json.dumps(data))
        return

    table = Table(title="Saved Sessions", header_style="bold_header", border_style="border")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Session", style="bold")
    table.add_column("Key", style="muted")
    for index, key in enumerate(keys, start=1):
        table.add_row(str(index), escape(display_name(key)), escape(key))
    console.print(table)


@app.command()
def show(
    key: Annotated[str, typer.Argument(help="Session key (see 'findctl sessions list').")],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    missing_only: Annotated[
        bool,
        typer.Option("--missing", help="Only show entries that no longer exist."),
    ] = False,
) -> None:
    """Load a saved session and re-check its entries against the disk."""
    store = _get_store()
    try:
        loaded = store.load(key)
    except SessionStoreError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    session = loaded.session
    entries = list(session.results)
    if missing_only:
        entries = [entry for entry in entries if entry.is_missing]

    if output_format == OutputFormat.JSON:
        data = session.to_dict()
        data["results"] = [entry.to_dict() for entry in entries]
        data["missingCount"] = loaded.missing_count
        console.print_json(json.dumps(data))
        return

    _print_metadata(session)

    if entries:
        table = create_results_table(title=escape(display_name(key)), show_status=True)
        for entry in entries:
            table.add_row(*format_entry_row(entry, show_status=True))
        console.print(table)

    if loaded.missing_count:
        print_warning(f"{loaded.missing_count} item(s) no longer exist on disk")


@app.command()
def delete(
    key: Annotated[str, typer.Argument(help="Session key to delete.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete a saved session."""
    store = _get_store()
    if not store.exists(key):
        print_error(f"Search session not found: {escape(key)}")
        raise typer.Exit(code=1)

    if not yes:
        confirmed = typer.confirm(f"Delete saved session '{display_name(key)}'?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        store.delete(key)
    except SessionStoreError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Deleted session '{escape(display_name(key))}'.")


def _print_metadata(session: SearchSession) -> None:
    """Print the stored summary of a session."""
    console.print(f"[bold_header]Search term:[/] {escape(session.search_term)}")
    if session.search_path:
        console.print(f"[bold_header]Search path:[/] {escape(session.search_path)}")
    console.print(f"[bold_header]Saved at:[/] {session.saved_at:%Y-%m-%d %H:%M:%S}")
    console.print(
        f"[bold_header]Results:[/] {session.total_results} "
        f"({session.file_count} files, {session.directory_count} folders)"
    )
    console.print(f"[bold_header]Total size:[/] {session.formatted_total_size}")
    if session.duration_seconds > 0:
        console.print(f"[bold_header]Duration:[/] {session.duration_seconds:.2f} seconds")
    else:
        console.print("[bold_header]Duration:[/] Not recorded")
    console.print(f"[dim]{escape(session.description)}[/dim]")
    console.print()
