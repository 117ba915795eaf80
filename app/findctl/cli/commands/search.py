"""Search command.

Runs a depth-bounded filename search in the background, shows live
progress, renders the results, and optionally saves them as a session.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.status import Status

from findctl.core.config import MAX_DEPTH, MIN_DEPTH, ConfigError, load_config
from findctl.search.engine import SearchEngine
from findctl.search.filters import filter_by_file_types
from findctl.search.models import ResultEntry, SearchProgress
from findctl.search.resolver import SearchValidationError
from findctl.search.runner import SearchHandle, SearchOutcome, SearchOutcomeKind, SearchRunner
from findctl.sessions.models import SearchSession, describe
from findctl.sessions.store import SessionStore, SessionStoreError
from findctl.utils.formatting import (
    console,
    create_results_table,
    format_entry_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

# Exit code conventionally used for an interrupted command
EXIT_CANCELLED = 130


class OutputFormat(str, Enum):
    """Output format options for search results."""

    TABLE = "table"
    JSON = "json"


def search(
    ctx: typer.Context,
    query: Annotated[
        str,
        typer.Argument(
            help="Folder to list, name fragment (with --folder), or folder/fragment path.",
        ),
    ],
    folder: Annotated[
        Path | None,
        typer.Option("--folder", "-F", help="Folder to search when QUERY is a name fragment."),
    ] = None,
    depth: Annotated[
        int | None,
        typer.Option(
            "--depth",
            "-d",
            min=MIN_DEPTH,
            max=MAX_DEPTH,
            clamp=True,
            help="Maximum depth to traverse (1-10). Default from config.",
        ),
    ] = None,
    file_types: Annotated[
        list[str] | None,
        typer.Option("--type", "-t", help="Only show these file types (e.g. .txt, Folder)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-l", help="Limit number of results shown."),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", "-s", help="Save the results as a session."),
    ] = False,
) -> None:
    """Search for files and folders by name.

    Examples:
        findctl search ~/Documents              # List everything, default depth
        findctl search report -F ~/Documents    # Names containing "report"
        findctl search ~/Documents/report -d 5  # Same, five levels deep
        findctl search ~/src -t .py --save      # Only .py files, save session
    """
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    try:
        config = load_config()
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    engine = SearchEngine(
        file_progress_interval=config.file_progress_interval,
        directory_progress_interval=config.directory_progress_interval,
    )
    runner = SearchRunner(engine)
    selected = str(folder) if folder is not None else None
    max_depth = depth if depth is not None else config.default_depth

    try:
        outcome = _run_search(runner, query, selected, max_depth, quiet)
    except SearchValidationError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e
    finally:
        runner.shutdown()

    if outcome.kind == SearchOutcomeKind.CANCELLED:
        print_warning(f"Search cancelled after {outcome.duration_seconds:.2f} seconds")
        raise typer.Exit(code=EXIT_CANCELLED)

    if outcome.kind == SearchOutcomeKind.ERROR:
        print_error(f"Search error: {escape(outcome.message or '')}")
        raise typer.Exit(code=1)

    results = filter_by_file_types(outcome.results, file_types or [])

    if not results:
        print_info("No items found.")
    elif output_format == OutputFormat.JSON:
        _print_json(results[:limit] if limit else results)
    else:
        display = results[:limit] if limit else results
        _print_table(display)
        file_count = sum(1 for r in results if not r.is_directory)
        summary = describe(file_count, len(results) - file_count, 0, outcome.duration_seconds)
        console.print(f"\n[dim]Found {summary}[/dim]")
        if limit and len(display) < len(results):
            console.print(
                f"[dim](showing {len(display)} of {len(results)}, limited to {limit})[/dim]"
            )

    if save:
        session = SearchSession.build(
            search_term=query,
            search_path=selected or outcome.target.root,
            results=results,
            duration_seconds=outcome.duration_seconds,
        )
        try:
            key = SessionStore(config.effective_sessions_dir).save(session)
        except SessionStoreError as e:
            print_error(escape(str(e)))
            raise typer.Exit(code=1) from e
        print_success(
            f"Search session saved as '{escape(key)}' "
            f"({session.file_count} files, {session.directory_count} folders)"
        )


def _run_search(
    runner: SearchRunner,
    query: str,
    selected: str | None,
    max_depth: int,
    quiet: bool,
) -> SearchOutcome:
    """Start a search and wait for it, cancelling on Ctrl+C."""
    if quiet:
        handle = runner.start(query, selected, max_depth)
        return _wait(handle)

    with console.status("Searching...") as status:

        def on_progress(event: SearchProgress) -> None:
            _show_progress(status, event)

        handle = runner.start(query, selected, max_depth, progress=on_progress)
        return _wait(handle)


def _wait(handle: SearchHandle) -> SearchOutcome:
    try:
        return handle.result()
    except KeyboardInterrupt:
        handle.cancel()
        return handle.result()


def _show_progress(status: Status, event: SearchProgress) -> None:
    """Mirror a progress event in the live status line."""
    if event.is_error:
        print_warning(escape(event.status))
        return
    status.update(escape(event.status))


def _print_table(results: list[ResultEntry]) -> None:
    """Display results as a Rich table."""
    table = create_results_table()
    for entry in results:
        table.add_row(*format_entry_row(entry))
    console.print(table)


def _print_json(results: list[ResultEntry]) -> None:
    """Display results as JSON."""
    data = [{**entry.to_dict(), "fileType": entry.file_type} for entry in results]
    console.print_json(json.dumps(data))
