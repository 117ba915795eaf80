"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from findctl.core.theme import get_theme

if TYPE_CHECKING:
    from findctl.search.models import ResultEntry


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_results_table(title: str = "Search Results", show_status: bool = False) -> Table:
    """Create a pre-configured table for displaying result entries.

    Args:
        title: Table title.
        show_status: Add a Status column (used for loaded sessions).

    Returns:
        Rich Table configured for result display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Name", no_wrap=True)
    table.add_column("Type", style="muted")
    table.add_column("Size", style="info", justify="right")
    table.add_column("Modified", style="muted")
    table.add_column("Folder", style="text", overflow="ellipsis")
    if show_status:
        table.add_column("Status", justify="center")
    return table


def format_entry_row(entry: ResultEntry, show_status: bool = False) -> tuple[str, ...]:
    """Format a result entry as a table row with Rich markup.

    Directories are highlighted and missing entries are struck through.

    Args:
        entry: The entry to format.
        show_status: Include the Status cell.

    Returns:
        Tuple of cells matching create_results_table().
    """
    if entry.is_missing:
        name_style = "entry.missing"
    elif entry.is_directory:
        name_style = "entry.directory"
    else:
        name_style = "entry.file"

    row: tuple[str, ...] = (
        f"[{name_style}]{escape(entry.name)}[/]",
        escape(entry.file_type),
        escape(entry.size_label),
        entry.last_modified,
        escape(entry.parent_path),
    )
    if show_status:
        status_style = "entry.missing" if entry.is_missing else "entry.available"
        row = (*row, f"[{status_style}]{entry.status.value}[/]")
    return row


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
