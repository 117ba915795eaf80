"""Utility modules for findctl.

This module exports commonly used utility functions.
"""

from findctl.utils.formatting import (
    console,
    create_results_table,
    err_console,
    format_entry_row,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_results_table",
    "err_console",
    "format_entry_row",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
