"""Saved search sessions.

This module provides the session snapshot model, JSON file storage
keyed by search term and timestamp, and existence re-validation of
stored entries.
"""

from findctl.sessions.models import SearchSession, describe, format_total_size
from findctl.sessions.revalidation import entry_exists, revalidate
from findctl.sessions.store import (
    LoadedSession,
    SessionDecodeError,
    SessionNotFoundError,
    SessionStore,
    SessionStoreError,
    SessionWriteError,
    display_name,
    make_key,
    sanitize_term,
)

__all__ = [
    "LoadedSession",
    "SearchSession",
    "SessionDecodeError",
    "SessionNotFoundError",
    "SessionStore",
    "SessionStoreError",
    "SessionWriteError",
    "describe",
    "display_name",
    "entry_exists",
    "format_total_size",
    "make_key",
    "revalidate",
    "sanitize_term",
]
