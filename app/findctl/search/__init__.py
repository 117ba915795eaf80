"""Filename search module.

This module provides wildcard name matching, the depth-bounded
breadth-first traversal engine, input resolution, result filtering,
and background execution of searches.
"""

from findctl.search.engine import (
    CancelToken,
    DirectoryLister,
    ScandirLister,
    SearchCancelledError,
    SearchEngine,
)
from findctl.search.filters import available_file_types, filter_by_file_types
from findctl.search.models import EntryStatus, ResultEntry, SearchProgress
from findctl.search.pattern import matches, substring_pattern
from findctl.search.resolver import (
    NoValidFolderError,
    SearchPathRequiredError,
    SearchTarget,
    SearchValidationError,
    resolve_search_target,
)
from findctl.search.runner import SearchHandle, SearchOutcome, SearchOutcomeKind, SearchRunner

__all__ = [
    "CancelToken",
    "DirectoryLister",
    "EntryStatus",
    "NoValidFolderError",
    "ResultEntry",
    "ScandirLister",
    "SearchCancelledError",
    "SearchEngine",
    "SearchHandle",
    "SearchOutcome",
    "SearchOutcomeKind",
    "SearchPathRequiredError",
    "SearchProgress",
    "SearchRunner",
    "SearchTarget",
    "SearchValidationError",
    "available_file_types",
    "filter_by_file_types",
    "matches",
    "resolve_search_target",
    "substring_pattern",
]
