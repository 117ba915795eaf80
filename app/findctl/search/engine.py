"""Depth-bounded breadth-first filename search.

The engine walks a directory tree level by level using an explicit
work queue, matches every file and directory name against a wildcard
pattern, and streams throttled progress events to an injected callback.

Failure policy:
- A directory that cannot be listed is reported through progress and
  skipped; the walk continues with the rest of the queue.
- Cancellation raises SearchCancelledError and discards partial results.
- Any other unexpected exception is reported as an error progress event
  and the results gathered so far are returned.

The traversal is a plain blocking call. Run it on a worker thread
(see findctl.search.runner) to keep a foreground loop responsive.
"""

import errno
import logging
import os
import threading
from collections import deque
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from findctl.core.config import MAX_DEPTH, clamp_depth
from findctl.core.sizes import DIR_SIZE_LABEL, format_file_size, format_timestamp
from findctl.search.models import ProgressCallback, ResultEntry, SearchProgress
from findctl.search.pattern import MATCH_ALL, matches, substring_pattern

logger = logging.getLogger(__name__)

DEFAULT_FILE_PROGRESS_INTERVAL = 100
DEFAULT_DIRECTORY_PROGRESS_INTERVAL = 50


class SearchCancelledError(Exception):
    """Raised when a traversal observes a cancellation request."""


class CancelToken:
    """Cooperative cancellation signal shared between caller and worker."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call from any thread, more than once."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise SearchCancelledError if cancellation has been requested."""
        if self._event.is_set():
            raise SearchCancelledError("Search cancelled")


class DirectoryLister(Protocol):
    """Capability for listing the immediate children of a directory.

    Both methods return full paths and may raise PermissionError,
    an OSError with errno ENAMETOOLONG, or any other OSError.
    """

    def list_files(self, directory: str, pattern: str) -> list[str]: ...

    def list_directories(self, directory: str) -> list[str]: ...


class ScandirLister:
    """DirectoryLister backed by os.scandir.

    os.scandir has no native name filter, so list_files returns every
    file and the engine applies the pattern itself.
    """

    def list_files(self, directory: str, pattern: str) -> list[str]:
        _ = pattern
        with os.scandir(directory) as it:
            return sorted(entry.path for entry in it if _is_file(entry))

    def list_directories(self, directory: str) -> list[str]:
        with os.scandir(directory) as it:
            return sorted(entry.path for entry in it if _is_dir(entry))


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


class SearchEngine:
    """Breadth-first, depth-bounded filename search.

    Args:
        lister: Directory listing capability. Defaults to ScandirLister.
        file_progress_interval: Emit progress every N file matches.
        directory_progress_interval: Emit progress every N directory matches.
    """

    def __init__(
        self,
        lister: DirectoryLister | None = None,
        *,
        file_progress_interval: int = DEFAULT_FILE_PROGRESS_INTERVAL,
        directory_progress_interval: int = DEFAULT_DIRECTORY_PROGRESS_INTERVAL,
    ) -> None:
        self._lister = lister if lister is not None else ScandirLister()
        self._file_interval = file_progress_interval
        self._dir_interval = directory_progress_interval

    def traverse(
        self,
        root: str | Path,
        pattern: str = MATCH_ALL,
        max_depth: int = MAX_DEPTH,
        cancel_token: CancelToken | None = None,
        progress: ProgressCallback | None = None,
    ) -> list[ResultEntry]:
        """Search root for files and directories whose names match pattern.

        Depth 1 covers the contents of root only; depth d covers
        everything reachable through d-1 subdirectory hops. max_depth
        is clamped into [1, 10].

        Args:
            root: Directory to search. An empty or non-directory root
                returns an empty list.
            pattern: Wildcard name pattern.
            max_depth: Maximum depth to traverse.
            cancel_token: Cooperative cancellation signal.
            progress: Callback receiving SearchProgress events.

        Returns:
            Matched entries in breadth-first discovery order.

        Raises:
            SearchCancelledError: If cancellation was requested.
        """
        root_str = os.fspath(root)
        if not root_str.strip() or not os.path.isdir(root_str):
            logger.debug("Search root is not a directory: %r", root_str)
            return []

        depth_limit = clamp_depth(max_depth)
        token = cancel_token if cancel_token is not None else CancelToken()
        emit = progress if progress is not None else _discard_progress

        results: list[ResultEntry] = []
        logger.debug(
            "Searching %s for %r (max depth %d)", root_str, pattern, depth_limit
        )

        try:
            emit(SearchProgress(status="Searching...", current_path=root_str))
            self._walk(root_str, pattern, depth_limit, token, emit, results)
        except SearchCancelledError:
            logger.info("Search of %s cancelled", root_str)
            raise
        except Exception as e:
            logger.exception("Unexpected error while searching %s", root_str)
            emit(SearchProgress(status=f"Error during search: {e}", is_error=True))

        return results

    def search_by_name(
        self,
        root: str | Path,
        text: str,
        max_depth: int = MAX_DEPTH,
        cancel_token: CancelToken | None = None,
        progress: ProgressCallback | None = None,
    ) -> list[ResultEntry]:
        """Search for entries whose names contain text.

        Empty text matches everything; otherwise the pattern is ``*text*``.
        """
        return self.traverse(
            root,
            substring_pattern(text),
            max_depth=max_depth,
            cancel_token=cancel_token,
            progress=progress,
        )

    def _walk(
        self,
        root: str,
        pattern: str,
        max_depth: int,
        token: CancelToken,
        emit: ProgressCallback,
        results: list[ResultEntry],
    ) -> None:
        queue: deque[tuple[str, int]] = deque([(root, 1)])
        files_found = 0
        dirs_found = 0

        while queue:
            token.raise_if_cancelled()
            current, depth = queue.popleft()

            files = self._safe_list(self._lister.list_files, current, emit, pattern)
            for file_path in files:
                token.raise_if_cancelled()
                if not matches(os.path.basename(file_path), pattern):
                    continue
                entry = create_file_entry(file_path)
                if entry is None:
                    continue
                results.append(entry)
                files_found += 1
                if files_found % self._file_interval == 0:
                    emit(
                        SearchProgress(
                            status=f"Found {files_found} files...",
                            current_path=file_path,
                            items_found=files_found,
                        )
                    )

            subdirs = self._safe_list(self._lister.list_directories, current, emit)
            for dir_path in subdirs:
                token.raise_if_cancelled()
                if matches(os.path.basename(dir_path), pattern):
                    entry = create_directory_entry(dir_path)
                    if entry is not None:
                        results.append(entry)
                        dirs_found += 1
                        if dirs_found % self._dir_interval == 0:
                            emit(
                                SearchProgress(
                                    status=f"Found {dirs_found} directories...",
                                    current_path=dir_path,
                                    items_found=dirs_found,
                                )
                            )

                if depth < max_depth:
                    queue.append((dir_path, depth + 1))

    @staticmethod
    def _safe_list(
        list_fn: Callable[..., list[str]],
        directory: str,
        emit: ProgressCallback,
        *args: str,
    ) -> list[str]:
        """Run one listing call, turning per-directory failures into progress."""
        try:
            return list_fn(directory, *args)
        except PermissionError:
            status = f"Access denied to: {directory}"
        except OSError as e:
            if e.errno == errno.ENAMETOOLONG:
                status = f"Path too long: {directory}"
            else:
                status = f"I/O error in: {directory}"
        logger.warning("%s", status)
        emit(SearchProgress(status=status, current_path=directory))
        return []


def create_file_entry(file_path: str) -> ResultEntry | None:
    """Build a ResultEntry for a file, or None if it cannot be read."""
    try:
        full_path = os.path.abspath(file_path)
        stat = os.stat(full_path)
    except (OSError, ValueError):
        return None
    return ResultEntry(
        name=os.path.basename(full_path),
        full_path=full_path,
        is_directory=False,
        parent_path=os.path.dirname(full_path),
        size_label=format_file_size(stat.st_size),
        last_modified=format_timestamp(stat.st_mtime),
    )


def create_directory_entry(dir_path: str) -> ResultEntry | None:
    """Build a ResultEntry for a directory, or None if it cannot be read."""
    try:
        full_path = os.path.abspath(dir_path)
        stat = os.stat(full_path)
    except (OSError, ValueError):
        return None
    return ResultEntry(
        name=os.path.basename(full_path),
        full_path=full_path,
        is_directory=True,
        parent_path=os.path.dirname(full_path),
        size_label=DIR_SIZE_LABEL,
        last_modified=format_timestamp(stat.st_mtime),
    )


def _discard_progress(_event: SearchProgress) -> None:
    return None
