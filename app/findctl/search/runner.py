"""Background execution of searches.

SearchRunner runs one traversal at a time on a dedicated worker
thread. Starting a new search cancels the in-flight one and waits
for it to finish first. Each request gets its own SearchHandle that
owns the cancellation token, so no cancellation state is shared
between requests.
"""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum

from findctl.core.config import MAX_DEPTH
from findctl.search.engine import CancelToken, SearchCancelledError, SearchEngine
from findctl.search.models import ProgressCallback, ResultEntry
from findctl.search.resolver import SearchTarget, resolve_search_target

logger = logging.getLogger(__name__)


class SearchOutcomeKind(str, Enum):
    """How a search run ended.

    Attributes:
        SUCCESS: The traversal completed (possibly after an internal
            error, in which case results are partial).
        CANCELLED: Cancellation was observed; no results are delivered.
        ERROR: The run failed before producing results.
    """

    SUCCESS = "success"
    CANCELLED = "cancelled"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Final outcome of one search request.

    Attributes:
        kind: How the run ended.
        target: Directory and pattern that were searched.
        results: Matched entries (always empty unless kind is SUCCESS).
        duration_seconds: Wall time from submission to completion.
        message: Error detail for ERROR outcomes.
    """

    kind: SearchOutcomeKind
    target: SearchTarget
    results: list[ResultEntry] = field(default_factory=lambda: [])
    duration_seconds: float = 0.0
    message: str | None = None


class SearchHandle:
    """Caller-side handle for one submitted search."""

    def __init__(self, target: SearchTarget, token: CancelToken, future: Future[SearchOutcome]):
        self.target = target
        self._token = token
        self._future = future
        self._started = time.perf_counter()

    @property
    def token(self) -> CancelToken:
        """Cancellation token owned by this request."""
        return self._token

    @property
    def done(self) -> bool:
        """Check if the search has finished."""
        return self._future.done()

    @property
    def elapsed_seconds(self) -> float:
        """Seconds since submission, or the final duration once finished."""
        if self._future.done():
            return self._future.result().duration_seconds
        return time.perf_counter() - self._started

    def cancel(self) -> None:
        """Request cancellation of this search."""
        self._token.cancel()

    def result(self, timeout: float | None = None) -> SearchOutcome:
        """Block until the search finishes and return its outcome.

        Raises:
            TimeoutError: If timeout elapses first.
        """
        return self._future.result(timeout=timeout)


class SearchRunner:
    """Runs searches on a single background worker.

    Args:
        engine: Engine used for traversals. Defaults to SearchEngine().
    """

    def __init__(self, engine: SearchEngine | None = None) -> None:
        self._engine = engine if engine is not None else SearchEngine()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="findctl-search")
        self._lock = threading.Lock()
        self._current: SearchHandle | None = None

    @property
    def current(self) -> SearchHandle | None:
        """Most recently started search, if any."""
        return self._current

    def start(
        self,
        search_text: str,
        selected_folder: str | None = None,
        max_depth: int = MAX_DEPTH,
        progress: ProgressCallback | None = None,
    ) -> SearchHandle:
        """Resolve the input and start a search in the background.

        Any search still running is cancelled and awaited first, so at
        most one traversal is active at a time.

        Args:
            search_text: User-entered path or pattern.
            selected_folder: Optional previously selected folder.
            max_depth: Maximum traversal depth (clamped to 1-10).
            progress: Callback receiving progress events on the worker thread.

        Returns:
            Handle for the new search.

        Raises:
            SearchValidationError: If the input cannot be resolved to a folder.
        """
        target = resolve_search_target(search_text, selected_folder)

        with self._lock:
            previous = self._current
            if previous is not None and not previous.done:
                logger.debug("Cancelling in-flight search of %s", previous.target.root)
                previous.cancel()
                previous.result()

            token = CancelToken()
            future = self._executor.submit(self._run, target, max_depth, token, progress)
            handle = SearchHandle(target, token, future)
            self._current = handle

        return handle

    def cancel(self) -> None:
        """Cancel the current search, if one is running."""
        with self._lock:
            if self._current is not None and not self._current.done:
                self._current.cancel()

    def shutdown(self) -> None:
        """Cancel any running search and stop the worker thread."""
        self.cancel()
        self._executor.shutdown(wait=True)

    def _run(
        self,
        target: SearchTarget,
        max_depth: int,
        token: CancelToken,
        progress: ProgressCallback | None,
    ) -> SearchOutcome:
        started = time.perf_counter()
        try:
            results = self._engine.traverse(
                target.root,
                target.pattern,
                max_depth=max_depth,
                cancel_token=token,
                progress=progress,
            )
        except SearchCancelledError:
            return SearchOutcome(
                kind=SearchOutcomeKind.CANCELLED,
                target=target,
                duration_seconds=time.perf_counter() - started,
            )
        except Exception as e:
            logger.exception("Search of %s failed", target.root)
            return SearchOutcome(
                kind=SearchOutcomeKind.ERROR,
                target=target,
                duration_seconds=time.perf_counter() - started,
                message=str(e),
            )

        return SearchOutcome(
            kind=SearchOutcomeKind.SUCCESS,
            target=target,
            results=results,
            duration_seconds=time.perf_counter() - started,
        )
