"""Persistence of search sessions.

Each saved session is one JSON file in the sessions directory, named
``<sanitized term>_<yyyyMMdd_HHmmss>.json``. The file name is the
session key: it is unique per save and can be decoded back into a
display label.

Storage location: ~/.local/state/findctl/saved-searches/
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile

from findctl.core.paths import ensure_dir, get_sessions_dir
from findctl.sessions.models import SearchSession
from findctl.sessions.revalidation import revalidate

logger = logging.getLogger(__name__)

SESSION_SUFFIX = ".json"
KEY_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
MAX_TERM_LENGTH = 50
FALLBACK_TERM = "search"

# Characters that are invalid in file names on common filesystems
_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class SessionStoreError(Exception):
    """Base exception for session storage errors."""


class SessionNotFoundError(SessionStoreError):
    """Raised when a session key does not resolve to a saved session."""


class SessionDecodeError(SessionStoreError):
    """Raised when a saved session file is not a valid session record."""


class SessionWriteError(SessionStoreError):
    """Raised when a session cannot be written or deleted."""


@dataclass(frozen=True, slots=True)
class LoadedSession:
    """A session read back from disk.

    Attributes:
        key: Key the session was loaded from.
        session: The stored snapshot, with entry statuses refreshed.
        missing_count: Entries that no longer exist on disk.
    """

    key: str
    session: SearchSession
    missing_count: int


def sanitize_term(search_term: str | None) -> str:
    """Turn a search term into a safe file name fragment.

    Invalid file name characters and spaces become underscores and the
    result is truncated to 50 characters. Empty or whitespace-only
    terms become "search".
    """
    if not search_term or not search_term.strip():
        return FALLBACK_TERM

    safe = _INVALID_FILENAME_CHARS.sub("_", search_term)
    safe = safe.strip().replace(" ", "_")[:MAX_TERM_LENGTH]
    return safe if safe.strip() else FALLBACK_TERM


def make_key(search_term: str | None, timestamp: datetime) -> str:
    """Build the session key for a term saved at timestamp."""
    return f"{sanitize_term(search_term)}_{timestamp.strftime(KEY_TIMESTAMP_FORMAT)}{SESSION_SUFFIX}"


def display_name(key: str) -> str:
    """Decode a session key into "term (yyyy-MM-dd HH:mm)".

    Never raises: a key that cannot be decoded is returned unchanged.
    """
    try:
        stem = key[: -len(SESSION_SUFFIX)] if key.endswith(SESSION_SUFFIX) else key
        term, date_part, time_part = stem.rsplit("_", 2)
        if not term:
            return key
        timestamp = datetime.strptime(f"{date_part}_{time_part}", KEY_TIMESTAMP_FORMAT)
    except (AttributeError, TypeError, ValueError):
        return key
    return f"{term} ({timestamp.strftime(DISPLAY_TIMESTAMP_FORMAT)})"


class SessionStore:
    """Keyed storage of SearchSession snapshots as JSON files.

    There is no locking: concurrent writes to the same key from several
    processes are not guarded and the last writer wins.

    Attributes:
        sessions_dir: Directory containing the session files.
    """

    def __init__(self, sessions_dir: Path | None = None) -> None:
        """Initialize SessionStore.

        Args:
            sessions_dir: Optional override for the sessions directory.
                Default: ~/.local/state/findctl/saved-searches
        """
        self._sessions_dir = sessions_dir if sessions_dir is not None else get_sessions_dir()

    @property
    def sessions_dir(self) -> Path:
        """Directory containing the session files."""
        return self._sessions_dir

    def save(self, session: SearchSession, now: datetime | None = None) -> str:
        """Write a session to disk under a newly generated key.

        If a session with the same term was already saved in the same
        second, the key timestamp is moved forward until it is free.

        Args:
            session: Snapshot to save.
            now: Timestamp for the key. Defaults to the current local time.

        Returns:
            The key of the saved session.

        Raises:
            SessionWriteError: If the directory or file cannot be written.
        """
        try:
            ensure_dir(self._sessions_dir, "sessions")
        except RuntimeError as e:
            raise SessionWriteError(str(e)) from e

        timestamp = (now or datetime.now()).replace(microsecond=0)
        key = make_key(session.search_term, timestamp)
        while (self._sessions_dir / key).exists():
            timestamp += timedelta(seconds=1)
            key = make_key(session.search_term, timestamp)

        target = self._sessions_dir / key
        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._sessions_dir,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(session.to_json())
            os.replace(str(tmp_path), str(target))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise SessionWriteError(f"Failed to save search session: {e}") from e

        logger.debug("Saved session %s (%d results)", key, session.total_results)
        return key

    def load(self, key: str) -> LoadedSession:
        """Read a session and refresh the status of every entry.

        Args:
            key: Session key as returned by save() or list_keys().

        Returns:
            LoadedSession with the snapshot and its missing-entry count.

        Raises:
            SessionNotFoundError: If no session exists under key.
            SessionDecodeError: If the stored record is invalid.
        """
        path = self._path_for(key)
        try:
            text = path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as e:
            raise SessionNotFoundError(f"Search session not found: {key}") from e
        except UnicodeDecodeError as e:
            raise SessionDecodeError(f"Search session {key} is not valid UTF-8") from e
        except OSError as e:
            raise SessionStoreError(f"Failed to read search session {key}: {e}") from e

        try:
            session = SearchSession.from_json(text)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise SessionDecodeError(f"Search session {key} is corrupt: {e}") from e

        missing = revalidate(session.results)
        if missing:
            logger.info("Session %s: %d of %d entries missing", key, missing, session.total_results)
        return LoadedSession(key=key, session=session, missing_count=missing)

    def list_keys(self) -> list[str]:
        """List saved session keys, newest first.

        Ordering uses file creation time, falling back to the
        timestamp encoded in the key for ties.

        Returns:
            Session keys. Empty if the directory does not exist.
        """
        if not self._sessions_dir.is_dir():
            return []

        ranked: list[tuple[float, str, str]] = []
        try:
            paths = list(self._sessions_dir.glob(f"*{SESSION_SUFFIX}"))
        except OSError as e:
            logger.warning("Cannot list sessions directory %s: %s", self._sessions_dir, e)
            return []

        for path in paths:
            if not path.is_file():
                continue
            try:
                created = _creation_time(path)
            except OSError:
                logger.warning("Cannot stat session file: %s", path)
                continue
            ranked.append((created, _key_sort_stamp(path.name), path.name))

        ranked.sort(reverse=True)
        return [name for _, _, name in ranked]

    def delete(self, key: str) -> None:
        """Delete a saved session.

        Raises:
            SessionNotFoundError: If no session exists under key.
            SessionWriteError: If the file cannot be removed.
        """
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise SessionNotFoundError(f"Search session not found: {key}") from e
        except OSError as e:
            raise SessionWriteError(f"Failed to delete search session: {e}") from e
        logger.debug("Deleted session %s", key)

    def exists(self, key: str) -> bool:
        """Check if a session exists under key."""
        try:
            return self._path_for(key).is_file()
        except SessionNotFoundError:
            return False

    @staticmethod
    def display_name(key: str) -> str:
        """Decode a session key into a display label. See display_name()."""
        return display_name(key)

    def _path_for(self, key: str) -> Path:
        """Map a key to its file, rejecting keys that leave the directory."""
        if not key or key in (".", "..") or "/" in key or "\\" in key or "\x00" in key:
            raise SessionNotFoundError(f"Search session not found: {key!r}")
        return self._sessions_dir / key


def _creation_time(path: Path) -> float:
    stat = path.stat()
    # st_birthtime is not available on every platform
    return getattr(stat, "st_birthtime", stat.st_ctime)


def _key_sort_stamp(key: str) -> str:
    stem = key[: -len(SESSION_SUFFIX)] if key.endswith(SESSION_SUFFIX) else key
    parts = stem.rsplit("_", 2)
    if len(parts) == 3:
        return f"{parts[1]}_{parts[2]}"
    return ""
