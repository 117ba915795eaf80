"""Saved search session model.

A SearchSession is a snapshot of one completed search. Aggregate
metadata (counts, total size, description) is computed once when the
snapshot is built and stored with it; loading a session never
recomputes it, so a session keeps describing the search as it was
even after the files on disk change.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from findctl.core.sizes import format_file_size, parse_file_size
from findctl.search.models import ResultEntry


@dataclass(frozen=True, slots=True)
class SearchSession:
    """Snapshot of a completed search with frozen aggregate metadata.

    Only the per-entry ``status`` of ``results`` changes after
    construction (see findctl.sessions.revalidation).

    Attributes:
        search_term: Text the user searched for.
        search_path: Folder the search ran in; may be empty.
        saved_at: Local time the snapshot was taken, second precision.
        results: Entries in discovery order.
        total_results: Number of entries.
        file_count: Number of file entries.
        directory_count: Number of directory entries.
        total_file_size_bytes: Sum of file sizes parsed from size labels.
        duration_seconds: How long the search took.
        description: Human-readable summary.
    """

    search_term: str
    search_path: str
    saved_at: datetime
    results: tuple[ResultEntry, ...]
    total_results: int
    file_count: int
    directory_count: int
    total_file_size_bytes: int
    duration_seconds: float
    description: str

    @classmethod
    def build(
        cls,
        search_term: str,
        search_path: str,
        results: Iterable[ResultEntry],
        duration_seconds: float = 0.0,
    ) -> "SearchSession":
        """Create a snapshot and compute its aggregate metadata.

        Args:
            search_term: Text the user searched for.
            search_path: Folder the search ran in (may be empty).
            results: Matched entries in discovery order.
            duration_seconds: How long the search took.

        Returns:
            New SearchSession stamped with the current local time.
        """
        entries = tuple(results)
        file_count = sum(1 for e in entries if not e.is_directory)
        directory_count = len(entries) - file_count
        total_size = sum(parse_file_size(e.size_label) for e in entries if not e.is_directory)

        return cls(
            search_term=search_term,
            search_path=search_path or "",
            saved_at=datetime.now().replace(microsecond=0),
            results=entries,
            total_results=len(entries),
            file_count=file_count,
            directory_count=directory_count,
            total_file_size_bytes=total_size,
            duration_seconds=duration_seconds,
            description=describe(file_count, directory_count, total_size, duration_seconds),
        )

    @property
    def formatted_total_size(self) -> str:
        """Total file size as a human-readable label."""
        return format_total_size(self.total_file_size_bytes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "searchTerm": self.search_term,
            "searchPath": self.search_path,
            "savedAt": self.saved_at.isoformat(timespec="seconds"),
            "results": [entry.to_dict() for entry in self.results],
            "totalResults": self.total_results,
            "fileCount": self.file_count,
            "directoryCount": self.directory_count,
            "totalFileSizeBytes": self.total_file_size_bytes,
            "durationSeconds": self.duration_seconds,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchSession":
        """Deserialize from dictionary.

        Stored aggregates are taken as-is, never recomputed.

        Raises:
            KeyError: If required fields are missing.
            TypeError: If a field has the wrong shape.
            ValueError: If a field value is invalid.
        """
        raw_results = data["results"]
        if not isinstance(raw_results, list):
            msg = "results must be a list"
            raise TypeError(msg)

        return cls(
            search_term=str(data["searchTerm"]),
            search_path=str(data.get("searchPath") or ""),
            saved_at=datetime.fromisoformat(data["savedAt"]),
            results=tuple(ResultEntry.from_dict(item) for item in raw_results),
            total_results=int(data["totalResults"]),
            file_count=int(data["fileCount"]),
            directory_count=int(data["directoryCount"]),
            total_file_size_bytes=int(data["totalFileSizeBytes"]),
            duration_seconds=float(data["durationSeconds"]),
            description=str(data["description"]),
        )

    def to_json(self) -> str:
        """Serialize to indented JSON."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "SearchSession":
        """Deserialize from JSON text.

        Raises:
            json.JSONDecodeError: If text is not valid JSON.
            KeyError, TypeError, ValueError: If the record is malformed.
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            msg = "Session record must be a JSON object"
            raise TypeError(msg)
        return cls.from_dict(data)


def format_total_size(total_bytes: int) -> str:
    """Format a byte total, "0 B" when empty."""
    if total_bytes == 0:
        return "0 B"
    return format_file_size(total_bytes)


def describe(
    file_count: int,
    directory_count: int,
    total_size_bytes: int,
    duration_seconds: float,
) -> str:
    """Summarise a result set, e.g. "3 files and 1 folder (1.5 MB) in 0.42s"."""
    if file_count + directory_count == 0:
        return "No items found"

    parts: list[str] = []
    if file_count > 0:
        parts.append(f"{file_count} file{'s' if file_count != 1 else ''}")
    if directory_count > 0:
        parts.append(f"{directory_count} folder{'s' if directory_count != 1 else ''}")

    description = " and ".join(parts)
    if total_size_bytes > 0:
        description += f" ({format_total_size(total_size_bytes)})"
    if duration_seconds > 0:
        description += f" in {duration_seconds:.2f}s"
    return description
