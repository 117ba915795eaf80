"""Search domain models.

This module defines the data structures produced by a traversal:
matched entries with their derived display fields, and the progress
events streamed to the caller while a search runs.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any

from findctl.core.sizes import DIR_SIZE_LABEL

FOLDER_FILE_TYPE = "Folder"
NO_EXTENSION_FILE_TYPE = "No Extension"


class EntryStatus(str, Enum):
    """Existence status of a result entry.

    Attributes:
        AVAILABLE: The entry exists on disk.
        MISSING: The entry no longer exists (or could not be checked).
    """

    AVAILABLE = "Available"
    MISSING = "Missing"


@dataclass(slots=True)
class ResultEntry:
    """A file or directory matched by a search.

    Everything except ``status`` is fixed at discovery time. ``status``
    is refreshed by revalidation when a saved session is loaded.

    Attributes:
        name: Bare file or directory name.
        full_path: Absolute path; identifies the entry within one result set.
        is_directory: True for directories.
        parent_path: Absolute path of the containing directory.
        size_label: Human-readable size, "<DIR>" for directories.
        last_modified: Local modification time, "yyyy-MM-dd HH:mm:ss".
        status: Existence status.
    """

    name: str
    full_path: str
    is_directory: bool
    parent_path: str
    size_label: str = DIR_SIZE_LABEL
    last_modified: str = ""
    status: EntryStatus = EntryStatus.AVAILABLE

    @property
    def file_type(self) -> str:
        """Display type: "Folder", the lowercase extension, or "No Extension".

        The extension runs from the last dot of the name, so dotfiles
        such as ".gitignore" are their own extension. A trailing dot
        counts as no extension.
        """
        if self.is_directory:
            return FOLDER_FILE_TYPE
        name = PurePath(self.full_path).name
        dot = name.rfind(".")
        if dot == -1 or dot == len(name) - 1:
            return NO_EXTENSION_FILE_TYPE
        return name[dot:].lower()

    @property
    def is_missing(self) -> bool:
        """Check if the entry was found missing by the last revalidation."""
        return self.status == EntryStatus.MISSING

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "name": self.name,
            "fullPath": self.full_path,
            "isDirectory": self.is_directory,
            "parentPath": self.parent_path,
            "sizeLabel": self.size_label,
            "lastModified": self.last_modified,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultEntry":
        """Deserialize from dictionary.

        A stored status is accepted but not trusted; callers revalidate
        after loading.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If a field has the wrong type or status is invalid.
        """
        is_directory = data["isDirectory"]
        if not isinstance(is_directory, bool):
            msg = f"isDirectory must be a boolean, got {type(is_directory).__name__}"
            raise ValueError(msg)
        full_path = data["fullPath"]
        if not isinstance(full_path, str) or not full_path:
            msg = "fullPath must be a non-empty string"
            raise ValueError(msg)
        return cls(
            name=str(data["name"]),
            full_path=full_path,
            is_directory=is_directory,
            parent_path=str(data.get("parentPath", "")),
            size_label=str(data.get("sizeLabel", "")),
            last_modified=str(data.get("lastModified", "")),
            status=EntryStatus(data.get("status", EntryStatus.AVAILABLE.value)),
        )


@dataclass(frozen=True, slots=True)
class SearchProgress:
    """Progress notification emitted during a traversal.

    Progress is advisory: there is no delivery guarantee.

    Attributes:
        status: Human-readable status line.
        current_path: Path being processed when the event was emitted.
        items_found: Running count of the match kind being reported.
        is_error: True for the outer-boundary failure report.
    """

    status: str
    current_path: str = ""
    items_found: int = 0
    is_error: bool = False


ProgressCallback = Callable[[SearchProgress], None]
