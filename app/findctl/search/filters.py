"""Post-traversal filtering of result entries by file type.

Type filtering runs on a finished result list and is independent of
the wildcard pattern applied during traversal.
"""

from collections.abc import Iterable

from findctl.search.models import FOLDER_FILE_TYPE, NO_EXTENSION_FILE_TYPE, ResultEntry


def normalize_file_type(file_type: str) -> str:
    """Normalize a user-supplied file type for comparison.

    Extensions are lowercased and given a leading dot ("TXT" -> ".txt").
    "Folder" and "No Extension" are recognised case-insensitively.
    """
    value = file_type.strip()
    lowered = value.lower()
    if lowered == FOLDER_FILE_TYPE.lower():
        return FOLDER_FILE_TYPE
    if lowered == NO_EXTENSION_FILE_TYPE.lower():
        return NO_EXTENSION_FILE_TYPE
    return lowered if lowered.startswith(".") else f".{lowered}"


def filter_by_file_types(
    entries: Iterable[ResultEntry],
    file_types: Iterable[str],
) -> list[ResultEntry]:
    """Keep entries whose file type is in file_types.

    An empty selection keeps every entry. Order is preserved.
    """
    wanted = {normalize_file_type(t) for t in file_types if t.strip()}
    if not wanted:
        return list(entries)
    return [entry for entry in entries if entry.file_type in wanted]


def available_file_types(entries: Iterable[ResultEntry]) -> list[str]:
    """List the distinct file types present in entries, sorted."""
    return sorted({entry.file_type for entry in entries})
