"""Existence re-validation of saved result entries."""

import logging
import os
from collections.abc import Iterable

from findctl.search.models import EntryStatus, ResultEntry

logger = logging.getLogger(__name__)


def entry_exists(entry: ResultEntry) -> bool:
    """Check if an entry still exists as the kind it was recorded as.

    A recorded directory that is now a file (or vice versa) counts as
    missing. Errors from the check itself also count as missing.
    """
    try:
        if entry.is_directory:
            return os.path.isdir(entry.full_path)
        return os.path.isfile(entry.full_path)
    except (OSError, ValueError) as e:
        logger.debug("Existence check failed for %s: %s", entry.full_path, e)
        return False


def revalidate(entries: Iterable[ResultEntry]) -> int:
    """Refresh the status of each entry against the live filesystem.

    Entries are neither removed nor rewritten; only ``status`` changes.
    Running this twice on an unchanged filesystem gives the same result.

    Args:
        entries: Entries to check.

    Returns:
        Number of entries found missing.
    """
    missing = 0
    for entry in entries:
        if entry_exists(entry):
            entry.status = EntryStatus.AVAILABLE
        else:
            entry.status = EntryStatus.MISSING
            missing += 1
    return missing
