"""Resolution of user input into a traversal target.

The user types either a folder, a name fragment to look for inside a
previously selected folder, or a path whose last component is the
name fragment. resolve_search_target picks the first interpretation
that points at an existing directory.
"""

import os
from dataclasses import dataclass

from findctl.search.pattern import MATCH_ALL, substring_pattern


class SearchValidationError(Exception):
    """Base exception for unusable search input."""


class SearchPathRequiredError(SearchValidationError):
    """Raised when no search path or pattern was entered."""


class NoValidFolderError(SearchValidationError):
    """Raised when no existing folder can be derived from the input."""


@dataclass(frozen=True, slots=True)
class SearchTarget:
    """Directory to traverse and the name pattern to apply.

    Attributes:
        root: Existing directory to search.
        pattern: Wildcard name pattern.
    """

    root: str
    pattern: str


def resolve_search_target(
    search_text: str,
    selected_folder: str | None = None,
) -> SearchTarget:
    """Choose the directory and pattern for a search request.

    Resolution order:
    1. search_text is an existing directory: list everything in it.
    2. selected_folder exists: search it for names containing search_text.
    3. The directory part of search_text exists: search it for names
       containing the last path component.

    Args:
        search_text: User-entered path or pattern.
        selected_folder: Optional previously selected folder.

    Returns:
        SearchTarget to hand to the engine.

    Raises:
        SearchPathRequiredError: If search_text is empty.
        NoValidFolderError: If no existing directory can be derived.
    """
    if not search_text or not search_text.strip():
        msg = "Please enter a search path or pattern."
        raise SearchPathRequiredError(msg)

    if os.path.isdir(search_text):
        return SearchTarget(root=search_text, pattern=MATCH_ALL)

    if selected_folder and os.path.isdir(selected_folder):
        return SearchTarget(root=selected_folder, pattern=substring_pattern(search_text))

    directory, name = os.path.split(search_text)
    if directory and os.path.isdir(directory):
        return SearchTarget(root=directory, pattern=substring_pattern(name))

    msg = "Please select a valid folder first or enter a valid path."
    raise NoValidFolderError(msg)
