"""Shell-style wildcard matching for file and directory names.

Supports ``*`` (zero or more characters) and ``?`` (exactly one
character). Matching is case-insensitive and anchored to the whole
name, so substring search is spelled ``*text*``.
"""

import re
from functools import lru_cache

MATCH_ALL = "*"


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard pattern into a case-insensitive regex.

    Every regex metacharacter is escaped first, then the escaped
    wildcards are turned back into their regex equivalents.

    Args:
        pattern: Wildcard pattern such as "*.txt" or "a?c.txt".

    Returns:
        Compiled regular expression.
    """
    escaped = re.escape(pattern).replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(escaped, re.IGNORECASE | re.DOTALL)


def matches(name: str, pattern: str | None) -> bool:
    """Check whether a bare name matches a wildcard pattern.

    An empty pattern or a lone ``*`` matches everything.

    Args:
        name: File or directory name (not a path).
        pattern: Wildcard pattern.

    Returns:
        True if the name matches.
    """
    if not pattern or pattern == MATCH_ALL:
        return True
    return compile_pattern(pattern).fullmatch(name) is not None


def substring_pattern(text: str | None) -> str:
    """Build the pattern used for "name contains" searches.

    Empty or whitespace-only text degrades to match-everything;
    anything else is wrapped as ``*text*``.
    """
    if not text or not text.strip():
        return MATCH_ALL
    return f"*{text}*"
