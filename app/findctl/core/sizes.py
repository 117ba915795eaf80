"""Human-readable size and timestamp formatting.

Sizes use base-1024 scaling with up to two fractional digits
(e.g. "1.5 KB"). parse_file_size is the inverse of format_file_size
and is used to recover byte totals from stored size labels.
"""

from datetime import datetime

SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")

# Size label used for directories
DIR_SIZE_LABEL = "<DIR>"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_file_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable label.

    Scaling stops once the value drops below 1024 or the unit list
    is exhausted.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Label such as "10 B", "2 KB" or "1.46 MB".
    """
    value = float(size_bytes)
    order = 0
    while value >= 1024 and order < len(SIZE_UNITS) - 1:
        order += 1
        value /= 1024
    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[order]}"


def parse_file_size(label: str | None) -> int:
    """Parse a size label produced by format_file_size back into bytes.

    Never raises: directory labels, empty strings and anything
    unparsable yield 0.

    Args:
        label: Size label (e.g. "2 KB").

    Returns:
        Size in bytes, truncated to an integer.
    """
    if not label or label == DIR_SIZE_LABEL:
        return 0

    parts = label.split(" ")
    if len(parts) != 2:
        return 0

    unit = parts[1].upper()
    if unit not in SIZE_UNITS:
        return 0

    try:
        return int(float(parts[0]) * 1024 ** SIZE_UNITS.index(unit))
    except (ValueError, OverflowError):
        # "nan" and "inf" parse as floats but have no integer value
        return 0


def format_timestamp(epoch_seconds: float) -> str:
    """Format a POSIX timestamp as local "yyyy-MM-dd HH:mm:ss"."""
    return datetime.fromtimestamp(epoch_seconds).strftime(TIMESTAMP_FORMAT)
