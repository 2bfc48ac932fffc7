"""Human-readable rendering of sizes, ages and digests for command output."""

from __future__ import annotations

from datetime import datetime, timedelta

_UNIT = 1024
_UNITS = ("KB", "MB", "GB", "TB")
_DIGEST_DISPLAY_LENGTH = 19


def format_size(size: int) -> str:
    """Format a byte count with two decimals, e.g. ``1.50 KB``.

    The unit is picked by how many times the count divides by 1024 beyond
    the first, so counts below 1024 * 1024 are shown in plain bytes, and
    counts too large for the unit table fall back to bytes as well.
    """
    if size < _UNIT:
        return f"{size} B"
    divisor, exponent = _UNIT, 0
    remaining = size // _UNIT
    while remaining >= _UNIT:
        divisor *= _UNIT
        exponent += 1
        remaining //= _UNIT
    if 0 < exponent <= len(_UNITS):
        return f"{size / divisor:.2f} {_UNITS[exponent - 1]}"
    return f"{size} B"


def _plural(count: int, unit: str) -> str:
    if count == 1:
        return f"1 {unit} ago"
    return f"{count} {unit}s ago"


def format_time(moment: datetime, now: datetime | None = None) -> str:
    """Describe how long ago ``moment`` was; older than a week gives the date."""
    if now is None:
        now = datetime.now(moment.tzinfo) if moment.tzinfo else datetime.now()
    diff = now - moment
    if diff < timedelta(minutes=1):
        return "just now"
    if diff < timedelta(hours=1):
        return _plural(diff // timedelta(minutes=1), "minute")
    if diff < timedelta(days=1):
        return _plural(diff // timedelta(hours=1), "hour")
    if diff < timedelta(days=7):
        return _plural(diff // timedelta(days=1), "day")
    return moment.strftime("%Y-%m-%d")


def abbreviate_digest(digest: str) -> str:
    """Shorten a digest for display to its first 19 characters."""
    return digest[:_DIGEST_DISPLAY_LENGTH]