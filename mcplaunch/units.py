"""Byte-size formatting and file digests used when packaging."""

from __future__ import annotations

import hashlib
import os

_UNIT = 1024
_PREFIXES = "KMGTPE"
_CHUNK = 1024 * 1024


def format_bytes(size: int) -> str:
    """Format a byte count with one decimal and a binary prefix, e.g. ``1.5 KB``."""
    if size < _UNIT:
        return f"{size} B"
    divisor, exponent = _UNIT, 0
    remaining = size // _UNIT
    while remaining >= _UNIT:
        divisor *= _UNIT
        exponent += 1
        remaining //= _UNIT
    return f"{size / divisor:.1f} {_PREFIXES[exponent]}B"


def calculate_file_digest(path: str | os.PathLike[str]) -> str:
    """Return the SHA-256 digest of a file as ``sha256:<hex>``."""
    digest = hashlib.sha256()
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK), b""):
            digest.update(chunk)
    return f"sha256:{digest.hexdigest()}"