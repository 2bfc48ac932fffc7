"""Lines of the boxed security summary shown before an MCP server starts."""

from __future__ import annotations

BOX_WIDTH = 50

COLOR_RESET = "\033[0m"
COLOR_BOLD = "\033[1m"
COLOR_RED = "\033[31m"
COLOR_GREEN = "\033[32m"
COLOR_YELLOW = "\033[33m"
COLOR_CYAN = "\033[36m"

MARK_AVAILABLE = "✓"
MARK_MISSING = "✗"

_CERT_LEVEL_NAMES = {
    0: "Integrity Verified",
    1: "Static Verified",
    2: "Security Certified",
    3: "Runtime Certified",
}

_LEFT_EDGE = f"{COLOR_CYAN}│{COLOR_RESET}"
_RIGHT_EDGE = f"{COLOR_CYAN}│{COLOR_RESET}"


def _width(text: str) -> int:
    """Width of ``text`` as counted for box layout: its UTF-8 length."""
    return len(text.encode("utf-8"))


def _truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` UTF-8 bytes without splitting a character."""
    return text.encode("utf-8")[: max(limit, 0)].decode("utf-8", errors="ignore")


def _padding(box_width: int, used: int) -> str:
    return " " * max(box_width - used, 0)


def cert_level_name(level: int) -> str:
    """Return the human-readable name of a certification level."""
    return _CERT_LEVEL_NAMES.get(level, "Unknown")


def render_field(label: str, value: str, box_width: int = BOX_WIDTH) -> str:
    """Render a ``label: value`` line inside the box, truncating long values."""
    content = f"  {label}: {value}"
    if _width(content) > box_width - 2:
        content = _truncate(content, box_width - 5) + "..."
    return f"{_LEFT_EDGE}{content}{_padding(box_width, _width(content))}{_RIGHT_EDGE}"


def render_capability(name: str, available: bool, box_width: int = BOX_WIDTH) -> str:
    """Render a sandbox capability line with a coloured check or cross mark."""
    if available:
        mark, color = MARK_AVAILABLE, COLOR_GREEN
    else:
        mark, color = MARK_MISSING, COLOR_RED
    used = 4 + 1 + _width(mark) + 2 + _width(name)
    return (
        f"{_LEFT_EDGE}    [{color}{mark}] {name}{COLOR_RESET}"
        f"{_padding(box_width, used)}{_RIGHT_EDGE}"
    )


def render_warning(text: str, box_width: int = BOX_WIDTH) -> str:
    """Render a ``[!]`` warning line inside the box, truncating long text."""
    if _width(text) > box_width - 10:
        text = _truncate(text, box_width - 13) + "..."
    used = 4 + 4 + _width(text)
    return (
        f"{_LEFT_EDGE}    {COLOR_YELLOW}[!] {text}{COLOR_RESET}"
        f"{_padding(box_width, used)}{_RIGHT_EDGE}"
    )