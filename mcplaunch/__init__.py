"""Helpers for MCP server packages: references, audit logging and formatting."""

__version__ = "0.1.0"

__all__ = ["audit", "formatting", "refs", "summary", "units"]