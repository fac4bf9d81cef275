"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601."""
    return datetime.now(UTC).isoformat()


def pluralize(count: int, noun: str) -> str:
    """``"1 record"`` / ``"3 records"``.

    Examples:
        >>> pluralize(1, "record")
        '1 record'
        >>> pluralize(0, "rule")
        '0 rules'
    """
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
