"""Shared helpers for the per-entitlement rules."""

from __future__ import annotations

from typing import Any


def empty_tally() -> dict[str, Any]:
    """Zeroed ``totalCount``/``passCount``/``failCount``/``failures`` details."""
    return {"totalCount": 0, "passCount": 0, "failCount": 0, "failures": []}


def failure_message(details: dict[str, Any], noun: str, summaries: list[str]) -> str:
    """``"<fail> of <total> <noun> failed: a; b"``."""
    return (
        f"{details['failCount']} of {details['totalCount']} {noun} failed: "
        f"{'; '.join(summaries)}"
    )
