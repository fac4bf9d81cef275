"""Pluggy hook specifications for provcheck validation events.

Hooks fire synchronously after the engine has produced its verdict, so
plugins observe results but can never change them.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("provcheck")


class ProvcheckHookSpec:
    """Hook specifications for the provcheck plugin system."""

    @hookspec
    def post_validate(
        self,
        record_id: str,
        record_name: str,
        overall_status: str,
        failed_rules: list[str],
    ) -> None:
        """Called after a single record has been validated."""

    @hookspec
    def post_batch(
        self,
        total: int,
        passed: int,
        failed: int,
        skipped: int,
    ) -> None:
        """Called after a batch of records has been validated."""

    @hookspec
    def post_rule_toggle(self, rule_id: str, enabled: bool) -> None:
        """Called after a rule's enabled state has been persisted."""

    @hookspec
    def validation_summary(self, summary: dict[str, Any]) -> dict[str, Any] | None:
        """Return extra fields to merge into a batch summary."""
