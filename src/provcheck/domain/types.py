"""Status and classification enums shared by the engine and rules."""

from __future__ import annotations

from enum import StrEnum


class Status(StrEnum):
    """Verdict for a single rule or a whole record."""

    PASS = "PASS"
    FAIL = "FAIL"


class EntitlementKind(StrEnum):
    """Entitlement categories found in a provisioning payload."""

    APP = "app"
    MODEL = "model"
    DATA = "data"

    @property
    def payload_key(self) -> str:
        """Key of the entitlement array inside the payload."""
        return f"{self.value}Entitlements"


class OverlapType(StrEnum):
    """How two overlapping date ranges relate to each other."""

    IDENTICAL = "identical"
    CONTAINS = "contains"
    GENERAL = "general"
