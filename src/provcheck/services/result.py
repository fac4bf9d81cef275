"""ServiceResult and ServiceError: what every service operation returns.

INVARIANT: Service methods never raise for expected failures (missing
files, unknown rule ids, unwritable store). They return a ServiceResult
with ``ok=False`` and a structured :class:`ServiceError` instead.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Error codes reported by the service layer."""

    RECORDS_NOT_FOUND = "RECORDS_NOT_FOUND"
    RECORDS_INVALID = "RECORDS_INVALID"
    RECORD_NOT_FOUND = "RECORD_NOT_FOUND"
    UNKNOWN_RULE = "UNKNOWN_RULE"
    CONFIG_SAVE_FAILED = "CONFIG_SAVE_FAILED"


class ServiceError(BaseModel):
    """Structured error carried by a failed ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of a service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, used to pick a renderer (``"validate_batch"``).
        data: Operation payload on success.
        warnings: Non-fatal problems, e.g. a plugin hook that raised.
        error: Set when ``ok`` is False.
        meta: Telemetry and other out-of-band data (verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, error: ServiceError) -> ServiceResult:
        return cls(ok=False, op=op, error=error)

    @property
    def has_violations(self) -> bool:
        """True when a validation result reports at least one failing record."""
        if not self.ok:
            return False
        if "failed" in self.data:
            return bool(self.data["failed"])
        return self.data.get("overallStatus") == "FAIL"
