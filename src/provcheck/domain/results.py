"""RuleResult and ValidationResult: the engine's output contract.

Both are frozen once produced. They serialize with camelCase keys
(``ruleId``, ``overallStatus`` ...) so downstream consumers see the same
shape as the provisioning dashboard.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from provcheck.domain.types import Status

_RESULT_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RuleResult(BaseModel):
    """Outcome of one executed rule."""

    model_config = _RESULT_CONFIG

    rule_id: str
    status: Status
    message: str
    details: dict[str, Any] | None = None

    @property
    def failed(self) -> bool:
        return self.status is Status.FAIL

    @classmethod
    def passed(cls, rule_id: str, message: str, details: dict[str, Any] | None = None) -> RuleResult:
        return cls(rule_id=rule_id, status=Status.PASS, message=message, details=details)


class ValidationResult(BaseModel):
    """Aggregated verdict for one record.

    INVARIANT: ``overall_status`` is FAIL iff at least one rule result
    is FAIL. Use :meth:`build` to keep that true.
    """

    model_config = _RESULT_CONFIG

    record_id: str
    record_name: str
    overall_status: Status
    rule_results: tuple[RuleResult, ...] = ()
    validated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def build(
        cls,
        record_id: str,
        record_name: str,
        rule_results: list[RuleResult] | tuple[RuleResult, ...] = (),
    ) -> ValidationResult:
        overall = Status.FAIL if any(r.failed for r in rule_results) else Status.PASS
        return cls(
            record_id=record_id,
            record_name=record_name,
            overall_status=overall,
            rule_results=tuple(rule_results),
        )

    @property
    def failed_rules(self) -> list[RuleResult]:
        return [r for r in self.rule_results if r.failed]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
