"""Tests for RuleResult / ValidationResult."""

from __future__ import annotations

from provcheck.domain.results import RuleResult, ValidationResult
from provcheck.domain.types import Status


def _fail(rule_id: str = "r") -> RuleResult:
    return RuleResult(rule_id=rule_id, status=Status.FAIL, message="bad")


class TestValidationResult:
    def test_empty_is_pass(self) -> None:
        result = ValidationResult.build("1", "One")
        assert result.overall_status is Status.PASS
        assert result.rule_results == ()

    def test_any_fail_is_fail(self) -> None:
        result = ValidationResult.build("1", "One", [RuleResult.passed("a", "ok"), _fail("b")])
        assert result.overall_status is Status.FAIL
        assert [r.rule_id for r in result.failed_rules] == ["b"]

    def test_all_pass(self) -> None:
        result = ValidationResult.build("1", "One", [RuleResult.passed("a", "ok")])
        assert result.overall_status is Status.PASS
        assert result.failed_rules == []

    def test_camel_case_dump(self) -> None:
        data = ValidationResult.build("1", "One", [_fail("b")]).to_dict()
        assert data["recordId"] == "1"
        assert data["recordName"] == "One"
        assert data["overallStatus"] == "FAIL"
        assert data["ruleResults"][0]["ruleId"] == "b"
        assert "validatedAt" in data

    def test_validated_at_is_aware(self) -> None:
        result = ValidationResult.build("1", "One")
        assert result.validated_at.tzinfo is not None
