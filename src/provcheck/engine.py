"""Validation engine: payload intake, rule dispatch, aggregation.

INVARIANT: The engine is fail-open and total. A missing payload, a
malformed payload, an unknown rule id, or an evaluator raising all
produce PASS. Only a positively confirmed rule violation yields FAIL,
and ``validate_record`` never raises.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import DEFAULT_RULES, RuleDefinition, RuleSet, display_name
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult, ValidationResult
from provcheck.rules import get_evaluator

logger = logging.getLogger(__name__)

ALL_PASSED = "All validation rules passed"


def parse_payload(payload_raw: str | None) -> tuple[bool, Any]:
    """Decode a raw payload. Returns ``(ok, payload)``."""
    if not payload_raw:
        return False, None
    try:
        return True, json.loads(payload_raw)
    except (ValueError, TypeError, RecursionError):
        return False, None


def execute_rule(
    rule: RuleDefinition,
    payload: Any,
    record: Record,
    options: RulesConfig,
) -> RuleResult:
    """Run one rule inside an isolating boundary."""
    evaluator = get_evaluator(rule.id)
    if evaluator is None:
        logger.warning("Unknown rule %s, defaulting to pass", rule.id)
        return RuleResult.passed(rule.id, "Unknown rule, defaulting to pass")
    try:
        return evaluator(payload, record, options)
    except Exception as exc:
        logger.warning(
            "Error executing rule %s for record %s", rule.id, record.id, exc_info=True
        )
        return RuleResult.passed(
            rule.id,
            "Validation error, defaulting to pass",
            {"error": str(exc) or type(exc).__name__},
        )


def validate_record(
    record: Record,
    rule_set: RuleSet,
    *,
    options: RulesConfig | None = None,
) -> ValidationResult:
    """Validate *record* against the enabled rules of *rule_set*.

    Rules run in catalog order. ``overall_status`` is FAIL iff any rule
    result is FAIL.
    """
    options = options or RulesConfig()
    name = record.display_name

    if not record.payload_raw:
        logger.debug("No payload data for record %s, defaulting to PASS", record.id)
        return ValidationResult.build(record.id, name)

    ok, payload = parse_payload(record.payload_raw)
    if not ok:
        logger.warning("Malformed JSON in record %s, defaulting to PASS", record.id)
        return ValidationResult.build(record.id, name)

    results: list[RuleResult] = []
    for rule in rule_set.enabled_rules():
        logger.debug("Running rule %s for record %s", rule.id, record.id)
        result = execute_rule(rule, payload, record, options)
        if result.failed:
            logger.info("Rule %s failed for record %s: %s", rule.id, record.id, result.message)
        results.append(result)

    validation = ValidationResult.build(record.id, name, results)
    logger.debug("Final result for record %s: %s", record.id, validation.overall_status)
    return validation


def get_validation_tooltip(
    result: ValidationResult | None,
    rules: tuple[RuleDefinition, ...] = DEFAULT_RULES,
) -> str:
    """Plain-text summary of the failing rules in *result*."""
    if result is None or not result.failed_rules:
        return ALL_PASSED
    return "\n".join(
        f"{display_name(rule.rule_id, rules)}: {rule.message}" for rule in result.failed_rules
    )
