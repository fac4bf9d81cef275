"""Model count ceiling rule."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import RuleId
from provcheck.domain.entitlements import normalize_entitlements
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult
from provcheck.domain.types import EntitlementKind, Status


def validate_model_count(
    payload: Mapping[str, Any], record: Record, options: RulesConfig
) -> RuleResult:
    models = normalize_entitlements(payload, EntitlementKind.MODEL)
    limit = options.model_count_limit
    count = len(models)

    if not models:
        return RuleResult.passed(
            RuleId.MODEL_COUNT,
            "No model entitlements found",
            {"totalCount": 0, "limit": limit, "withinLimit": True},
        )

    within = count <= limit
    details: dict[str, Any] = {
        "totalCount": count,
        "limit": limit,
        "withinLimit": within,
        "modelsFound": [
            {
                "name": m.product_code or m.name or f"Model-{m.position}",
                "productCode": m.product_code or "Unknown",
                "quantity": m.quantity if m.quantity is not None else 1,
            }
            for m in models
        ],
    }
    if within:
        message = f"Model count {count} is within limit (<={limit})"
    else:
        message = f"Model count {count} exceeds limit of {limit}"
    return RuleResult(
        rule_id=RuleId.MODEL_COUNT,
        status=Status.PASS if within else Status.FAIL,
        message=message,
        details=details,
    )
