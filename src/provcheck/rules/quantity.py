"""App quantity rule.

Every app entitlement must carry ``quantity == 1`` unless its product
code is exempt (bridge and expansion products are sold in bulk).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import RuleId
from provcheck.domain.entitlements import normalize_entitlements
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult
from provcheck.domain.types import EntitlementKind, Status
from provcheck.rules._common import empty_tally, failure_message

logger = logging.getLogger(__name__)


def _quantity_ok(quantity: int | float | None) -> bool:
    return quantity is not None and quantity == 1


def validate_app_quantity(
    payload: Mapping[str, Any], record: Record, options: RulesConfig
) -> RuleResult:
    apps = normalize_entitlements(payload, EntitlementKind.APP)
    details = empty_tally()
    if not apps:
        return RuleResult.passed(RuleId.APP_QUANTITY, "No app entitlements found", details)

    details["totalCount"] = len(apps)
    summaries: list[str] = []
    exempt = options.quantity_exempt_codes

    for app in apps:
        app_name = app.name or app.product_code or f"App-{app.position}"
        if _quantity_ok(app.quantity) or app.product_code in exempt:
            details["passCount"] += 1
            continue

        details["failCount"] += 1
        summaries.append(
            f"{app_name}: quantity {app.quantity}, expected 1 or one of {sorted(exempt)}"
        )
        details["failures"].append(
            {
                "appName": app_name,
                "index": app.position,
                "quantity": app.quantity,
                "productCode": app.product_code,
                "reason": "Invalid quantity",
            }
        )
        logger.debug("record %s: %s failed quantity check", record.id, app_name)

    if not summaries:
        return RuleResult.passed(
            RuleId.APP_QUANTITY,
            f"All {details['totalCount']} app entitlements valid",
            details,
        )
    return RuleResult(
        rule_id=RuleId.APP_QUANTITY,
        status=Status.FAIL,
        message=failure_message(details, "app entitlements", summaries),
        details=details,
    )
