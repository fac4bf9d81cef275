"""App package-name rule.

App entitlements must name the package to deploy. Some products are
provisioned without one and are exempt.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import RuleId
from provcheck.domain.entitlements import normalize_entitlements
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult
from provcheck.domain.types import EntitlementKind, Status
from provcheck.rules._common import empty_tally, failure_message


def validate_app_package_name(
    payload: Mapping[str, Any], record: Record, options: RulesConfig
) -> RuleResult:
    apps = normalize_entitlements(payload, EntitlementKind.APP)
    details = empty_tally()
    if not apps:
        return RuleResult.passed(RuleId.APP_PACKAGE_NAME, "No app entitlements found", details)

    details["totalCount"] = len(apps)
    summaries: list[str] = []

    for app in apps:
        if app.product_code in options.package_name_exempt_codes:
            details["passCount"] += 1
            continue
        if app.package_name is not None and app.package_name.strip():
            details["passCount"] += 1
            continue

        app_name = app.name or app.product_code or f"App-{app.position}"
        details["failCount"] += 1
        summaries.append(f"{app_name} ({app.label}) is missing a package name")
        details["failures"].append(
            {
                "appName": app_name,
                "index": app.position,
                "productCode": app.product_code,
                "packageName": app.package_name,
                "reason": "Missing package name",
            }
        )

    if not summaries:
        return RuleResult.passed(
            RuleId.APP_PACKAGE_NAME,
            f"All {details['totalCount']} app entitlements have package names",
            details,
        )
    return RuleResult(
        rule_id=RuleId.APP_PACKAGE_NAME,
        status=Status.FAIL,
        message=failure_message(details, "app entitlements", summaries),
        details=details,
    )
