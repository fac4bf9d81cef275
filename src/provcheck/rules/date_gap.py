"""Entitlement date-gap rule.

Consecutive entitlements for one product code must be contiguous at day
granularity: the next range starts on the day after the current one
ends. Later starts are gaps; earlier starts are overlaps and belong to
the overlap rule.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import RuleId
from provcheck.domain.dates import ONE_DAY, format_date, parse_date, whole_days
from provcheck.domain.entitlements import Entitlement, group_by_product, pool_entitlements
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult
from provcheck.domain.types import Status


def _dated(group: list[Entitlement]) -> list[tuple[datetime, datetime, Entitlement]]:
    dated = []
    for ent in group:
        start = parse_date(ent.start_date)
        end = parse_date(ent.end_date)
        if start is None or end is None:
            continue
        dated.append((start, end, ent))
    # sorted() is stable, equal starts keep pool order.
    return sorted(dated, key=lambda item: item[0])


def find_gaps(entitlements: list[Entitlement]) -> list[dict[str, Any]]:
    """Every gap between consecutive ranges within each product-code group."""
    gaps: list[dict[str, Any]] = []
    for product_code, group in group_by_product(entitlements).items():
        dated = _dated(group)
        if len(dated) < 2:
            continue
        for (_, current_end, current), (next_start, _, following) in zip(
            dated, dated[1:], strict=False
        ):
            # Open-ended ranges end on 9999-12-31, where end + 1 day overflows.
            spread = next_start - current_end
            if spread <= ONE_DAY:
                continue
            gap_days = whole_days(spread - ONE_DAY)
            # Safe: next_start already lies past this date.
            expected = current_end + ONE_DAY
            gaps.append(
                {
                    "productCode": product_code,
                    "gapDays": gap_days,
                    "expectedStartDate": format_date(expected),
                    "actualStartDate": following.start_date,
                    "previous": current.describe(),
                    "next": following.describe(),
                    "description": (
                        f"{product_code}: {gap_days} day gap between {current.label} "
                        f"(ends {current.end_date}) and {following.label} "
                        f"(starts {following.start_date})"
                    ),
                }
            )
    return gaps


def validate_date_gap(
    payload: Mapping[str, Any], record: Record, options: RulesConfig
) -> RuleResult:
    pooled = pool_entitlements(payload)
    gaps = find_gaps(pooled)
    details = {"totalCount": len(pooled), "gapsFound": len(gaps), "gaps": gaps}

    if not gaps:
        return RuleResult.passed(
            RuleId.DATE_GAP,
            f"No date gaps found across {len(pooled)} entitlements",
            details,
        )
    plural = "s" if len(gaps) > 1 else ""
    return RuleResult(
        rule_id=RuleId.DATE_GAP,
        status=Status.FAIL,
        message=f"{len(gaps)} date gap{plural} found: " + "; ".join(g["description"] for g in gaps),
        details=details,
    )
