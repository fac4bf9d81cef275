"""Entitlement date-overlap rule.

Entitlements sharing a product code must not cover the same period.
Two ranges overlap iff ``start1 < end2 and start2 < end1``; ranges that
only touch at a boundary instant do not overlap.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from itertools import combinations
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import RuleId
from provcheck.domain.dates import parse_date
from provcheck.domain.entitlements import Entitlement, group_by_product, pool_entitlements
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult
from provcheck.domain.types import OverlapType, Status

logger = logging.getLogger(__name__)

_Range = tuple[datetime, datetime]


def ranges_overlap(first: _Range, second: _Range) -> bool:
    """Strict-inequality overlap test. Symmetric in its arguments."""
    start1, end1 = first
    start2, end2 = second
    return start1 < end2 and start2 < end1


def classify_overlap(first: _Range, second: _Range) -> OverlapType:
    """Classify two ranges already known to overlap."""
    start1, end1 = first
    start2, end2 = second
    if start1 == start2 and end1 == end2:
        return OverlapType.IDENTICAL
    if (start1 <= start2 and end1 >= end2) or (start2 <= start1 and end2 >= end1):
        return OverlapType.CONTAINS
    return OverlapType.GENERAL


def _date_range(ent: Entitlement) -> _Range | None:
    start = parse_date(ent.start_date)
    end = parse_date(ent.end_date)
    if start is None or end is None:
        return None
    return start, end


def _span(ent: Entitlement) -> str:
    return f"{ent.label} ({ent.start_date} to {ent.end_date})"


def _describe(kind: OverlapType, ent1: Entitlement, ent2: Entitlement, r1: _Range, r2: _Range) -> str:
    if kind is OverlapType.IDENTICAL:
        return (
            f"{ent1.label} and {ent2.label} have identical date ranges "
            f"({ent1.start_date} to {ent1.end_date})"
        )
    if kind is OverlapType.CONTAINS:
        outer, inner = (ent1, ent2) if r1[0] <= r2[0] and r1[1] >= r2[1] else (ent2, ent1)
        return f"{_span(outer)} completely contains {_span(inner)}"
    return f"{_span(ent1)} overlaps with {_span(ent2)}"


def find_overlaps(entitlements: list[Entitlement]) -> list[dict[str, Any]]:
    """Every overlapping pair within each product-code group."""
    overlaps: list[dict[str, Any]] = []
    for product_code, group in group_by_product(entitlements).items():
        if len(group) < 2:
            continue
        for ent1, ent2 in combinations(group, 2):
            r1 = _date_range(ent1)
            r2 = _date_range(ent2)
            if r1 is None or r2 is None:
                continue
            if not ranges_overlap(r1, r2):
                continue
            kind = classify_overlap(r1, r2)
            overlaps.append(
                {
                    "productCode": product_code,
                    "overlapType": str(kind),
                    "entitlement1": ent1.describe(),
                    "entitlement2": ent2.describe(),
                    "description": _describe(kind, ent1, ent2, r1, r2),
                }
            )
    return overlaps


def validate_date_overlap(
    payload: Mapping[str, Any], record: Record, options: RulesConfig
) -> RuleResult:
    pooled = pool_entitlements(payload)
    if not pooled:
        return RuleResult.passed(
            RuleId.DATE_OVERLAP,
            "No entitlements found",
            {"totalCount": 0, "overlapsFound": 0, "overlaps": []},
        )

    overlaps = find_overlaps(pooled)
    for overlap in overlaps:
        logger.debug(
            "record %s: date overlap for %s: %s",
            record.id,
            overlap["productCode"],
            overlap["description"],
        )

    details = {"totalCount": len(pooled), "overlapsFound": len(overlaps), "overlaps": overlaps}
    if not overlaps:
        return RuleResult.passed(
            RuleId.DATE_OVERLAP,
            f"No date overlaps found across {len(pooled)} entitlements",
            details,
        )
    plural = "s" if len(overlaps) > 1 else ""
    return RuleResult(
        rule_id=RuleId.DATE_OVERLAP,
        status=Status.FAIL,
        message=(
            f"{len(overlaps)} date overlap{plural} found: "
            + "; ".join(o["description"] for o in overlaps)
        ),
        details=details,
    )
