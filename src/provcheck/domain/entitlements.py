"""Entitlement normalizer.

Payloads come from several generations of the provisioning tooling, so
the entitlement arrays live under different paths and individual fields
use camelCase, snake_case or PascalCase spellings. Everything here turns
that into a flat sequence of :class:`Entitlement` values.

INVARIANT: Locating and normalizing never raises. Unexpected shapes
resolve to empty sequences or ``None`` fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from provcheck.domain.types import EntitlementKind

# Search order for the entitlement container, most specific first.
ENTITLEMENT_PATHS: tuple[tuple[str, ...], ...] = (
    ("properties", "provisioningDetail", "entitlements"),
    ("entitlements",),
    (),
)

# Field -> accessor keys, tried in priority order.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "productCode": ("productCode", "product_code", "ProductCode"),
    "startDate": ("startDate", "start_date", "StartDate"),
    "endDate": ("endDate", "end_date", "EndDate"),
    "packageName": ("packageName", "package_name", "PackageName"),
    "name": ("name", "productName"),
}

_APP_PATH_CANDIDATES: tuple[str, ...] = (
    "properties.provisioningDetail.entitlements.appEntitlements",
    "entitlements.appEntitlements",
    "appEntitlements",
    "apps",
    "applications",
)

_TENANT_PATHS: tuple[str, ...] = (
    "properties.provisioningDetail.tenantName",
    "properties.tenantName",
    "preferredSubdomain1",
    "preferredSubdomain2",
    "properties.preferredSubdomain1",
    "properties.preferredSubdomain2",
    "tenantName",
)


@dataclass(frozen=True)
class Entitlement:
    """A normalized entitlement, tagged with where it came from."""

    product_code: str | None
    start_date: str | None
    end_date: str | None
    quantity: int | float | None
    package_name: str | None
    name: str | None
    source_type: EntitlementKind
    source_index: int

    @property
    def position(self) -> int:
        """1-based index for user-facing messages."""
        return self.source_index + 1

    @property
    def label(self) -> str:
        """Short reference such as ``app-2``."""
        return f"{self.source_type}-{self.position}"

    def describe(self) -> dict[str, Any]:
        """Diagnostic summary used in rule result details."""
        return {
            "type": str(self.source_type),
            "index": self.position,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def get_path(obj: Any, path: str | tuple[str, ...]) -> Any:
    """Walk a dotted path (or key tuple) through nested mappings.

    Returns ``None`` as soon as a step is missing or not a mapping.
    """
    keys = path.split(".") if isinstance(path, str) else path
    current = obj
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def first_present(obj: Any, field: str) -> Any:
    """Return the first non-None value among the aliases for *field*."""
    if not isinstance(obj, Mapping):
        return None
    for key in FIELD_ALIASES.get(field, (field,)):
        value = obj.get(key)
        if value is not None:
            return value
    return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_number(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


# ---------------------------------------------------------------------------
# Locating and normalizing
# ---------------------------------------------------------------------------


def find_entitlements(payload: Any, key: str) -> list[Any]:
    """Locate the raw entitlement array *key* in *payload*.

    Tries ``properties.provisioningDetail.entitlements.<key>``, then
    ``entitlements.<key>``, then ``<key>`` at the root. The first path
    holding a list wins; otherwise an empty list is returned.
    """
    for prefix in ENTITLEMENT_PATHS:
        value = get_path(payload, (*prefix, key))
        if isinstance(value, list):
            return value
    return []


def normalize_entitlement(raw: Any, kind: EntitlementKind, index: int) -> Entitlement:
    """Normalize one raw entitlement element."""
    quantity = raw.get("quantity") if isinstance(raw, Mapping) else None
    return Entitlement(
        product_code=_as_text(first_present(raw, "productCode")),
        start_date=_as_text(first_present(raw, "startDate")),
        end_date=_as_text(first_present(raw, "endDate")),
        quantity=_as_number(quantity),
        package_name=_as_text(first_present(raw, "packageName")),
        name=_as_text(first_present(raw, "name")),
        source_type=kind,
        source_index=index,
    )


def normalize_entitlements(payload: Any, kind: EntitlementKind) -> list[Entitlement]:
    """Normalized entitlements of one category, in payload order."""
    return [
        normalize_entitlement(raw, kind, index)
        for index, raw in enumerate(find_entitlements(payload, kind.payload_key))
    ]


def pool_entitlements(payload: Any) -> list[Entitlement]:
    """App, model and data entitlements pooled into one sequence."""
    pooled: list[Entitlement] = []
    for kind in (EntitlementKind.APP, EntitlementKind.MODEL, EntitlementKind.DATA):
        pooled.extend(normalize_entitlements(payload, kind))
    return pooled


def group_by_product(entitlements: list[Entitlement]) -> dict[str, list[Entitlement]]:
    """Group entitlements by product code, dropping codeless ones.

    Groups keep first-seen order, members keep pool order.
    """
    groups: dict[str, list[Entitlement]] = {}
    for ent in entitlements:
        if not ent.product_code:
            continue
        groups.setdefault(ent.product_code, []).append(ent)
    return groups


# ---------------------------------------------------------------------------
# Payload diagnostics
# ---------------------------------------------------------------------------


def _all_paths(obj: Any, prefix: str = "") -> list[str]:
    paths: list[str] = []
    if isinstance(obj, Mapping):
        for key, value in obj.items():
            current = f"{prefix}.{key}" if prefix else str(key)
            paths.append(current)
            if isinstance(value, Mapping):
                paths.extend(_all_paths(value, current))
    return paths


def analyze_payload_structure(payload: Any) -> dict[str, Any]:
    """Summarize where (and whether) entitlements live in *payload*."""
    analysis: dict[str, Any] = {
        "hasProperties": get_path(payload, "properties") is not None,
        "hasProvisioningDetail": get_path(payload, "properties.provisioningDetail") is not None,
        "hasEntitlements": (
            get_path(payload, "properties.provisioningDetail.entitlements") is not None
        ),
        "appEntitlementsPath": None,
        "appEntitlementsCount": 0,
        "sampleAppEntitlement": None,
        "counts": {
            str(kind): len(find_entitlements(payload, kind.payload_key))
            for kind in EntitlementKind
        },
        "allPaths": _all_paths(payload),
    }

    for path in _APP_PATH_CANDIDATES:
        value = get_path(payload, path)
        if isinstance(value, list) and value:
            analysis["appEntitlementsPath"] = path
            analysis["appEntitlementsCount"] = len(value)
            analysis["sampleAppEntitlement"] = value[0]
            break

    return analysis


def parse_tenant_name(payload: Any) -> str:
    """Best-effort tenant name from a payload, ``"N/A"`` if absent."""
    for path in _TENANT_PATHS:
        value = get_path(payload, path)
        if value:
            return str(value)
    return "N/A"
