"""Rule catalog: the single source of truth for which rules exist.

Rule definitions are static and versioned. Which of them actually run is
decided by a :class:`RuleSet`, built from the catalog plus an
enabled-rule mapping supplied by the configuration store.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, Field


class RuleId(StrEnum):
    """Closed set of rule identifiers with an evaluator behind them."""

    APP_QUANTITY = "app-quantity-validation"
    MODEL_COUNT = "model-count-validation"
    DATE_OVERLAP = "entitlement-date-overlap-validation"
    DATE_GAP = "entitlement-date-gap-validation"
    APP_PACKAGE_NAME = "app-package-name-validation"


class RuleDefinition(BaseModel):
    """Immutable description of a validation rule. Identity is ``id``."""

    model_config = {"frozen": True}

    id: str
    name: str
    description: str
    long_description: str = ""
    category: str
    version: str = "1.0"
    created_date: str | None = None
    enabled_by_default: bool = True


DEFAULT_RULES: tuple[RuleDefinition, ...] = (
    RuleDefinition(
        id=RuleId.APP_QUANTITY,
        name="App Quantity Validation",
        description=(
            "For Apps section: quantity must be 1, except exempt products "
            "(IC-DATABRIDGE, RI-RISKMODELER-EXPANSION) are always valid"
        ),
        long_description=(
            "Validates each app entitlement in the payload data. Rule passes if "
            "quantity equals 1 or the product code is exempt. All app entitlements "
            "must pass for the record to pass."
        ),
        category="product-validation",
        created_date="2025-01-24",
    ),
    RuleDefinition(
        id=RuleId.MODEL_COUNT,
        name="Model Count Validation",
        description="Fails if number of Models is more than the limit (100), otherwise passes",
        long_description=(
            "Validates the total count of model entitlements in the payload data. "
            "Rule fails if the number of models exceeds the configured limit."
        ),
        category="product-validation",
        created_date="2025-01-24",
    ),
    RuleDefinition(
        id=RuleId.DATE_OVERLAP,
        name="Entitlement Date Overlap Validation",
        description="Fails if entitlements with the same productCode have overlapping date ranges",
        long_description=(
            "Validates that entitlements sharing a productCode never cover the same "
            "period. Ranges that only touch at a boundary do not overlap."
        ),
        category="date-validation",
        created_date="2025-01-24",
    ),
    RuleDefinition(
        id=RuleId.DATE_GAP,
        name="Entitlement Date Gap Validation",
        description="Fails if a product code has multiple date ranges with gaps between them",
        long_description=(
            "For any product code with multiple date ranges, each subsequent "
            "entitlement must start on the day after the previous one ends."
        ),
        category="date-validation",
        created_date="2025-10-13",
    ),
    RuleDefinition(
        id=RuleId.APP_PACKAGE_NAME,
        name="App Package Name Validation",
        description=(
            "Fails if an app entitlement is missing a package name, except "
            "DATAAPI-LOCINTEL, IC-RISKDATALAKE, RI-COMETA, and DATAAPI-BULK-GEOCODE"
        ),
        long_description=(
            "Validates that each app entitlement has a non-empty package name. "
            "Exempt products do not require one."
        ),
        category="product-validation",
        created_date="2025-10-15",
    ),
)


def find_rule(rule_id: str, rules: tuple[RuleDefinition, ...] = DEFAULT_RULES) -> RuleDefinition | None:
    """Look up a rule definition by id."""
    for rule in rules:
        if rule.id == rule_id:
            return rule
    return None


def display_name(rule_id: str, rules: tuple[RuleDefinition, ...] = DEFAULT_RULES) -> str:
    """Catalog display name for *rule_id*, falling back to the raw id."""
    rule = find_rule(rule_id, rules)
    return rule.name if rule is not None else rule_id


def default_enabled(rules: tuple[RuleDefinition, ...] = DEFAULT_RULES) -> dict[str, bool]:
    """Enabled-rule mapping using each rule's default."""
    return {rule.id: rule.enabled_by_default for rule in rules}


class RuleSet(BaseModel):
    """Catalog plus enabled-rule mapping, threaded into each engine call.

    A rule missing from ``enabled`` falls back to ``enabled_by_default``.
    """

    model_config = {"frozen": True}

    rules: tuple[RuleDefinition, ...] = DEFAULT_RULES
    enabled: dict[str, bool] = Field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        enabled: Mapping[str, bool],
        rules: tuple[RuleDefinition, ...] = DEFAULT_RULES,
    ) -> RuleSet:
        return cls(rules=rules, enabled=dict(enabled))

    def is_enabled(self, rule_id: str) -> bool:
        if rule_id in self.enabled:
            return self.enabled[rule_id]
        rule = find_rule(rule_id, self.rules)
        return rule.enabled_by_default if rule is not None else False

    def enabled_rules(self) -> list[RuleDefinition]:
        """Enabled rules in catalog order."""
        return [rule for rule in self.rules if self.is_enabled(rule.id)]

    def only(self, rule_ids: list[str]) -> RuleSet:
        """Restrict the set to *rule_ids* (still in catalog order)."""
        wanted = set(rule_ids)
        return RuleSet(
            rules=self.rules,
            enabled={rule.id: rule.id in wanted for rule in self.rules},
        )
