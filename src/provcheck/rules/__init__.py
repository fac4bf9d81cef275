"""Rule evaluators: one pure function per :class:`RuleId`.

Each evaluator takes the parsed payload, the record (for diagnostics)
and the ``[rules]`` configuration section, and returns a RuleResult.
Evaluators never perform I/O and share no mutable state.

Adding a rule means a new ``RuleId`` member, its catalog entry, and an
entry in :data:`EVALUATORS`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from provcheck.config.models import RulesConfig
from provcheck.domain.catalog import RuleId
from provcheck.domain.records import Record
from provcheck.domain.results import RuleResult
from provcheck.rules.date_gap import validate_date_gap
from provcheck.rules.date_overlap import validate_date_overlap
from provcheck.rules.model_count import validate_model_count
from provcheck.rules.package_name import validate_app_package_name
from provcheck.rules.quantity import validate_app_quantity

Evaluator = Callable[[Mapping[str, Any], Record, RulesConfig], RuleResult]

EVALUATORS: dict[RuleId, Evaluator] = {
    RuleId.APP_QUANTITY: validate_app_quantity,
    RuleId.MODEL_COUNT: validate_model_count,
    RuleId.DATE_OVERLAP: validate_date_overlap,
    RuleId.DATE_GAP: validate_date_gap,
    RuleId.APP_PACKAGE_NAME: validate_app_package_name,
}


def get_evaluator(rule_id: str) -> Evaluator | None:
    """Resolve *rule_id* to its evaluator, or None for unknown ids."""
    try:
        return EVALUATORS[RuleId(rule_id)]
    except ValueError:
        return None


__all__ = ["EVALUATORS", "Evaluator", "get_evaluator"]
