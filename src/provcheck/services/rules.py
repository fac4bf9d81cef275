"""RuleService: inspect and toggle rule enablement."""

from __future__ import annotations

from provcheck.domain.catalog import default_enabled, find_rule
from provcheck.services.base import BaseService
from provcheck.services.result import ErrorCode, ServiceError, ServiceResult
from provcheck.services.telemetry import traced


class RuleService(BaseService):
    """Reads and updates the persisted enabled-rule set."""

    @traced
    def list_rules(self) -> ServiceResult:
        """All catalog rules with their current enabled state."""
        config = self._store.load()
        rule_set = config.rule_set()
        items = [
            {
                "id": rule.id,
                "name": rule.name,
                "category": rule.category,
                "version": rule.version,
                "description": rule.description,
                "enabled": rule_set.is_enabled(rule.id),
            }
            for rule in config.rules
        ]
        return ServiceResult(
            ok=True,
            op="list_rules",
            data={
                "items": items,
                "count": len(items),
                "enabled_count": sum(1 for i in items if i["enabled"]),
                "last_updated": config.last_updated,
            },
        )

    @traced
    def set_enabled(self, rule_id: str, enabled: bool) -> ServiceResult:
        """Persist the enabled state of *rule_id*."""
        rule = find_rule(rule_id)
        if rule is None:
            return ServiceResult.failure(
                "update_rule",
                ServiceError(
                    code=ErrorCode.UNKNOWN_RULE,
                    message=f"Unknown rule id: {rule_id}",
                    detail={"rule_id": rule_id},
                ),
            )

        if not self._store.set_rule_enabled(rule.id, enabled):
            return self._save_failed("update_rule")

        warnings: list[str] = []
        self._dispatch_event(
            "post_rule_toggle", {"rule_id": rule.id, "enabled": enabled}, warnings
        )
        return ServiceResult(
            ok=True,
            op="update_rule",
            data={"id": rule.id, "name": rule.name, "enabled": enabled},
            warnings=warnings,
        )

    @traced
    def reset(self) -> ServiceResult:
        """Restore every rule to its default enabled state."""
        config = self._store.load()
        defaults = default_enabled()
        if not self._store.save(config.model_copy(update={"enabled_rules": defaults})):
            return self._save_failed("reset_rules")
        return ServiceResult(
            ok=True,
            op="reset_rules",
            data={"enabled": defaults, "count": len(defaults)},
        )

    def _save_failed(self, op: str) -> ServiceResult:
        return ServiceResult.failure(
            op,
            ServiceError(
                code=ErrorCode.CONFIG_SAVE_FAILED,
                message=f"Could not write rule configuration to {self._store.path}",
                detail={"path": str(self._store.path)},
            ),
        )
