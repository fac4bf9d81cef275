"""JSON-file configuration store for rule enablement.

The file is a small key/value document (one top-level key per stored
configuration), so several tools can share it without clobbering each
other. Each entry holds a :class:`ValidationConfig`.

INVARIANT: Persistence is fire-and-forget. Read failures fall back to
defaults and write failures return False. Neither raises, so storage
problems never turn into validation failures.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from provcheck.domain.catalog import DEFAULT_RULES, RuleDefinition, RuleSet, default_enabled
from provcheck.services._helpers import now_iso

logger = logging.getLogger(__name__)

DEFAULT_KEY = "validationRules"
CONFIG_VERSION = "1.0"


class DisplaySettings(BaseModel):
    """Consumer-facing flags stored alongside enablement."""

    show_detailed_tooltips: bool = True
    validate_on_load: bool = True


class ValidationConfig(BaseModel):
    """What the store loads and saves."""

    version: str = CONFIG_VERSION
    rules: tuple[RuleDefinition, ...] = DEFAULT_RULES
    enabled_rules: dict[str, bool] = Field(default_factory=dict)
    last_updated: str | None = None
    settings: DisplaySettings = Field(default_factory=DisplaySettings)

    def rule_set(self) -> RuleSet:
        return RuleSet.from_mapping(self.enabled_rules, self.rules)


class JsonConfigStore:
    """Loads and saves :class:`ValidationConfig` under *key* in a JSON file."""

    def __init__(self, path: Path, key: str = DEFAULT_KEY) -> None:
        self.path = path
        self.key = key

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> ValidationConfig:
        """Stored configuration merged over catalog defaults.

        The rule catalog always comes from code so newly added rules show
        up even in old files. Stored enablement wins over defaults.
        """
        enabled = default_enabled()
        stored = self._read_entry()
        if stored is None:
            return ValidationConfig(enabled_rules=enabled, last_updated=now_iso())

        try:
            config = ValidationConfig.model_validate(
                {k: v for k, v in stored.items() if k != "rules"}
            )
        except ValidationError:
            logger.warning("Invalid stored config under %r in %s, using defaults", self.key, self.path)
            return ValidationConfig(enabled_rules=enabled, last_updated=now_iso())

        enabled.update(config.enabled_rules)
        return config.model_copy(
            update={
                "rules": DEFAULT_RULES,
                "enabled_rules": enabled,
                "last_updated": config.last_updated or now_iso(),
            }
        )

    def save(self, config: ValidationConfig) -> bool:
        """Persist *config*. Returns False (and logs) on failure."""
        stamped = config.model_copy(update={"last_updated": now_iso()})
        document = self._read_document()
        document[self.key] = stamped.model_dump(mode="json", exclude={"rules"})
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError:
            logger.error("Error saving config to %s", self.path, exc_info=True)
            return False
        logger.debug("Configuration saved to %s", self.path)
        return True

    def enabled_rules(self) -> list[RuleDefinition]:
        """Enabled rule definitions in catalog order."""
        return self.load().rule_set().enabled_rules()

    def set_rule_enabled(self, rule_id: str, enabled: bool) -> bool:
        """Update one rule's enabled state and save."""
        config = self.load()
        updated = {**config.enabled_rules, rule_id: enabled}
        saved = self.save(config.model_copy(update={"enabled_rules": updated}))
        logger.debug("Rule %s %s", rule_id, "enabled" if enabled else "disabled")
        return saved

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _read_document(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Could not read config store %s, using defaults", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Config store %s is not a JSON object, ignoring it", self.path)
            return {}
        return data

    def _read_entry(self) -> dict[str, Any] | None:
        entry = self._read_document().get(self.key)
        return entry if isinstance(entry, dict) else None
