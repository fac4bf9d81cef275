"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, provcheck.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- provcheck.toml sections ---


class RulesConfig(BaseModel):
    """[rules] section: tunables consumed by the rule evaluators."""

    model_config = {"frozen": True}

    quantity_exempt_codes: frozenset[str] = Field(
        default_factory=lambda: frozenset({"IC-DATABRIDGE", "RI-RISKMODELER-EXPANSION"})
    )
    package_name_exempt_codes: frozenset[str] = Field(
        default_factory=lambda: frozenset(
            {"DATAAPI-LOCINTEL", "IC-RISKDATALAKE", "RI-COMETA", "DATAAPI-BULK-GEOCODE"}
        )
    )
    model_count_limit: int = Field(default=100, ge=0)


class StoreConfig(BaseModel):
    """[store] section: where rule enablement is persisted."""

    model_config = {"frozen": True}

    path: str = ".provcheck/rules.json"
    key: str = "validationRules"


class BatchConfig(BaseModel):
    """[batch] section."""

    model_config = {"frozen": True}

    max_workers: int = Field(default=4, ge=1)


class ProvcheckConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    rules: RulesConfig = Field(default_factory=RulesConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
