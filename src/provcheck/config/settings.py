"""ProvcheckSettings: CLI flags, ``PROVCHECK_*`` env vars and provcheck.toml.

Sources, highest priority first: constructor kwargs (CLI flags), env
vars (``PROVCHECK_BATCH__MAX_WORKERS=8``), the TOML file, then the
defaults in :mod:`provcheck.config.models`.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from provcheck.config.discovery import find_config, read_toml
from provcheck.config.models import BatchConfig, RulesConfig, StoreConfig

# Parsed TOML for the settings object under construction.
_pending_toml: ContextVar[dict[str, Any]] = ContextVar("provcheck_pending_toml", default={})


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feeds the already-parsed provcheck.toml into pydantic-settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class ProvcheckSettings(BaseSettings):
    """Frozen settings shared by the CLI and services.

    ``project_root`` anchors relative paths such as the rule store; it is
    the directory holding the config file, or the CWD when there is none.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PROVCHECK_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    rules: RulesConfig = Field(default_factory=RulesConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)

    @property
    def store_path(self) -> Path:
        path = Path(self.store.path)
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlSettingsSource(settings_cls, _pending_toml.get()))

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **flags: Any,
    ) -> ProvcheckSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist is ignored and the
        defaults apply. Raises ``click.ClickException`` for malformed TOML.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        token = _pending_toml.set(read_toml(toml_path) if toml_path else {})
        try:
            return cls(project_root=project_root, config_path=toml_path, **flags)
        finally:
            _pending_toml.reset(token)
