"""BaseService: settings, rule store and plugin dispatch shared by services."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from provcheck.infrastructure.config_store import JsonConfigStore

if TYPE_CHECKING:
    from provcheck.config.settings import ProvcheckSettings
    from provcheck.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Services are built per command from the resolved settings.

    *store* defaults to the JSON store named by ``[store]``; tests pass
    their own. Without *plugins*, hook dispatch is a no-op.
    """

    def __init__(
        self,
        settings: ProvcheckSettings,
        *,
        plugins: PluginManager | None = None,
        store: JsonConfigStore | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins
        self._store = store if store is not None else JsonConfigStore(
            settings.store_path, settings.store.key
        )

    def _dispatch_event(self, hook_name: str, payload: dict[str, Any], warnings: list[str]) -> list[Any]:
        """Call *hook_name* on every plugin and return the non-None results.

        A raising plugin adds a warning to *warnings*; the operation
        itself still succeeds.
        """
        if self._plugins is None:
            return []
        hook = getattr(self._plugins.hook, hook_name, None)
        if hook is None:
            return []
        try:
            return list(hook(**payload))
        except Exception as exc:
            logger.debug("Plugin hook %s raised", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed: {exc}")
            return []
