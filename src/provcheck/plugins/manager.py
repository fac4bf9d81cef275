"""PluginManager: a thin wrapper over pluggy for provcheck hooks.

Plugins come from the ``provcheck.plugins`` entry-point group or from
direct registration (tests, embedding applications).
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from provcheck.plugins.hookspecs import ProvcheckHookSpec

PROJECT_NAME = "provcheck"
ENTRY_POINT_GROUP = "provcheck.plugins"
_IMPL_ATTR = f"{PROJECT_NAME}_impl"

logger = logging.getLogger(__name__)


def _declares_hooks(obj: type) -> bool:
    """True when a public attribute of *obj* carries a ``@hookimpl`` marker."""
    return any(
        getattr(getattr(obj, attr, None), _IMPL_ATTR, None)
        for attr in dir(obj)
        if not attr.startswith("_")
    )


class PluginManager:
    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ProvcheckHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return every registered plugin name."""
        count = self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        logger.debug("Loaded %d entry-point plugin(s)", count)
        for plugin in self._pm.get_plugins():
            if inspect.isclass(plugin) and _declares_hooks(plugin):
                self._instantiate(plugin)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        name = name or type(plugin).__name__
        self._pm.register(plugin, name=name)
        logger.debug("Registered plugin: %s", name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    def _instantiate(self, plugin_cls: type) -> None:
        # Hooks on a registered class would be called with an unbound self.
        name = self._pm.get_name(plugin_cls) or plugin_cls.__name__
        self._pm.unregister(plugin_cls)
        try:
            instance = plugin_cls()
        except Exception:
            logger.warning("Failed to instantiate plugin %s; skipping it", name, exc_info=True)
            return
        self._pm.register(instance, name=name)
