"""Extension layer: plugin system via pluggy.

INVARIANT: Plugin failures are warnings, never errors.
"""

import pluggy

from provcheck.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("provcheck")

__all__ = ["PluginManager", "hookimpl"]
