"""Extension layer — plugin system via pluggy.

Resolution: entry points, local ``.serverless_plugins/`` files, importable modules.
INVARIANT: Plugin failures are warnings, never errors.
"""

from slsimport.plugins.manager import PluginManager

__all__ = ["PluginManager"]
