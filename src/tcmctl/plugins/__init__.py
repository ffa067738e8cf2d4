"""Extension layer — gateway backends via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
"""

from tcmctl.plugins.hookspecs import hookimpl
from tcmctl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
