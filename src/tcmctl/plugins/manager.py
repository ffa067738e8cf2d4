"""Plugin discovery and gateway resolution.

Discovery: entry_points (pip-installed) in the ``tcmctl.plugins`` group via
pluggy setuptools entrypoints. The built-in memory backend is always
registered.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from tcmctl.domain.errors import CoreServiceConnectionError
from tcmctl.plugins.hookspecs import PROJECT_NAME, TcmctlHookSpec

if TYPE_CHECKING:
    from tcmctl.config.settings import TcmSettings
    from tcmctl.infrastructure.gateway import CoreServiceGateway

ENTRY_POINT_GROUP = "tcmctl.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and gateway creation."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TcmctlHookSpec)
        self._loaded = False

        from tcmctl.plugins.builtins.memory import MemoryGatewayPlugin

        self.register_plugin(MemoryGatewayPlugin(), name="memory")

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins."""
        if not self._loaded:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
            self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def create_gateway(self, settings: TcmSettings) -> CoreServiceGateway:
        """Resolve the gateway for ``settings.core_service.backend``.

        Raises:
            CoreServiceConnectionError: if no plugin serves the backend.
        """
        backend = settings.core_service.backend
        gateway = self._pm.hook.tcmctl_create_gateway(backend=backend, settings=settings)
        if gateway is None:
            msg = f"No gateway plugin provides the {backend!r} backend"
            raise CoreServiceConnectionError(msg)
        logger.debug("Using %s gateway for backend %r", type(gateway).__name__, backend)
        return gateway

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
