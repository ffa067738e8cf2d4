"""Pluggy hook specifications for tcmctl gateway backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from tcmctl.config.settings import TcmSettings
    from tcmctl.infrastructure.gateway import CoreServiceGateway

PROJECT_NAME = "tcmctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TcmctlHookSpec:
    """Hook specifications for the tcmctl plugin system."""

    @hookspec(firstresult=True)
    def tcmctl_create_gateway(
        self,
        backend: str,
        settings: TcmSettings,
    ) -> CoreServiceGateway | None:
        """Return a gateway for *backend*, or None if this plugin does not serve it.

        The first non-None result wins.
        """
