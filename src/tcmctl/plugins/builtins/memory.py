"""Built-in plugin serving the ``memory`` backend from a JSON sandbox."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tcmctl.infrastructure.memory import MemoryGateway
from tcmctl.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from tcmctl.config.settings import TcmSettings


class MemoryGatewayPlugin:
    """Creates a :class:`MemoryGateway` bound to the configured sandbox file."""

    @hookimpl
    def tcmctl_create_gateway(self, backend: str, settings: TcmSettings) -> MemoryGateway | None:
        if backend != "memory":
            return None
        return MemoryGateway.from_file(settings.sandbox_path)
