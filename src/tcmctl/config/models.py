"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tcmctl.toml only contains overrides.
A sandbox setup needs nothing at all; a real endpoint needs
``[core_service] backend`` and ``host_name``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr

from tcmctl.domain.versions import DEFAULT_VERSION, CoreServiceVersion

ConnectionType = Literal["Default", "Basic", "Net.Tcp", "SSL", "LDAP", "LDAP-SSL"]


class CoreServiceConfig(BaseModel):
    """[core_service] section.

    ``version`` gates feature availability. The remaining fields are handed
    to whichever gateway plugin serves ``backend``.
    """

    model_config = {"frozen": True}

    backend: str = "memory"
    version: CoreServiceVersion = DEFAULT_VERSION
    host_name: str = "localhost"
    user_name: str | None = None
    password: SecretStr | None = None
    connection_type: ConnectionType = "Default"
    send_timeout: float = Field(default=60.0, gt=0)
    sandbox: Path = Path(".tcmctl/sandbox.json")
