"""Locate ``tcmctl.toml``.

``TCMCTL_CONFIG`` names the file outright. Otherwise the search starts in
the given directory and climbs towards the filesystem root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "tcmctl.toml"
CONFIG_ENV_VAR = "TCMCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``tcmctl.toml`` at or above *start* (default: CWD).

    When ``TCMCTL_CONFIG`` is set, only that path is considered.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
