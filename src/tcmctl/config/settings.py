"""Layered settings for tcmctl.

Sources, highest priority first:
  1. CLI flags given to the root group
  2. ``TCMCTL_*`` environment variables; ``__`` separates nested keys
     (``TCMCTL_CORE_SERVICE__HOST_NAME``)
  3. The ``tcmctl.toml`` found by :func:`~tcmctl.config.discovery.find_config`
  4. Defaults baked into :mod:`tcmctl.config.models`
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from tcmctl.config.discovery import find_config
from tcmctl.config.models import CoreServiceConfig

# Config file for the settings object under construction.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a single ``tcmctl.toml``.

    Tables that do not name a settings field are ignored, so a config file
    shared with other tools does not fail validation.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self.toml_path = toml_path
        self._data = {
            key: value
            for key, value in _read_toml(toml_path).items()
            if key in settings_cls.model_fields
        }

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class TcmSettings(BaseSettings):
    """Everything a tcmctl invocation needs to know, frozen after construction.

    Attributes:
        project_root: Directory holding the loaded ``tcmctl.toml`` (CWD when
            none was found). Relative paths in the config resolve against it.
        config_path: The config file actually loaded, if any.
        core_service: The ``[core_service]`` table; handed to every service.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="TCMCTL_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- global CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False
    assume_yes: bool = False

    core_service: CoreServiceConfig = Field(default_factory=CoreServiceConfig)

    @property
    def sandbox_path(self) -> Path:
        """Sandbox file for the memory backend, resolved against the project root."""
        path = self.core_service.sandbox
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> TcmSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* replaces discovery; a path that is not a
        file is treated as no config at all. *cli_flags* override every
        other source.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent.resolve() if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)
