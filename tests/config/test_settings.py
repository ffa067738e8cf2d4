"""Tests for config discovery and unified settings."""

from __future__ import annotations

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from tcmctl.config.discovery import find_config
from tcmctl.config.models import CoreServiceConfig
from tcmctl.config.settings import TcmSettings
from tcmctl.domain.versions import CoreServiceVersion


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TCMCTL_CONFIG", "TCMCTL_CORE_SERVICE__VERSION", "TCMCTL_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "tcmctl.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / "tcmctl.toml").resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        other = tmp_path / "other.toml"
        other.write_text("")
        (tmp_path / "tcmctl.toml").write_text("")
        monkeypatch.setenv("TCMCTL_CONFIG", str(other))
        assert find_config(tmp_path) == other

    def test_env_var_pointing_nowhere(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TCMCTL_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestCoreServiceConfig:
    def test_defaults(self) -> None:
        cfg = CoreServiceConfig()
        assert cfg.backend == "memory"
        assert cfg.version is CoreServiceVersion.WEB_8_5
        assert cfg.connection_type == "Default"
        assert cfg.password is None

    def test_password_is_secret(self) -> None:
        cfg = CoreServiceConfig(password="hunter2")
        assert "hunter2" not in repr(cfg)
        assert cfg.password is not None
        assert cfg.password.get_secret_value() == "hunter2"

    def test_unknown_version_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CoreServiceConfig(version="2009")

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CoreServiceConfig(send_timeout=0)


class TestTcmSettings:
    def test_no_config_file(self, tmp_path: Path) -> None:
        settings = TcmSettings.from_cli(project_root=tmp_path)
        assert settings.config_path is None
        assert settings.core_service == CoreServiceConfig()
        assert settings.sandbox_path == tmp_path / ".tcmctl" / "sandbox.json"

    def test_toml_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "tcmctl.toml").write_text(
            '[core_service]\nversion = "2013-SP1"\nhost_name = "cms.example.com"\n'
        )
        monkeypatch.chdir(tmp_path)
        settings = TcmSettings.from_cli()
        assert settings.project_root == tmp_path.resolve()
        assert settings.core_service.version is CoreServiceVersion.V2013_SP1
        assert settings.core_service.host_name == "cms.example.com"
        assert settings.core_service.backend == "memory"

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "tcmctl.toml").write_text('[core_service]\nversion = "2013-SP1"\n')
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TCMCTL_CORE_SERVICE__VERSION", "Sites-9.5")
        settings = TcmSettings.from_cli()
        assert settings.core_service.version is CoreServiceVersion.SITES_9_5

    def test_cli_flags_win(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TCMCTL_VERBOSE", "false")
        settings = TcmSettings.from_cli(project_root=tmp_path, verbose=True, assume_yes=True)
        assert settings.verbose
        assert settings.assume_yes

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text('[core_service]\nsandbox = "/abs/store.json"\n')
        settings = TcmSettings.from_cli(config_path=str(path))
        assert settings.config_path == path
        assert settings.sandbox_path == Path("/abs/store.json")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "tcmctl.toml"
        path.write_text("[core_service\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            TcmSettings.from_cli(config_path=str(path))
