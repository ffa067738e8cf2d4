"""Shared pytest fixtures and test helpers for tcmctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from tcmctl.config.models import CoreServiceConfig
from tcmctl.domain.versions import CoreServiceVersion
from tcmctl.infrastructure.memory import MemoryGateway
from tcmctl.services.telemetry import disable_telemetry

TOPOLOGY_TYPE = "tcm:0-1-65537"
BPT_ID = "tcm:0-7-66570"


PUBLICATIONS: list[dict[str, Any]] = [
    {"id": "tcm:0-1-1", "title": "000 Empty Parent", "key": "empty", "publication_type": "Content"},
    {"id": "tcm:0-2-1", "title": "010 Schemas", "key": "schemas", "publication_type": "Content"},
    {
        "id": "tcm:0-3-1",
        "title": "020 Content",
        "key": "content",
        "publication_type": "Content",
        "parents": [{"id": "tcm:0-2-1", "title": "010 Schemas"}],
    },
    {
        "id": "tcm:0-4-1",
        "title": "030 Website",
        "key": "website",
        "publication_type": "Web",
        "parents": [{"id": "tcm:0-3-1", "title": "020 Content"}],
    },
]


def seed(gateway: MemoryGateway) -> MemoryGateway:
    """Populate *gateway* with a small BluePrint, one component, and two BPTs."""
    for publication in PUBLICATIONS:
        gateway.add(publication)
    gateway.add({"id": "tcm:3-500-16", "title": "Article", "schema": "tcm:2-40-8"})
    gateway.add({"id": BPT_ID, "title": "Default Business Process"})
    gateway.business_process_types[TOPOLOGY_TYPE] = [
        {"id": BPT_ID, "title": "Default Business Process"},
        {"id": "tcm:0-8-66570", "title": "Staging Only"},
    ]
    return gateway


class RecordingGateway:
    """Wraps a gateway and records every call and session transition."""

    def __init__(self, inner: MemoryGateway) -> None:
        self.inner = inner
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.opened = 0
        self.closed = 0
        self.fail_on: dict[str, Exception] = {}

    def open_session(self) -> Any:
        if "open_session" in self.fail_on:
            raise self.fail_on["open_session"]
        self.opened += 1
        return self.inner.open_session()

    def close_session(self, handle: Any) -> None:
        self.closed += 1
        self.inner.close_session(handle)

    def __getattr__(self, name: str) -> Any:
        method = getattr(self.inner, name)

        def call(handle: Any, *args: Any, **kwargs: Any) -> Any:
            self.calls.append((name, args))
            if name in self.fail_on:
                raise self.fail_on[name]
            return method(handle, *args, **kwargs)

        return call

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """Telemetry state is a context variable shared across tests."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def memory_gateway() -> MemoryGateway:
    return seed(MemoryGateway())


@pytest.fixture
def gateway(memory_gateway: MemoryGateway) -> RecordingGateway:
    """Seeded memory gateway with call recording."""
    return RecordingGateway(memory_gateway)


@pytest.fixture
def config() -> CoreServiceConfig:
    """Configuration for a version that supports business process types."""
    return CoreServiceConfig(version=CoreServiceVersion.WEB_8_5)


@pytest.fixture
def legacy_config() -> CoreServiceConfig:
    """Configuration for a version without business process types."""
    return CoreServiceConfig(version=CoreServiceVersion.V2013_SP1)


@pytest.fixture
def sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Seeded sandbox project in a temp directory, used as CWD.

    Returns the sandbox JSON path.
    """
    monkeypatch.delenv("TCMCTL_CONFIG", raising=False)
    (tmp_path / "tcmctl.toml").write_text(
        '[core_service]\nbackend = "memory"\nversion = "Web-8.5"\n'
        'sandbox = "sandbox.json"\n'
    )
    path = tmp_path / "sandbox.json"
    seed(MemoryGateway(path=path)).save()
    monkeypatch.chdir(tmp_path)
    return path


class Confirm:
    """Confirmation function that records prompts and returns a fixed answer."""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def __call__(self, action: str) -> bool:
        self.prompts.append(action)
        return self.answer


@pytest.fixture
def approve() -> Confirm:
    return Confirm(True)


@pytest.fixture
def decline() -> Confirm:
    return Confirm(False)
