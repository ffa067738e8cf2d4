"""Tests for the in-process JSON sandbox gateway."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tcmctl.domain.errors import CoreServiceConnectionError, NotFoundError
from tcmctl.domain.records import ItemRecord, PublicationFilter, PublicationRecord
from tcmctl.infrastructure.gateway import CoreServiceGateway
from tcmctl.infrastructure.memory import MemoryGateway


class TestProtocol:
    def test_satisfies_gateway_protocol(self, memory_gateway: MemoryGateway) -> None:
        assert isinstance(memory_gateway, CoreServiceGateway)


class TestReads:
    def test_exists(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        assert memory_gateway.exists(handle, "tcm:0-2-1")
        assert not memory_gateway.exists(handle, "tcm:0-99-1")

    def test_read_publication(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        record = memory_gateway.read(handle, "tcm:0-3-1")
        assert isinstance(record, PublicationRecord)
        assert record.parents[0].id == "tcm:0-2-1"

    def test_read_component_keeps_extra_attributes(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        record = memory_gateway.read(handle, "tcm:3-500-16")
        assert not isinstance(record, PublicationRecord)
        assert record.model_dump()["schema"] == "tcm:2-40-8"

    def test_read_missing(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        with pytest.raises(NotFoundError):
            memory_gateway.read(handle, "tcm:0-99-1")

    def test_list_only_publications(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        ids = [r.id for r in memory_gateway.list_by_filter(handle, PublicationFilter())]
        assert ids == ["tcm:0-1-1", "tcm:0-2-1", "tcm:0-3-1", "tcm:0-4-1"]

    def test_list_by_type(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        records = memory_gateway.list_by_filter(handle, PublicationFilter(publication_type="Web"))
        assert [r.title for r in records] == ["030 Website"]

    def test_business_process_types(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        records = memory_gateway.get_business_process_types(handle, "tcm:0-1-65537")
        assert len(records) == 2
        assert memory_gateway.get_business_process_types(handle, "tcm:0-9-65537") == []

    def test_translate_uri(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        assert memory_gateway.translate_uri(handle, "tcm:2-500-16", "tcm:0-4-1") == "tcm:4-500-16"
        assert memory_gateway.translate_uri(handle, "tcm:2-500-16", "tcm:0-4-1", 2) == (
            "tcm:4-500-v2"
        )


class TestWrites:
    def test_create_assigns_next_publication_id(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        created = memory_gateway.create(handle, PublicationRecord(title="040 Mobile"))
        assert created.id == "tcm:0-5-1"
        assert created.title == "040 Mobile"
        assert handle.dirty

    def test_update(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        record = PublicationRecord.model_validate(memory_gateway.items["tcm:0-4-1"])
        record.publication_url = "/en"
        updated = memory_gateway.update(handle, record)
        assert updated.publication_url == "/en"  # type: ignore[attr-defined]

    def test_update_missing(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        with pytest.raises(NotFoundError):
            memory_gateway.update(handle, ItemRecord(id="tcm:0-99-1"))


class TestSessions:
    def test_closed_handle_rejected(self, memory_gateway: MemoryGateway) -> None:
        handle = memory_gateway.open_session()
        memory_gateway.close_session(handle)
        with pytest.raises(CoreServiceConnectionError):
            memory_gateway.exists(handle, "tcm:0-1-1")

    def test_sessions_are_numbered(self, memory_gateway: MemoryGateway) -> None:
        first = memory_gateway.open_session()
        second = memory_gateway.open_session()
        assert second.number == first.number + 1


class TestPersistence:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        gateway = MemoryGateway.from_file(tmp_path / "none.json")
        assert gateway.items == {}
        assert gateway.path == tmp_path / "none.json"

    def test_dirty_session_saves_on_close(self, tmp_path: Path) -> None:
        path = tmp_path / "sandbox" / "store.json"
        gateway = MemoryGateway(path=path)
        handle = gateway.open_session()
        gateway.create(handle, PublicationRecord(title="Master"))
        assert not path.exists()
        gateway.close_session(handle)

        raw = json.loads(path.read_text(encoding="utf-8"))
        assert raw["items"][0]["id"] == "tcm:0-1-1"

    def test_clean_session_does_not_save(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        gateway = MemoryGateway(path=path)
        handle = gateway.open_session()
        gateway.exists(handle, "tcm:0-1-1")
        gateway.close_session(handle)
        assert not path.exists()

    def test_reload(self, tmp_path: Path, memory_gateway: MemoryGateway) -> None:
        memory_gateway.path = tmp_path / "store.json"
        memory_gateway.save()

        loaded = MemoryGateway.from_file(tmp_path / "store.json")
        assert loaded.items.keys() == memory_gateway.items.keys()
        assert loaded.business_process_types == memory_gateway.business_process_types
