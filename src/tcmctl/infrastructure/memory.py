"""MemoryGateway — in-process Core Service stand-in backed by a JSON sandbox.

Serves the ``memory`` backend. Items live in a dict keyed by TCM URI.
When constructed with a sandbox path, the store is loaded from that file
and written back when a session that changed something is closed.

Sandbox file layout::

    {
      "items": [{"id": "tcm:0-5-1", "title": "Master", ...}, ...],
      "business_process_types": {"tcm:0-1-65537": [{"id": ..., "title": ...}]}
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tcmctl.domain.errors import CoreServiceConnectionError, NotFoundError
from tcmctl.domain.records import ItemRecord, PublicationFilter, PublicationRecord
from tcmctl.domain.uri import PUBLICATION_KIND, TcmUri, parse, rewrite_publication

logger = logging.getLogger(__name__)


@dataclass
class MemorySession:
    """Handle returned by :meth:`MemoryGateway.open_session`."""

    number: int
    open: bool = True
    dirty: bool = False

    def __repr__(self) -> str:
        return f"<MemorySession #{self.number}{'' if self.open else ' closed'}>"


def _is_publication_id(item_id: str) -> bool:
    try:
        return parse(item_id).is_publication
    except ValueError:
        return False


@dataclass
class MemoryGateway:
    """Dict-backed gateway with optional JSON persistence."""

    items: dict[str, dict[str, Any]] = field(default_factory=dict)
    business_process_types: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    path: Path | None = None
    _sessions: int = field(default=0, repr=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: Path) -> MemoryGateway:
        """Load a sandbox file. A missing file yields an empty store bound to *path*."""
        if not path.is_file():
            logger.debug("Sandbox %s does not exist yet; starting empty", path)
            return cls(path=path)
        raw = json.loads(path.read_text(encoding="utf-8"))
        gateway = cls(
            business_process_types={
                str(k): list(v) for k, v in raw.get("business_process_types", {}).items()
            },
            path=path,
        )
        for item in raw.get("items", []):
            gateway.add(item)
        return gateway

    def add(self, item: dict[str, Any] | ItemRecord) -> None:
        """Seed the store with *item* (no session required)."""
        data = item.model_dump(mode="json") if isinstance(item, ItemRecord) else dict(item)
        self.items[str(data["id"])] = data

    def save(self) -> None:
        if self.path is None:
            return
        payload = {
            "items": list(self.items.values()),
            "business_process_types": self.business_process_types,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved sandbox %s (%d items)", self.path, len(self.items))

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def open_session(self) -> MemorySession:
        self._sessions += 1
        return MemorySession(number=self._sessions)

    def close_session(self, handle: MemorySession) -> None:
        if handle.dirty:
            self.save()
        handle.open = False

    # ------------------------------------------------------------------
    # Remote calls
    # ------------------------------------------------------------------

    def exists(self, handle: MemorySession, item_id: str) -> bool:
        self._check(handle)
        return item_id in self.items

    def read(self, handle: MemorySession, item_id: str) -> ItemRecord:
        self._check(handle)
        data = self.items.get(item_id)
        if data is None:
            msg = f"Item {item_id} does not exist"
            raise NotFoundError(msg)
        return self._to_record(data)

    def list_by_filter(self, handle: MemorySession, flt: PublicationFilter) -> list[ItemRecord]:
        self._check(handle)
        records: list[ItemRecord] = []
        for item_id, data in self.items.items():
            if not _is_publication_id(item_id):
                continue
            if flt.publication_type and data.get("publication_type") != flt.publication_type:
                continue
            records.append(PublicationRecord.model_validate(data))
        return records

    def create(self, handle: MemorySession, record: ItemRecord) -> ItemRecord:
        self._check(handle)
        next_id = 1 + max(
            (parse(i).item_id for i in self.items if _is_publication_id(i)),
            default=0,
        )
        new_id = str(TcmUri(0, next_id, PUBLICATION_KIND))
        stored = record.model_copy(update={"id": new_id})
        self.add(stored)
        handle.dirty = True
        return self._to_record(self.items[new_id])

    def update(self, handle: MemorySession, record: ItemRecord) -> ItemRecord:
        self._check(handle)
        if record.id not in self.items:
            msg = f"Item {record.id} does not exist"
            raise NotFoundError(msg)
        self.add(record)
        handle.dirty = True
        return self._to_record(self.items[record.id])

    def get_business_process_types(
        self, handle: MemorySession, topology_type_id: str
    ) -> list[ItemRecord]:
        self._check(handle)
        return [
            ItemRecord.model_validate(data)
            for data in self.business_process_types.get(topology_type_id, [])
        ]

    def translate_uri(
        self,
        handle: MemorySession,
        item_id: str,
        target_publication_id: str,
        version: int | None = None,
    ) -> str:
        self._check(handle)
        return rewrite_publication(item_id, target_publication_id, version)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _check(handle: MemorySession) -> None:
        if not handle.open:
            msg = f"{handle!r} is closed"
            raise CoreServiceConnectionError(msg)

    @staticmethod
    def _to_record(data: dict[str, Any]) -> ItemRecord:
        if _is_publication_id(str(data.get("id", ""))):
            return PublicationRecord.model_validate(data)
        return ItemRecord.model_validate(data)
