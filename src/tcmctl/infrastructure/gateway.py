"""CoreServiceGateway — the contract every Core Service transport implements.

Gateways are session-oriented: callers open a handle, issue calls against
it, and close it. Handles are never shared between operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tcmctl.domain.records import ItemRecord, PublicationFilter


@runtime_checkable
class CoreServiceGateway(Protocol):
    """Remote Core Service client, one method per remote call."""

    def open_session(self) -> Any:
        """Open a session and return its handle."""
        ...

    def close_session(self, handle: Any) -> None: ...

    def exists(self, handle: Any, item_id: str) -> bool: ...

    def read(self, handle: Any, item_id: str) -> ItemRecord: ...

    def list_by_filter(self, handle: Any, flt: PublicationFilter) -> list[ItemRecord]: ...

    def create(self, handle: Any, record: ItemRecord) -> ItemRecord: ...

    def update(self, handle: Any, record: ItemRecord) -> ItemRecord: ...

    def get_business_process_types(
        self, handle: Any, topology_type_id: str
    ) -> list[ItemRecord]: ...

    def translate_uri(
        self,
        handle: Any,
        item_id: str,
        target_publication_id: str,
        version: int | None = None,
    ) -> str:
        """Return *item_id* expressed in the namespace of the target publication."""
        ...
