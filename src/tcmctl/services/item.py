"""ItemService — read a single item by id."""

from __future__ import annotations

from tcmctl.domain.errors import TcmError
from tcmctl.infrastructure.session import gateway_session
from tcmctl.services.base import BaseService
from tcmctl.services.result import ServiceResult
from tcmctl.services.telemetry import traced


class ItemService(BaseService):
    """Reads arbitrary Core Service items."""

    @traced
    def get_item(self, item_id: str) -> ServiceResult:
        """Return the item with *item_id*, or ``NOT_FOUND`` if it does not exist."""
        op = "get_item"
        try:
            with gateway_session(self._gateway) as handle:
                record = self._read_existing(handle, item_id)
        except TcmError as exc:
            return ServiceResult.failure(op, exc, id=item_id)

        return ServiceResult(ok=True, op=op, data={"item": record.model_dump(mode="json")})
