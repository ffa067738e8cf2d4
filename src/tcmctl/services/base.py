"""BaseService — shared plumbing for tcmctl services.

Every service receives a gateway and the ``[core_service]`` configuration at
construction time. State-changing services also receive a confirmation
function; without one, every state-changing call is declined.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from tcmctl.domain.errors import NotFoundError
from tcmctl.services.telemetry import trace_span

if TYPE_CHECKING:
    from tcmctl.config.models import CoreServiceConfig
    from tcmctl.domain.records import ItemRecord
    from tcmctl.infrastructure.gateway import CoreServiceGateway

ConfirmFn = Callable[[str], bool]

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ItemService(BaseService):
            def get_item(self, item_id: str) -> ServiceResult:
                with gateway_session(self._gateway) as handle:
                    record = self._call("read", handle, item_id)
    """

    def __init__(
        self,
        gateway: CoreServiceGateway | None,
        config: CoreServiceConfig,
        *,
        confirm: ConfirmFn | None = None,
    ) -> None:
        self._gateway = gateway
        self._config = config
        self._confirm_fn = confirm

    def _call(self, name: str, handle: Any, *args: Any, **kwargs: Any) -> Any:
        """Invoke gateway method *name* on *handle*, timed as a child span."""
        method = getattr(self._gateway, name)
        with trace_span(f"gateway.{name}") as span:
            if span is not None and args:
                span.annotate("arg", str(args[0]))
            logger.debug("Core Service call %s%r", name, args)
            return method(handle, *args, **kwargs)

    def _read_existing(self, handle: Any, item_id: str) -> ItemRecord:
        """Read *item_id*, checking existence first.

        Raises:
            NotFoundError: if the item does not exist; no read is issued.
        """
        if not self._call("exists", handle, item_id):
            msg = f"Item {item_id} does not exist"
            raise NotFoundError(msg)
        return self._call("read", handle, item_id)

    def _read_optional(self, handle: Any, item_id: str) -> ItemRecord | None:
        if not self._call("exists", handle, item_id):
            return None
        return self._call("read", handle, item_id)

    def _confirm(self, action: str) -> bool:
        """Ask the injected confirmation function whether *action* may proceed."""
        if self._confirm_fn is None:
            logger.debug("No confirmation function; declining %s", action)
            return False
        return bool(self._confirm_fn(action))
