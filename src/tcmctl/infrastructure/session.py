"""Session lifecycle around a single command operation.

:func:`gateway_session` acquires one handle and guarantees it is released
on every exit path, including when the body raises.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from tcmctl.domain.errors import CoreServiceConnectionError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tcmctl.infrastructure.gateway import CoreServiceGateway

logger = logging.getLogger(__name__)


@contextmanager
def gateway_session(gateway: CoreServiceGateway | None) -> Iterator[Any]:
    """Open a session on *gateway*, yield the handle, and always close it.

    Raises:
        CoreServiceConnectionError: if there is no gateway or the session
            cannot be opened. The handle is never yielded in that case.
    """
    if gateway is None:
        msg = "No Core Service gateway configured"
        raise CoreServiceConnectionError(msg)
    try:
        handle = gateway.open_session()
    except CoreServiceConnectionError:
        raise
    except Exception as exc:
        msg = f"Could not open Core Service session: {exc}"
        raise CoreServiceConnectionError(msg) from exc

    logger.debug("Opened Core Service session %r", handle)
    try:
        yield handle
    finally:
        try:
            gateway.close_session(handle)
        except Exception:
            logger.warning("Failed to close Core Service session %r", handle, exc_info=True)
        else:
            logger.debug("Closed Core Service session %r", handle)
