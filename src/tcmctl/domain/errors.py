"""Error taxonomy shared by the domain, gateway, and service layers.

Each exception carries a stable ``code`` that the service layer copies
into :class:`~tcmctl.services.result.ServiceError` when converting a
raised error into a failed ``ServiceResult``.
"""

from __future__ import annotations


class TcmError(Exception):
    """Base exception for all tcmctl errors."""

    code = "TCM_ERROR"


class FormatError(TcmError, ValueError):
    """A TCM URI or publication reference is malformed."""

    code = "FORMAT_ERROR"


class NotFoundError(TcmError):
    """An identifier or title does not resolve to a remote object."""

    code = "NOT_FOUND"


class UnsupportedOperationError(TcmError):
    """The configured Core Service version does not provide this feature."""

    code = "UNSUPPORTED_OPERATION"


class CoreServiceConnectionError(TcmError, ConnectionError):
    """A gateway session could not be established."""

    code = "CONNECTION_ERROR"
