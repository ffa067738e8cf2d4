"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and any future interface consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from tcmctl.domain.errors import TcmError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: TcmError, **detail: Any) -> ServiceError:
        return cls(code=exc.code, message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_publication"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal notes encountered during the operation.
        issues: Non-fatal errors reported per entry (unresolved parent
            titles, unsupported fields). The operation still ran.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    issues: list[ServiceError] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        exc: TcmError,
        *,
        issues: list[ServiceError] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result from a taxonomy exception."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError.from_exception(exc, **detail),
            issues=issues or [],
        )
