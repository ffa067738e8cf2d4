"""PublicationService — list, create, and update publications.

Create/update pipeline: GATE → STAGE → MERGE → CONFIRM → SUBMIT
"""

from __future__ import annotations

import logging
from typing import Any

from tcmctl.domain.errors import FormatError, TcmError
from tcmctl.domain.records import (
    ItemRecord,
    PublicationFields,
    PublicationFilter,
    PublicationRecord,
)
from tcmctl.domain.uri import is_tcm_uri, parse
from tcmctl.infrastructure.session import gateway_session
from tcmctl.services.base import BaseService
from tcmctl.services.business_process import unsupported_business_process_types
from tcmctl.services.merge import apply_fields
from tcmctl.services.result import ServiceError, ServiceResult
from tcmctl.services.telemetry import traced

logger = logging.getLogger(__name__)


class PublicationService(BaseService):
    """Publication listing and state-changing publication operations."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    def list_publications(self, type_filter: str | None = None) -> ServiceResult:
        """List publications, optionally only those of *type_filter* (e.g. ``"Web"``)."""
        op = "list_publications"
        flt = PublicationFilter(publication_type=type_filter or None)
        try:
            with gateway_session(self._gateway) as handle:
                records = self._call("list_by_filter", handle, flt)
        except TcmError as exc:
            return ServiceResult.failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "publication_type": flt.publication_type,
                "count": len(records),
                "items": [r.model_dump(mode="json") for r in records],
            },
        )

    @traced
    def create_publication(self, fields: PublicationFields) -> ServiceResult:
        """Create a publication from *fields* after confirmation."""
        op = "create_publication"
        if not fields.title:
            return _validation_failed(op, "A title is required to create a publication")

        issues: list[ServiceError] = []
        fields = self._gate_business_process_type(fields, issues)
        record = PublicationRecord.default()

        try:
            with gateway_session(self._gateway) as handle:
                issues.extend(self._merge(handle, record, fields))
                if not self._confirm(f"Create publication {record.title!r}"):
                    return _cancelled(op, record.id, issues)
                created = self._call("create", handle, record)
        except TcmError as exc:
            return ServiceResult.failure(op, exc, issues=issues)

        logger.info("Created publication %s (%s)", created.id, created.title)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": created.id, "item": created.model_dump(mode="json")},
            issues=issues,
        )

    @traced
    def update_publication(self, item_id: str, fields: PublicationFields) -> ServiceResult:
        """Read publication *item_id*, merge *fields* onto it, and save after confirmation.

        When ``fields.parents`` is given, it replaces the existing parents.
        """
        op = "update_publication"
        if fields.is_empty():
            return _validation_failed(op, "No changes specified")

        try:
            if is_tcm_uri(item_id) and not parse(item_id).is_publication:
                msg = f"Not a publication URI: {item_id}"
                raise FormatError(msg)
        except FormatError as exc:
            return ServiceResult.failure(op, exc, id=item_id)

        issues: list[ServiceError] = []
        fields = self._gate_business_process_type(fields, issues)

        try:
            with gateway_session(self._gateway) as handle:
                existing = self._read_existing(handle, item_id)
                record = PublicationRecord.model_validate(existing.model_dump())
                issues.extend(self._merge(handle, record, fields))
                if not self._confirm(f"Update publication {record.id} ({record.title})"):
                    return _cancelled(op, record.id, issues)
                updated = self._call("update", handle, record)
        except TcmError as exc:
            return ServiceResult.failure(op, exc, issues=issues, id=item_id)

        logger.info("Updated publication %s", updated.id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": updated.id,
                "fields_changed": _fields_changed(fields),
                "item": updated.model_dump(mode="json"),
            },
            issues=issues,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _gate_business_process_type(
        self, fields: PublicationFields, issues: list[ServiceError]
    ) -> PublicationFields:
        """Drop the business process type when the configured version lacks support."""
        version = self._config.version
        if not fields.business_process_type or version.supports_business_process_types:
            return fields
        issues.append(
            ServiceError.from_exception(
                unsupported_business_process_types(version),
                field="business_process_type",
            )
        )
        return fields.model_copy(update={"business_process_type": None})

    def _merge(
        self, handle: Any, record: PublicationRecord, fields: PublicationFields
    ) -> list[ServiceError]:
        def list_publications() -> list[ItemRecord]:
            return self._call("list_by_filter", handle, PublicationFilter())

        def read_item(item_id: str) -> ItemRecord | None:
            return self._read_optional(handle, item_id)

        return apply_fields(
            record,
            fields,
            list_publications=list_publications,
            read_item=read_item,
        )


def _fields_changed(fields: PublicationFields) -> list[str]:
    changed = [name for name, value in fields.model_dump().items() if value]
    if fields.title and not fields.key:
        changed.append("key")
    if fields.parents is not None and "parents" not in changed:
        changed.append("parents")
    return changed


def _validation_failed(op: str, message: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="VALIDATION_FAILED", message=message),
    )


def _cancelled(op: str, item_id: str, issues: list[ServiceError]) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="CANCELLED",
            message="Operation was not confirmed",
            detail={"id": item_id},
        ),
        issues=issues,
    )
