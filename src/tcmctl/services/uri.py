"""UriService — TCM URI inspection and cross-publication translation."""

from __future__ import annotations

from tcmctl.domain.errors import FormatError, TcmError
from tcmctl.domain.uri import normalize_publication, normalize_version, parse, rewrite_publication
from tcmctl.infrastructure.session import gateway_session
from tcmctl.services.base import BaseService
from tcmctl.services.result import ServiceResult
from tcmctl.services.telemetry import traced


class UriService(BaseService):
    """Translates item URIs between publications."""

    @traced
    def translate(
        self,
        item_id: str,
        target_publication: str | int,
        version: int | str | None = None,
        *,
        offline: bool = False,
    ) -> ServiceResult:
        """Express *item_id* in the namespace of *target_publication*.

        The Core Service performs the translation unless *offline* is set,
        in which case the local rewrite is the answer and no session is opened.
        A bare publication id is normalized to ``tcm:0-<id>-1`` first, and input
        the local rewrite rejects never reaches the gateway.
        """
        op = "translate_uri"
        try:
            source = parse(item_id)
            target = normalize_publication(target_publication)
            requested = normalize_version(version)
            translated = rewrite_publication(source, target, requested)
        except FormatError as exc:
            return ServiceResult.failure(op, exc, id=item_id)

        publication = str(target)
        if not offline:
            try:
                with gateway_session(self._gateway) as handle:
                    translated = self._call(
                        "translate_uri", handle, item_id, publication, requested
                    )
            except TcmError as exc:
                return ServiceResult.failure(op, exc, id=item_id)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": item_id,
                "publication": publication,
                "version": requested,
                "translated": translated,
            },
        )

    def describe(self, item_id: str) -> ServiceResult:
        """Split *item_id* into its components (local only)."""
        op = "parse_uri"
        try:
            uri = parse(item_id)
        except FormatError as exc:
            return ServiceResult.failure(op, exc, id=item_id)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": str(uri),
                "publication_id": uri.publication_id,
                "item_id": uri.item_id,
                "item_kind": uri.item_kind,
                "version": uri.version,
                "is_publication": uri.is_publication,
                "is_null": uri.is_null,
            },
        )
