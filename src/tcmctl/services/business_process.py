"""BusinessProcessService — business process types per topology type."""

from __future__ import annotations

from tcmctl.domain.errors import TcmError, UnsupportedOperationError
from tcmctl.domain.versions import CoreServiceVersion
from tcmctl.infrastructure.session import gateway_session
from tcmctl.services.base import BaseService
from tcmctl.services.result import ServiceResult
from tcmctl.services.telemetry import traced


def unsupported_business_process_types(version: CoreServiceVersion) -> UnsupportedOperationError:
    return UnsupportedOperationError(
        f"Business process types require Core Service {CoreServiceVersion.WEB_8_1} "
        f"or later (configured: {version})"
    )


class BusinessProcessService(BaseService):
    """Lists business process types; gated on the configured version."""

    @traced
    def list_types(self, topology_type_id: str) -> ServiceResult:
        op = "list_business_process_types"
        version = self._config.version
        if not version.supports_business_process_types:
            return ServiceResult.failure(op, unsupported_business_process_types(version))

        try:
            with gateway_session(self._gateway) as handle:
                records = self._call("get_business_process_types", handle, topology_type_id)
        except TcmError as exc:
            return ServiceResult.failure(op, exc, topology_type_id=topology_type_id)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "topology_type_id": topology_type_id,
                "count": len(records),
                "items": [r.model_dump(mode="json") for r in records],
            },
        )
