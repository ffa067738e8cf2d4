"""Tests for call timing spans."""

from __future__ import annotations

from typing import Any

import pytest

from tcmctl.config.models import CoreServiceConfig
from tcmctl.domain.errors import NotFoundError
from tcmctl.services.item import ItemService
from tcmctl.services.result import ServiceResult
from tcmctl.services.telemetry import Span, enable_telemetry, trace_span, traced


class TestSpan:
    def test_to_dict(self) -> None:
        span = Span(name="root")
        child = Span(name="gateway.read")
        child.annotate("arg", "tcm:0-1-1")
        child.end()
        span.children.append(child)
        span.end()

        data = span.to_dict()
        assert data["name"] == "root"
        assert data["children"][0]["annotations"] == {"arg": "tcm:0-1-1"}
        assert data["duration_ms"] >= 0

    def test_unfinished_duration(self) -> None:
        assert Span(name="x").duration_ms == 0.0


class TestTraced:
    def test_disabled_leaves_meta_alone(self, gateway: Any, config: CoreServiceConfig) -> None:
        result = ItemService(gateway, config).get_item("tcm:3-500-16")
        assert result.meta is None

    def test_trace_span_without_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("orphan") as span:
            assert span is None

    def test_enabled_records_gateway_calls(
        self, gateway: Any, config: CoreServiceConfig
    ) -> None:
        enable_telemetry()
        result = ItemService(gateway, config).get_item("tcm:3-500-16")

        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "ItemService.get_item"
        assert [c["name"] for c in tree["children"]] == ["gateway.exists", "gateway.read"]
        assert tree["children"][0]["annotations"] == {"arg": "tcm:3-500-16"}

    def test_non_result_return_passes_through(self) -> None:
        enable_telemetry()

        @traced
        def answer() -> int:
            return 42

        assert answer() == 42

    def test_failed_result_still_traced(self, gateway: Any, config: CoreServiceConfig) -> None:
        enable_telemetry()
        result = ItemService(gateway, config).get_item("tcm:3-999-16")
        assert isinstance(result, ServiceResult)
        assert not result.ok
        assert result.meta is not None
        assert len(result.meta["telemetry"]["children"]) == 1

    def test_remote_time_summed(self, gateway: Any, config: CoreServiceConfig) -> None:
        enable_telemetry()
        result = ItemService(gateway, config).get_item("tcm:3-500-16")
        tree = result.meta["telemetry"]  # type: ignore[index]
        assert tree["remote_ms"] == pytest.approx(
            sum(c["duration_ms"] for c in tree["children"]), abs=0.05
        )

    def test_failed_call_annotated(self) -> None:
        enable_telemetry()

        @traced
        def lookup() -> ServiceResult:
            try:
                with trace_span("gateway.read"):
                    raise NotFoundError("gone")
            except NotFoundError as exc:
                return ServiceResult.failure("get_item", exc)

        tree = lookup().meta["telemetry"]  # type: ignore[index]
        assert tree["children"][0]["annotations"] == {"error": "NotFoundError"}

    def test_unexpected_exception_propagates(
        self, gateway: Any, config: CoreServiceConfig
    ) -> None:
        enable_telemetry()
        gateway.fail_on["read"] = RuntimeError("wire fault")
        with pytest.raises(RuntimeError, match="wire fault"):
            ItemService(gateway, config).get_item("tcm:3-500-16")
        assert gateway.closed == 1
