"""Timing for service operations and the gateway calls they make.

Off by default. ``--verbose`` turns it on: each ``@traced`` service method
opens a root span, each ``trace_span`` inside it (one per gateway call)
becomes a child, and the finished tree is attached to
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from tcmctl.services.result import ServiceResult

log = structlog.get_logger("tcmctl.telemetry")

# Gateway calls slower than this are logged as warnings.
SLOW_CALL_MS = 1000.0

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("_active_span", default=None)


@dataclass
class Span:
    """One timed unit of work; children are the calls made inside it."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    @property
    def remote_ms(self) -> float:
        """Time spent inside child spans, i.e. waiting on the gateway."""
        return sum(child.duration_ms for child in self.children)

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["remote_ms"] = round(self.remote_ms, 2)
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time the enclosed block as a child of the active span.

    Yields None when telemetry is off or no ``@traced`` call is running.
    An exception escaping the block is recorded as an ``error`` annotation.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name)
    parent.children.append(span)
    token = _active.set(span)
    try:
        yield span
    except Exception as exc:
        span.annotate("error", type(exc).__name__)
        raise
    finally:
        span.end()
        _active.reset(token)
        if span.duration_ms > SLOW_CALL_MS:
            log.warning("span.slow", span_name=name, duration_ms=round(span.duration_ms, 2))


_P = ParamSpec("_P")
_R = TypeVar("_R")


def _with_telemetry(result: ServiceResult, span: Span) -> ServiceResult:
    return result.model_copy(update={"meta": {**(result.meta or {}), "telemetry": span.to_dict()}})


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Run *func* under a root span and attach the tree to a returned ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _active.set(root)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            root.annotate("error", type(exc).__name__)
            raise
        finally:
            root.end()
            _active.reset(token)
            log.debug(
                "span.complete",
                span_name=root.name,
                duration_ms=round(root.duration_ms, 2),
                remote_ms=round(root.remote_ms, 2),
                calls=len(root.children),
            )

        if isinstance(result, ServiceResult):
            return _with_telemetry(result, root)  # type: ignore[return-value]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn timing on for the current context (``--verbose``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
