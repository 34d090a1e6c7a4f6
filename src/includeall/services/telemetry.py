"""Telemetry for service calls: timing spans and SQL statement tallies.

Off by default; ``-v`` turns it on for the whole invocation. A
``@traced`` service method opens the root span, ``trace_span`` nests
children under whatever span is current, and the finished tree lands in
``ServiceResult.meta["telemetry"]``. When telemetry is off every entry
point costs one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from includeall.services.result import ServiceResult

log = structlog.get_logger("includeall.telemetry")

_enabled: ContextVar[bool] = ContextVar("includeall_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("includeall_span", default=None)


@dataclass
class Span:
    """One timed region of a service call."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        return 0.0 if self.finished is None else (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def child(self, name: str) -> Span:
        span = Span(name=name, parent=self)
        self.children.append(span)
        return span

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            node["annotations"] = dict(self.annotations)
        if self.children:
            node["children"] = [c.to_dict() for c in self.children]
        return node


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, or None when telemetry is off."""
    return _current_span.get() if _enabled.get() else None


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Open a child span of the current span.

    Yields None outside a traced call, so callers guard annotations with
    ``if span:``.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return

    span = parent.child(name)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method; attach the span tree to its ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _current_span.set(root)
        try:
            result = func(*args, **kwargs)
        except Exception:
            root.end()
            log.debug("span.complete", span_name=root.name, ok=False)
            raise
        finally:
            _current_span.reset(token)
        root.end()

        if isinstance(result, ServiceResult):
            meta = dict(result.meta or {})
            meta["telemetry"] = root.to_dict()
            log.debug(
                "span.complete",
                span_name=root.name,
                op=result.op,
                ok=result.ok,
                duration_ms=round(root.duration_ms, 2),
            )
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

        log.debug("span.complete", span_name=root.name, duration_ms=round(root.duration_ms, 2))
        return result

    return wrapper
