"""Span timing for service calls, enabled by ``--verbose``.

When enabled, each ``@traced`` service method opens a span. Calls made
while a span is open (another traced method, or a ``trace_span`` block)
become its children. The outermost traced call attaches the finished
tree to ``ServiceResult.meta["telemetry"]``.

Disabled cost is one ContextVar read per call. Spans live in
ContextVars, so work submitted to a thread pool is not traced
individually; wrap the whole pool in one span instead.
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

from provcheck.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("provcheck_telemetry_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("provcheck_current_span", default=None)

_log = structlog.get_logger("provcheck.telemetry")


@dataclass
class Span:
    """One timed region with child spans and free-form annotations."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def _open_span(name: str) -> Iterator[Span]:
    parent = _current_span.get()
    span = Span(name=name, parent=parent)
    if parent is not None:
        parent.children.append(span)
    token = _current_span.set(span)
    try:
        yield span
    finally:
        if span.end_time is None:
            span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a block as a child of the active span.

    Yields None when telemetry is off or no traced call is active.
    """
    if not _enabled.get() or _current_span.get() is None:
        yield None
        return
    with _open_span(name) as span:
        yield span


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method; the outermost call puts the span tree into meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        is_root = _current_span.get() is None
        ok = False
        with _open_span(func.__qualname__) as span:
            try:
                result = func(*args, **kwargs)
                ok = True
            finally:
                span.end()
                _log.debug(
                    "span.complete",
                    span_name=span.name,
                    duration_ms=round(span.duration_ms, 2),
                    ok=ok,
                    children=len(span.children),
                )

        if is_root and isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn span collection on for the current context."""
    _enabled.set(True)


def disable_telemetry() -> None:
    """Turn span collection off for the current context."""
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The active span, for manual annotation. None when telemetry is off."""
    if not _enabled.get():
        return None
    return _current_span.get()
