"""
foodme_api.observability.correlation

Trace/log correlation for pipeline invocations.

Responsibilities:
- Derive correlation identifiers (trace id, span id, flags) from an explicit span handle.
- Record attributes, exceptions and error status on the span.
- End each span exactly once, on every exit path.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, format_span_id, format_trace_id


def correlation_fields(span: Span | None) -> dict[str, Any]:
    """
    Log fields linking a record to `span`. Invalid/absent spans yield empty ids and
    zero flags so the keys are always present.
    """

    ctx = span.get_span_context() if span is not None else trace.INVALID_SPAN_CONTEXT
    if not ctx.is_valid:
        return {"trace_id": "", "span_id": "", "trace_flags": 0}
    return {
        "trace_id": format_trace_id(ctx.trace_id),
        "span_id": format_span_id(ctx.span_id),
        "trace_flags": int(ctx.trace_flags),
    }


class SpanScope:
    """
    Owns one span for the lifetime of a pipeline invocation.

    `log` is bound to the span's correlation fields, so every record emitted through it
    can be joined with the trace.
    """

    def __init__(self, span: Span, log: Any) -> None:
        self.span = span
        self.log = log.bind(**correlation_fields(span))
        self._ended = False

    @property
    def ended(self) -> bool:
        return self._ended

    def annotate(self, **attributes: Any) -> None:
        self.span.set_attributes(attributes)

    def fail(self, error: BaseException, **attributes: Any) -> None:
        self.span.record_exception(error)
        self.span.set_status(Status(StatusCode.ERROR, str(error)))
        if attributes:
            self.span.set_attributes(attributes)

    def end(self) -> None:
        if self._ended:
            return
        self._ended = True
        self.span.end()


@contextmanager
def traced(tracer: trace.Tracer, name: str, log: Any | None = None) -> Iterator[SpanScope]:
    # The span is not made "current"; callers thread the scope explicitly.
    span = tracer.start_span(name)
    scope = SpanScope(span, log if log is not None else structlog.get_logger(__name__))
    try:
        yield scope
    finally:
        scope.end()


# --- Module Notes -----------------------------------------------------------
# `tracer.start_span` still parents on the ambient context, so a server span created by
# the FastAPI instrumentation becomes the parent of `process.order`/`process.payment`.
