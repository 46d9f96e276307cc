"""
tests.test_correlation

Span/log correlation fields and the exactly-once span lifecycle.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from opentelemetry import trace
from opentelemetry.trace import StatusCode

from foodme_api.observability.correlation import SpanScope, correlation_fields, traced
from foodme_api.observability.logging import add_trace_defaults


def test_fields_are_empty_without_a_span() -> None:
    empty = {"trace_id": "", "span_id": "", "trace_flags": 0}

    assert correlation_fields(None) == empty
    assert correlation_fields(trace.INVALID_SPAN) == empty


def test_fields_use_hex_ids(telemetry) -> None:
    span = telemetry.tracer.start_span("probe")
    try:
        fields = correlation_fields(span)
    finally:
        span.end()

    ctx = span.get_span_context()
    assert fields["trace_id"] == f"{ctx.trace_id:032x}"
    assert fields["span_id"] == f"{ctx.span_id:016x}"
    assert fields["trace_flags"] == int(ctx.trace_flags)
    assert fields["trace_flags"] & 1 == 1
    assert len(fields["trace_id"]) == 32
    assert len(fields["span_id"]) == 16


def test_trace_defaults_processor_keeps_bound_values() -> None:
    assert add_trace_defaults(None, "info", {"event": "x"}) == {
        "event": "x",
        "trace_id": "",
        "span_id": "",
        "trace_flags": 0,
    }
    assert add_trace_defaults(None, "info", {"trace_id": "abc"})["trace_id"] == "abc"


def test_scope_end_is_idempotent(bound_log) -> None:
    span = MagicMock()
    span.get_span_context.return_value = trace.INVALID_SPAN_CONTEXT
    scope = SpanScope(span, bound_log)

    scope.end()
    scope.end()

    span.end.assert_called_once_with()
    assert scope.ended


def test_traced_ends_span_when_body_raises(telemetry, span_exporter, bound_log) -> None:
    with pytest.raises(KeyError):
        with traced(telemetry.tracer, "boom", bound_log) as scope:
            scope.fail(KeyError("missing"), **{"error.type": "unexpected"})
            raise KeyError("missing")

    (span,) = span_exporter.get_finished_spans()
    assert span.name == "boom"
    assert span.status.status_code == StatusCode.ERROR
    assert span.attributes["error.type"] == "unexpected"


def test_scope_log_is_bound_to_span(telemetry, span_exporter, bound_log, log_capture) -> None:
    with traced(telemetry.tracer, "work", bound_log) as scope:
        scope.log.info("inside")
    bound_log.info("outside")

    (span,) = span_exporter.get_finished_spans()
    inside, outside = log_capture.entries
    assert inside["span_id"] == f"{span.context.span_id:016x}"
    assert "span_id" not in outside


# --- Module Notes -----------------------------------------------------------
# Flag assertions check the sampled bit only; newer SDKs also set the random-trace-id bit.
