"""
foodme_api.observability.logging

Structured logging configuration for the service.

Responsibilities:
- Configure `structlog` for JSON logs suitable for Loki/ELK ingestion.
- Guarantee trace correlation fields on every record (empty when no span is active).
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, service_version: str, level: str) -> None:
    """
    Structured JSON logs for ingestion in Loki/ELK/Datadog.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    # structlog processors run on each log event; keep this list focused and stable.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service(service_name, service_version),
            add_trace_defaults,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service(service_name: str, service_version: str):
    # Adds stable "service"/"version" fields matching the trace resource attributes.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", service_version)
        return event_dict

    return processor


def add_trace_defaults(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Records emitted outside a span still carry the correlation keys, zero-valued.
    event_dict.setdefault("trace_id", "")
    event_dict.setdefault("span_id", "")
    event_dict.setdefault("trace_flags", 0)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Span-bound fields are attached by `observability.correlation.SpanScope`; request
# metadata is bound via contextvars in `observability.middleware`.
