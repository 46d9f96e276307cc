"""
foodme_api.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- OpenTelemetry tracer/meter providers.
- Trace/log correlation for the order and payment pipelines.
- Request context propagation for consistent log enrichment.
"""

# Package marker.
