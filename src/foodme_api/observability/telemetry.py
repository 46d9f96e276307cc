"""
foodme_api.observability.telemetry

OpenTelemetry provider setup.

Responsibilities:
- Build the service `Resource` shared by traces and metrics.
- Create tracer/meter providers, exporting over OTLP gRPC when an endpoint is configured.
- Hand providers to the app explicitly instead of mutating the global OTel state.
"""

from __future__ import annotations

from dataclasses import dataclass

from opentelemetry import metrics, trace
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from foodme_api.observability.logging import get_logger
from foodme_api.settings import Settings

log = get_logger(__name__)

TRACER_NAME = "foodme-order"
METER_NAME = "foodme-metrics"


@dataclass(slots=True)
class Telemetry:
    tracer_provider: TracerProvider
    meter_provider: MeterProvider

    @property
    def tracer(self) -> trace.Tracer:
        return self.tracer_provider.get_tracer(TRACER_NAME)

    @property
    def meter(self) -> metrics.Meter:
        return self.meter_provider.get_meter(METER_NAME)

    def shutdown(self) -> None:
        # Flushes batched spans and the last metric collection.
        self.tracer_provider.shutdown()
        self.meter_provider.shutdown()


def create_resource(settings: Settings) -> Resource:
    return Resource(
        attributes={
            SERVICE_NAME: settings.service_name,
            SERVICE_VERSION: settings.service_version,
            DEPLOYMENT_ENVIRONMENT: settings.env,
        }
    )


def setup_telemetry(
    settings: Settings,
    *,
    metric_readers: list[MetricReader] | None = None,
) -> Telemetry:
    """
    Providers always exist so spans and counters can be recorded; exporters are attached
    only when `settings.otlp_endpoint` is set.
    """

    resource = create_resource(settings)
    readers: list[MetricReader] = list(metric_readers or [])
    tracer_provider = TracerProvider(resource=resource)

    if settings.otlp_endpoint:
        # Imported lazily: the gRPC stack is only needed when exporting.
        from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True))
        )
        readers.append(
            PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=settings.otlp_endpoint, insecure=True),
                export_interval_millis=settings.metrics_export_interval_ms,
            )
        )
        log.info("telemetry_export_enabled", endpoint=settings.otlp_endpoint)
    else:
        log.info("telemetry_export_disabled")

    meter_provider = MeterProvider(resource=resource, metric_readers=readers)
    return Telemetry(tracer_provider=tracer_provider, meter_provider=meter_provider)


# --- Module Notes -----------------------------------------------------------
# Tests build `Telemetry` directly with an in-memory span exporter and metric reader.
