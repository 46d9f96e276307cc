"""
tests.conftest

Shared fixtures: in-memory telemetry, captured logs, scripted random draws and a fake
sleeper so every checkpoint outcome is deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import pytest
import structlog
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from structlog.testing import LogCapture

from foodme_api.observability.telemetry import Telemetry
from foodme_api.ordering.failures import FailureInjector, FailurePolicy, LatencySimulator
from foodme_api.ordering.metrics import LargeOrderCounter, MetricsRecorder
from foodme_api.ordering.pipeline import OrderPipeline, PaymentPipeline

# Draw values: below every default rate / above every default rate.
HIT = 0.0
MISS = 0.99
ORDER_ID = 1_700_000_000_000


class ScriptedRandom:
    """Returns the scripted draws in order, then MISS forever."""

    def __init__(self, draws: Iterable[float] = ()) -> None:
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self._draws.pop(0) if self._draws else MISS


class ExplodingRandom:
    def __init__(self, message: str = "random source exploded") -> None:
        self.message = message

    def random(self) -> float:
        raise RuntimeError(self.message)


class FakeSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture
def telemetry(span_exporter: InMemorySpanExporter, metric_reader: InMemoryMetricReader) -> Telemetry:
    tracer_provider = TracerProvider()
    tracer_provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return Telemetry(
        tracer_provider=tracer_provider,
        meter_provider=MeterProvider(metric_readers=[metric_reader]),
    )


@pytest.fixture
def log_capture() -> LogCapture:
    return LogCapture()


@pytest.fixture
def bound_log(log_capture: LogCapture):
    return structlog.wrap_logger(
        structlog.PrintLogger(),
        processors=[log_capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    )


@dataclass
class OrderHarness:
    pipeline: OrderPipeline
    rng: ScriptedRandom
    counter: LargeOrderCounter
    sleep: FakeSleep
    policy: FailurePolicy = field(default_factory=FailurePolicy)


@pytest.fixture
def order_harness(telemetry: Telemetry, bound_log):
    def _make(draws: Iterable[float] = (), *, rng=None, policy: FailurePolicy | None = None) -> OrderHarness:
        policy = policy or FailurePolicy()
        source = rng if rng is not None else ScriptedRandom(draws)
        counter = LargeOrderCounter()
        sleep = FakeSleep()
        pipeline = OrderPipeline(
            tracer=telemetry.tracer,
            injector=FailureInjector(policy, source),
            latency=LatencySimulator(delay_ms=3000, async_sleep=sleep),
            metrics=MetricsRecorder(counter, threshold=8),
            log=bound_log,
            clock=lambda: ORDER_ID,
        )
        return OrderHarness(pipeline=pipeline, rng=source, counter=counter, sleep=sleep, policy=policy)

    return _make


@pytest.fixture
def payment_pipeline_factory(telemetry: Telemetry, bound_log):
    def _make(draws: Iterable[float] = (), *, rng=None) -> PaymentPipeline:
        source = rng if rng is not None else ScriptedRandom(draws)
        return PaymentPipeline(
            tracer=telemetry.tracer,
            injector=FailureInjector(FailurePolicy(), source),
            log=bound_log,
        )

    return _make


# --- Module Notes -----------------------------------------------------------
# Pipelines built here never touch global OpenTelemetry or structlog configuration.
