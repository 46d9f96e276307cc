"""
foodme_api.ordering.metrics

Business metrics for the order pipeline.

Responsibilities:
- Provide an atomic, injectable large-order counter.
- Increment it once per qualifying order, tagged `{type: "large"}`.
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

from opentelemetry import metrics

LARGE_ORDER_ATTRIBUTES = {"type": "large"}


class CounterSink(Protocol):
    def add(self, amount: int, attributes: dict[str, Any] | None = None) -> None: ...


class LargeOrderCounter:
    """
    Process-wide tally with an optional OpenTelemetry counter behind it.
    The lock makes read-modify-write safe when handlers run on worker threads.
    """

    def __init__(self, sink: CounterSink | None = None) -> None:
        self._sink = sink
        self._lock = threading.Lock()
        self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def add(self, amount: int = 1, attributes: dict[str, Any] | None = None) -> None:
        with self._lock:
            self._value += amount
            if self._sink is not None:
                self._sink.add(amount, attributes)


def create_large_order_counter(meter: metrics.Meter) -> LargeOrderCounter:
    sink = meter.create_counter("orders.large", description="Number of large orders")
    return LargeOrderCounter(sink)


class MetricsRecorder:
    def __init__(self, counter: LargeOrderCounter, *, threshold: int = 8) -> None:
        self.counter = counter
        self.threshold = threshold

    def record_large_order(self, item_count: float, log: Any) -> bool:
        if item_count <= self.threshold:
            return False
        self.counter.add(1, dict(LARGE_ORDER_ATTRIBUTES))
        log.info("Large order detected", itemCount=item_count)
        return True
