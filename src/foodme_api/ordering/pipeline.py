"""
foodme_api.ordering.pipeline

Order and payment pipelines.

Responsibilities:
- Drive validation, accumulation and the failure checkpoints in their fixed order.
- Mirror every decision into span attributes/status and a correlated log record.
- Return a tagged outcome; nothing raises past the pipeline boundary.
"""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from opentelemetry import trace

from foodme_api.observability.correlation import SpanScope, traced
from foodme_api.observability.logging import get_logger
from foodme_api.ordering.accumulator import accumulate
from foodme_api.ordering.errors import (
    DependencyTimeoutError,
    InvalidLineItemError,
    InventoryError,
    ItemLimitError,
    PaymentGatewayError,
    ValidationError,
)
from foodme_api.ordering.failures import FailureInjector, LatencySimulator
from foodme_api.ordering.metrics import MetricsRecorder
from foodme_api.ordering.outcomes import Accepted, Failed, OrderResult, Outcome, Rejected


def _epoch_millis() -> int:
    return int(time.time() * 1000)


class _Pipeline:
    span_name: str
    failure_message: str

    def __init__(self, *, tracer: trace.Tracer, injector: FailureInjector, log: Any | None) -> None:
        self._tracer = tracer
        self._injector = injector
        self._log = log if log is not None else get_logger(__name__)

    async def _run(
        self,
        payload: Mapping[str, Any],
        handler: Callable[[Mapping[str, Any], SpanScope], Awaitable[Outcome]],
    ) -> Outcome:
        with traced(self._tracer, self.span_name, self._log) as scope:
            try:
                return await handler(payload, scope)
            except Exception as e:
                # Safety net: record, log and convert; the span is ended by `traced`.
                scope.fail(e, **{"error.type": "unexpected"})
                scope.log.error(self.failure_message, error=str(e), exc_info=True)
                return Failed(message=str(e))


class OrderPipeline(_Pipeline):
    """
    Received -> Validating -> Accumulating -> CheckingInventory -> CheckingDependency
    -> RecordingMetrics -> InjectingLatency -> CheckingItemLimit -> Accepted.

    The first rejecting checkpoint short-circuits the rest.
    """

    span_name = "process.order"
    failure_message = "Unexpected error while processing order"

    def __init__(
        self,
        *,
        tracer: trace.Tracer,
        injector: FailureInjector,
        latency: LatencySimulator,
        metrics: MetricsRecorder,
        log: Any | None = None,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        super().__init__(tracer=tracer, injector=injector, log=log)
        self._latency = latency
        self._metrics = metrics
        self._clock = clock

    async def place(self, payload: Mapping[str, Any]) -> Outcome:
        return await self._run(payload, self._place)

    async def _place(self, payload: Mapping[str, Any], scope: SpanScope) -> Outcome:
        items = payload.get("items")
        if not isinstance(items, list) or not items:
            err = ValidationError("items[] is required")
            scope.fail(err, **{"error.type": err.error_type})
            scope.log.warning("Order validation failed", order=dict(payload))
            return Rejected(err)

        try:
            acc = accumulate(items)
        except InvalidLineItemError as err:
            scope.fail(err, **{"error.type": err.error_type, "order.item_index": err.index})
            scope.log.error("Invalid order item data", item=err.item, index=err.index)
            return Rejected(err)

        item_count, order_total = acc.item_count, acc.order_total
        scope.annotate(itemCount=item_count, orderTotal=order_total)

        policy = self._injector.policy
        if self._injector.inventory_shortage(item_count):
            err = InventoryError(available_stock=policy.available_stock, requested=item_count)
            scope.fail(
                err,
                **{
                    "error.type": err.error_type,
                    "inventory.available": err.available_stock,
                    "inventory.requested": err.requested,
                },
            )
            scope.log.warning(
                "Order rejected due to insufficient inventory",
                itemCount=err.requested,
                availableStock=err.available_stock,
                orderTotal=order_total,
            )
            return Rejected(err)

        if self._injector.dependency_timeout():
            err = DependencyTimeoutError(timeout_ms=policy.dependency_timeout_ms)
            scope.fail(
                err,
                **{
                    "error.type": err.error_type,
                    "dependency.name": err.dependency,
                    "dependency.timeout_ms": err.timeout_ms,
                },
            )
            scope.log.error("Inventory service timeout", itemCount=item_count, orderTotal=order_total)
            return Rejected(err)

        self._metrics.record_large_order(item_count, scope.log)

        if self._injector.slow_dependency():
            scope.log.info(
                "Simulating slow external dependency",
                delay_ms=self._latency.delay_ms,
                mode=self._latency.mode,
            )
            scope.annotate(**{"latency.injected_ms": self._latency.delay_ms})
            await self._latency.hold()

        if self._injector.exceeds_item_limit(item_count):
            err = ItemLimitError(limit=policy.item_limit, requested=item_count)
            scope.fail(
                err,
                **{
                    "error.type": err.error_type,
                    "order.item_limit": err.limit,
                    "order.items_requested": err.requested,
                },
            )
            scope.log.error(
                "Order rejected: too many items", itemCount=err.requested, limit=err.limit
            )
            return Rejected(err)

        order = OrderResult(order_id=self._clock(), total=order_total)
        scope.annotate(**{"order.id": order.order_id})
        scope.log.info(
            "Order successfully placed",
            orderId=order.order_id,
            itemCount=item_count,
            orderTotal=order_total,
            restaurant=payload.get("restaurant"),
        )
        return Accepted(order.body())


class PaymentPipeline(_Pipeline):
    """
    Received -> CheckingGateway -> Accepted | Rejected(gateway).
    """

    span_name = "process.payment"
    failure_message = "Unexpected error while processing payment"

    def __init__(
        self,
        *,
        tracer: trace.Tracer,
        injector: FailureInjector,
        log: Any | None = None,
    ) -> None:
        super().__init__(tracer=tracer, injector=injector, log=log)

    async def pay(self, payload: Mapping[str, Any]) -> Outcome:
        return await self._run(payload, self._pay)

    async def _pay(self, payload: Mapping[str, Any], scope: SpanScope) -> Outcome:
        amount = payload.get("amount")
        if self._injector.payment_gateway_timeout():
            err = PaymentGatewayError()
            scope.fail(
                err,
                **{"error.type": err.error_type, "dependency.name": "payment-gateway"},
            )
            scope.log.error("Payment failed", error=err.message, amount=amount)
            return Rejected(err)

        scope.annotate(paymentStatus="SUCCESS")
        scope.log.info("Payment successful", amount=amount)
        return Accepted({"status": "PAID"})


# --- Module Notes -----------------------------------------------------------
# Control flow is a function of (payload, random draws): inject a scripted random source
# into FailureInjector to pin every checkpoint in tests.
