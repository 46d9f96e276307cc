"""
foodme_api.ordering.failures

Synthetic failure and latency injection.

Responsibilities:
- Evaluate the probability-gated checkpoints (inventory, dependency, latency, payment).
- Evaluate the deterministic item-limit checkpoint.
- Hold a request for the configured latency, cooperatively or process-wide.
"""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal, Protocol

from foodme_api.settings import Settings


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True, slots=True)
class FailurePolicy:
    inventory_failure_rate: float = 0.20
    dependency_failure_rate: float = 0.15
    latency_rate: float = 0.20
    payment_failure_rate: float = 0.15
    available_stock: int = 5
    item_limit: int = 11
    dependency_timeout_ms: int = 3000

    @classmethod
    def from_settings(cls, settings: Settings) -> FailurePolicy:
        return cls(
            inventory_failure_rate=settings.inventory_failure_rate,
            dependency_failure_rate=settings.dependency_failure_rate,
            latency_rate=settings.latency_rate,
            payment_failure_rate=settings.payment_failure_rate,
            available_stock=settings.available_stock,
            item_limit=settings.item_limit,
            dependency_timeout_ms=settings.dependency_timeout_ms,
        )


class FailureInjector:
    """
    Checkpoint policy over an injected random source.

    Each probabilistic checkpoint consumes exactly one draw when it is evaluated, so a
    scripted source fully determines the outcome of a request.
    """

    def __init__(self, policy: FailurePolicy, rng: RandomSource | None = None) -> None:
        self.policy = policy
        self._rng = rng if rng is not None else random.Random()

    def _draw(self, rate: float) -> bool:
        return self._rng.random() < rate

    def inventory_shortage(self, item_count: float) -> bool:
        # The draw happens before the stock comparison, whatever the item count.
        triggered = self._draw(self.policy.inventory_failure_rate)
        return triggered and item_count > self.policy.available_stock

    def dependency_timeout(self) -> bool:
        return self._draw(self.policy.dependency_failure_rate)

    def slow_dependency(self) -> bool:
        return self._draw(self.policy.latency_rate)

    def exceeds_item_limit(self, item_count: float) -> bool:
        return item_count > self.policy.item_limit

    def payment_gateway_timeout(self) -> bool:
        return self._draw(self.policy.payment_failure_rate)


class LatencySimulator:
    """
    Holds the current request for `delay_ms`.

    `cooperative` suspends only the awaiting request. `blocking` sleeps on the event loop
    thread and stalls every in-flight request (process-wide stall).
    """

    def __init__(
        self,
        *,
        delay_ms: int = 3000,
        mode: Literal["cooperative", "blocking"] = "cooperative",
        async_sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        blocking_sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.delay_ms = delay_ms
        self.mode = mode
        self._async_sleep = async_sleep
        self._blocking_sleep = blocking_sleep

    async def hold(self) -> None:
        seconds = self.delay_ms / 1000
        if self.mode == "blocking":
            self._blocking_sleep(seconds)
            return
        await self._async_sleep(seconds)


def build_injector(settings: Settings) -> FailureInjector:
    rng = random.Random(settings.failure_seed) if settings.failure_seed is not None else None
    return FailureInjector(FailurePolicy.from_settings(settings), rng)


def build_latency(settings: Settings) -> LatencySimulator:
    return LatencySimulator(delay_ms=settings.latency_ms, mode=settings.latency_mode)


# --- Module Notes -----------------------------------------------------------
# Neither mode is cancellable: a request that hits the latency checkpoint always waits
# the full delay before the item-limit checkpoint runs.
