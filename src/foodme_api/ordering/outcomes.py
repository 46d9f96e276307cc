"""
foodme_api.ordering.outcomes

Tagged outcome variants returned by the pipelines.

Responsibilities:
- Represent Accepted / Rejected / Failed results without exception-based control flow.
- Map each variant to its HTTP status and JSON body.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from foodme_api.ordering.errors import PipelineError


@dataclass(frozen=True, slots=True)
class OrderResult:
    order_id: int
    total: float
    status: str = "PLACED"

    def body(self) -> dict[str, Any]:
        return {"orderId": self.order_id, "total": self.total, "status": self.status}


@dataclass(frozen=True, slots=True)
class Accepted:
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def status_code(self) -> int:
        return 200

    def body(self) -> dict[str, Any]:
        return dict(self.payload)


@dataclass(frozen=True, slots=True)
class Rejected:
    error: PipelineError

    @property
    def status_code(self) -> int:
        return self.error.status_code

    def body(self) -> dict[str, Any]:
        return self.error.body()


@dataclass(frozen=True, slots=True)
class Failed:
    message: str

    @property
    def status_code(self) -> int:
        return 500

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


Outcome = Accepted | Rejected | Failed


def to_http(outcome: Outcome) -> tuple[int, dict[str, Any]]:
    if isinstance(outcome, (Accepted, Rejected, Failed)):
        return outcome.status_code, outcome.body()
    raise TypeError(f"unknown outcome: {outcome!r}")
