"""
foodme_api.ordering.errors

Domain error taxonomy for the order and payment pipelines.

Responsibilities:
- Carry the HTTP status, span `error.type` and JSON body of each rejection kind.
- Provide exception objects that can be recorded on spans.
"""

from __future__ import annotations

from typing import Any, ClassVar


class PipelineError(Exception):
    """
    Base class for rejections produced by a pipeline checkpoint.

    Pipelines never raise these past their boundary; they record them on the span and
    wrap them in `outcomes.Rejected`.
    """

    status_code: ClassVar[int] = 400
    error_type: ClassVar[str] = "business"
    default_message: ClassVar[str] = "Request rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(PipelineError):
    error_type = "validation"
    default_message = "items[] is required"


class InvalidLineItemError(ValidationError):
    default_message = "Invalid item qty or price"

    def __init__(self, item: Any, index: int) -> None:
        super().__init__()
        self.item = item
        self.index = index


class InventoryError(PipelineError):
    status_code = 409
    default_message = "Insufficient inventory"

    def __init__(self, *, available_stock: int, requested: float) -> None:
        super().__init__()
        self.available_stock = available_stock
        self.requested = requested

    def body(self) -> dict[str, Any]:
        return {"error": self.message, "availableStock": self.available_stock}


class DependencyTimeoutError(PipelineError):
    status_code = 502
    error_type = "dependency"
    default_message = "Inventory service timeout"

    def __init__(self, *, dependency: str = "inventory-service", timeout_ms: int = 3000) -> None:
        super().__init__()
        self.dependency = dependency
        self.timeout_ms = timeout_ms


class ItemLimitError(PipelineError):
    default_message = "Too many items"

    def __init__(self, *, limit: int, requested: float) -> None:
        super().__init__()
        self.limit = limit
        self.requested = requested


class PaymentGatewayError(PipelineError):
    status_code = 502
    error_type = "dependency"
    default_message = "Payment gateway timeout"


# --- Module Notes -----------------------------------------------------------
# Anything not derived from PipelineError is an unexpected fault and maps to 500.
