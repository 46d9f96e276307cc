"""
foodme_api.api.routers.orders

Order and payment endpoints.

Responsibilities:
- Accept loosely-typed order/payment bodies (validation belongs to the pipelines).
- Render pipeline outcomes as JSON responses with their documented status codes.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from foodme_api.api.deps import order_pipeline, payment_pipeline
from foodme_api.ordering.outcomes import Outcome, to_http
from foodme_api.ordering.pipeline import OrderPipeline, PaymentPipeline

router = APIRouter(prefix="/api", tags=["orders"])


class OrderRequest(BaseModel):
    # Field types are deliberately open: "qty": "x" must reach the pipeline and yield a 400.
    model_config = ConfigDict(extra="allow")

    restaurant: Any = None
    items: Any = None


class PaymentRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    amount: Any = None


def _as_payload(model: type[BaseModel], body: Any) -> dict[str, Any]:
    # Non-object bodies (lists, scalars, empty) are treated like an empty object.
    if not isinstance(body, dict):
        body = {}
    return model.model_validate(body).model_dump()


def _respond(outcome: Outcome) -> JSONResponse:
    status_code, body = to_http(outcome)
    return JSONResponse(status_code=status_code, content=body)


@router.post("/order")
async def place_order(
    body: Any = Body(default=None),
    pipeline: OrderPipeline = Depends(order_pipeline),
) -> JSONResponse:
    payload = _as_payload(OrderRequest, body)
    return _respond(await pipeline.place(payload))


@router.post("/payment")
async def make_payment(
    body: Any = Body(default=None),
    pipeline: PaymentPipeline = Depends(payment_pipeline),
) -> JSONResponse:
    payload = _as_payload(PaymentRequest, body)
    return _respond(await pipeline.pay(payload))


# --- Module Notes -----------------------------------------------------------
# This router does not embed any decision logic; every status code comes from the
# outcome returned by the pipeline.
