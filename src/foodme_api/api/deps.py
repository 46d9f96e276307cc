"""
foodme_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for pipelines and collaborator stores.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from fastapi import Request

from foodme_api.ordering.pipeline import OrderPipeline, PaymentPipeline
from foodme_api.restaurants.menus import MenuStore
from foodme_api.restaurants.store import RestaurantStore


def order_pipeline(request: Request) -> OrderPipeline:
    # Pipelines are built once in `foodme_api.api.app.create_app`.
    return request.app.state.order_pipeline  # type: ignore[attr-defined]


def payment_pipeline(request: Request) -> PaymentPipeline:
    return request.app.state.payment_pipeline  # type: ignore[attr-defined]


def restaurant_store(request: Request) -> RestaurantStore:
    return request.app.state.restaurants  # type: ignore[attr-defined]


def menu_store(request: Request) -> MenuStore:
    return request.app.state.menus  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Tests swap pipeline collaborators (random source, counter, sleeper) by building the
# pipelines themselves and assigning them onto app.state.
