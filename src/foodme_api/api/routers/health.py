"""
foodme_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting loaded collaborator data.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from foodme_api.api.deps import menu_store, restaurant_store
from foodme_api.restaurants.menus import MenuStore
from foodme_api.restaurants.store import RestaurantStore

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    restaurants: RestaurantStore = Depends(restaurant_store),
    menus: MenuStore = Depends(menu_store),
) -> dict[str, Any]:
    return {"status": "ready", "restaurants": len(restaurants), "menuItems": len(menus)}


# --- Module Notes -----------------------------------------------------------
# Readiness reports loaded collaborator data; empty stores still serve orders.
