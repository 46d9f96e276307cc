"""
foodme_api.api.routers.restaurants

Restaurant catalog endpoints.

Responsibilities:
- List restaurants (without menu items).
- Fetch one restaurant with its cuisine menu attached.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.status import HTTP_404_NOT_FOUND

from foodme_api.api.deps import menu_store, restaurant_store
from foodme_api.observability.logging import get_logger
from foodme_api.restaurants.menus import MenuStore
from foodme_api.restaurants.store import RestaurantStore, without_menu_items

router = APIRouter(prefix="/api/restaurant", tags=["restaurants"])

log = get_logger(__name__)


@router.get("")
async def list_restaurants(
    store: RestaurantStore = Depends(restaurant_store),
) -> list[dict[str, Any]]:
    log.info("Fetching restaurant list")
    return [without_menu_items(r) for r in store.get_all()]


@router.get("/{restaurant_id}")
async def get_restaurant(
    restaurant_id: str,
    store: RestaurantStore = Depends(restaurant_store),
    menus: MenuStore = Depends(menu_store),
) -> Any:
    restaurant = store.get_by_id(restaurant_id)
    if restaurant is None:
        log.warning("Restaurant not found", restaurantId=restaurant_id)
        return JSONResponse(status_code=HTTP_404_NOT_FOUND, content={"error": "Restaurant not found"})

    restaurant["menuItems"] = menus.menu_for(restaurant)
    log.info(
        "Fetched restaurant with menu",
        restaurantId=restaurant_id,
        menuItemCount=len(restaurant["menuItems"]),
    )
    return restaurant


# --- Module Notes -----------------------------------------------------------
# Menus are attached per request from MenuStore; stored records never hold menuItems.
