"""
foodme_api.restaurants.menus

Cuisine-keyed menu catalog loaded from CSV (`Cuisine`, `Item Name`, `Price`).
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

from foodme_api.observability.logging import get_logger

log = get_logger(__name__)

_CUISINE_KEYS = ("cuisine", "Cuisine", "type", "category")


class MenuStore:
    def __init__(self, rows: list[dict[str, str]] | None = None) -> None:
        self._rows = list(rows or [])

    def __len__(self) -> int:
        return len(self._rows)

    def load_csv(self, path: Path) -> int:
        with path.open(newline="", encoding="utf-8") as fh:
            reader = csv.DictReader(fh, skipinitialspace=True)
            self._rows = [
                {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}
                for row in reader
                if any((v or "").strip() for v in row.values() if isinstance(v, str))
            ]
        log.info("menus_loaded", path=str(path), count=len(self._rows))
        return len(self._rows)

    def menu_for(self, restaurant: dict[str, Any]) -> list[dict[str, Any]]:
        cuisine = next((restaurant[k] for k in _CUISINE_KEYS if restaurant.get(k)), None)
        if not cuisine:
            return []
        wanted = str(cuisine).lower()
        return [
            {"name": row.get("Item Name", ""), "price": _price(row.get("Price"))}
            for row in self._rows
            if row.get("Cuisine", "").lower() == wanted
        ]


def _price(raw: str | None) -> float | None:
    try:
        return float(raw) if raw else None
    except ValueError:
        return None


# --- Module Notes -----------------------------------------------------------
# Rows with an unparseable Price keep the item with a null price.
