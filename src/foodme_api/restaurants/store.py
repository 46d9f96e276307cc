"""
foodme_api.restaurants.store

In-memory restaurant lookup.

Responsibilities:
- Load restaurant records from a JSON list file.
- Serve list and by-id lookups; list views omit menu items.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from foodme_api.observability.logging import get_logger

log = get_logger(__name__)


class RestaurantStore:
    def __init__(self) -> None:
        self._by_id: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def add(self, record: dict[str, Any]) -> None:
        if "id" not in record:
            raise ValueError("restaurant record requires an id")
        self._by_id[str(record["id"])] = dict(record)

    def get_all(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self._by_id.values()]

    def get_by_id(self, restaurant_id: str) -> dict[str, Any] | None:
        record = self._by_id.get(str(restaurant_id))
        # Copies keep per-request menu enrichment out of the stored record.
        return dict(record) if record is not None else None

    def load_file(self, path: Path) -> int:
        raw = path.read_text(encoding="utf-8").strip()
        records = json.loads(raw) if raw else []
        if not isinstance(records, list):
            raise ValueError(f"{path}: expected a JSON list of restaurants")
        for record in records:
            self.add(record)
        log.info("restaurants_loaded", path=str(path), count=len(records))
        return len(records)


def without_menu_items(restaurant: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in restaurant.items() if k != "menuItems"}


# --- Module Notes -----------------------------------------------------------
# Records are keyed by str(id), so numeric and string ids resolve the same way.
