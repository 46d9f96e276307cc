"""
foodme_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Carry the failure-injection knobs (rates, thresholds, latency mode).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """
    Env-driven configuration with defaults matching the demo deployment.
    Every failure rate can be set to 0 to get a fully deterministic service.
    """

    model_config = SettingsConfigDict(
        env_prefix="FOODME_", case_sensitive=False, populate_by_name=True
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "foodme-api"
    service_version: str = "1.0.0"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Telemetry export. Unset endpoint keeps spans/metrics in-process only.
    otlp_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices("FOODME_OTLP_ENDPOINT", "OTEL_EXPORTER_OTLP_ENDPOINT"),
    )
    metrics_export_interval_ms: int = 10_000
    instrument_http: bool = True

    # Collaborator data
    static_dir: Path | None = None
    restaurants_file: Path | None = _DATA_DIR / "restaurants.json"
    menus_file: Path | None = _DATA_DIR / "menus.csv"

    # Failure injection
    inventory_failure_rate: float = Field(default=0.20, ge=0.0, le=1.0)
    dependency_failure_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    latency_rate: float = Field(default=0.20, ge=0.0, le=1.0)
    payment_failure_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    available_stock: int = 5
    item_limit: int = 11
    large_order_threshold: int = 8
    latency_ms: int = Field(default=3000, ge=0)
    dependency_timeout_ms: int = 3000
    latency_mode: Literal["cooperative", "blocking"] = "cooperative"
    failure_seed: int | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `latency_mode="blocking"` makes the slow-dependency checkpoint stall the whole
# process instead of the single request, to demo cascading latency.
