"""
foodme_api.api.app

FastAPI app factory for the FoodMe API.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Wire telemetry providers, failure injection and metrics into the pipelines.
- Load restaurant/menu collaborator data.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.status import HTTP_400_BAD_REQUEST

from foodme_api import __version__
from foodme_api.api.routers.health import router as health_router
from foodme_api.api.routers.orders import router as orders_router
from foodme_api.api.routers.restaurants import router as restaurants_router
from foodme_api.observability.logging import configure_logging, get_logger
from foodme_api.observability.middleware import RequestContextMiddleware
from foodme_api.observability.telemetry import Telemetry, setup_telemetry
from foodme_api.ordering.failures import build_injector, build_latency
from foodme_api.ordering.metrics import MetricsRecorder, create_large_order_counter
from foodme_api.ordering.pipeline import OrderPipeline, PaymentPipeline
from foodme_api.restaurants.menus import MenuStore
from foodme_api.restaurants.store import RestaurantStore
from foodme_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, telemetry: Telemetry | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        service_version=settings.service_version,
        level=settings.log_level,
    )
    telemetry = telemetry or setup_telemetry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            "Server started",
            env=settings.env,
            host=settings.api_host,
            port=settings.api_port,
        )
        try:
            yield
        finally:
            telemetry.shutdown()
            log.info("shutdown")

    app = FastAPI(
        title="FoodMe API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.telemetry = telemetry
    app.state.restaurants, app.state.menus = _load_collaborators(settings)

    # One injector per app: the process-wide random source is shared by both endpoints.
    injector = build_injector(settings)
    app.state.large_orders = create_large_order_counter(telemetry.meter)
    app.state.order_pipeline = OrderPipeline(
        tracer=telemetry.tracer,
        injector=injector,
        latency=build_latency(settings),
        metrics=MetricsRecorder(app.state.large_orders, threshold=settings.large_order_threshold),
    )
    app.state.payment_pipeline = PaymentPipeline(tracer=telemetry.tracer, injector=injector)

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(RequestValidationError, _invalid_body)
    app.include_router(health_router, tags=["health"])
    app.include_router(restaurants_router)
    app.include_router(orders_router)

    if settings.static_dir is not None:
        # Mounted last so API routes win over same-named static paths.
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    if settings.instrument_http:
        from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

        FastAPIInstrumentor.instrument_app(
            app,
            tracer_provider=telemetry.tracer_provider,
            meter_provider=telemetry.meter_provider,
        )

    return app


async def _invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON never reaches a pipeline; keep the `{error}` body contract anyway.
    log.warning("Request body rejected", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


def _load_collaborators(settings: Settings) -> tuple[RestaurantStore, MenuStore]:
    restaurants = RestaurantStore()
    menus = MenuStore()
    if settings.restaurants_file is not None and settings.restaurants_file.exists():
        restaurants.load_file(settings.restaurants_file)
    else:
        log.warning("restaurants_file_missing", path=str(settings.restaurants_file))
    if settings.menus_file is not None and settings.menus_file.exists():
        menus.load_csv(settings.menus_file)
    else:
        log.warning("menus_file_missing", path=str(settings.menus_file))
    return restaurants, menus


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; decision logic stays
# in `foodme_api.ordering`.
