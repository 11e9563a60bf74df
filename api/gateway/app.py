"""FastAPI application for the hotel gateway.

Run:
    uv run uvicorn api.gateway.app:app --reload --port 3000
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from api.gateway.routes import router as api_router
from infra.ota import OTAClient
from lib.hotel_api import HotelApiClient
from services.gateway import (
    GatewayConfig,
    OTASyncService,
    Service,
    SyncScheduler,
    load_config,
    setup_logging,
)


def create_app(config: Optional[GatewayConfig] = None) -> FastAPI:
    """Build the app. Config is loaded from the environment at startup if not given."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = config or load_config()
        setup_logging(cfg.log_level)

        hotel_client = HotelApiClient(cfg.api_base_url, timeout=cfg.upstream_timeout)
        ota_client = OTAClient(
            endpoint=cfg.ota_endpoint,
            api_key=cfg.ota_api_key,
            timeout=cfg.upstream_timeout,
        )
        await hotel_client.initialize()
        await ota_client.initialize()

        sync_service = OTASyncService(hotel_client, ota_client)
        app.state.config = cfg
        app.state.sync_service = sync_service
        app.state.service = Service(hotel_client, sync_service)

        scheduler = None
        if cfg.ota_sync_enabled:
            scheduler = SyncScheduler(sync_service, cron_expression=cfg.ota_sync_cron)
            scheduler.start()
        app.state.scheduler = scheduler

        logger.info(f"Hotel gateway ready on port {cfg.port} (upstream: {cfg.api_base_url})")
        try:
            yield
        finally:
            if scheduler:
                scheduler.shutdown()
            await hotel_client.close()
            await ota_client.close()

    app = FastAPI(title="Hotel Gateway", lifespan=lifespan)
    app.include_router(api_router)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})

    return app


app = create_app()
