"""FastAPI entrypoint: wires config, container, routes, and lifecycle hooks."""

from __future__ import annotations

from contextlib import asynccontextmanager
from time import perf_counter

import uvicorn
from fastapi import FastAPI, Request

from storebot.api.http.businesses import router as businesses_router
from storebot.api.http.health import router as health_router
from storebot.api.http.recommendations import router as recommendations_router
from storebot.api.http.regions import router as regions_router
from storebot.api.http.webhook import router as webhook_router
from storebot.core.config import Settings
from storebot.core.container import build_container
from storebot.core.lifecycle import on_shutdown, on_startup
from storebot.infra.observability.logger import get_logger, setup_logging

access_logger = get_logger("uvicorn.access")


def create_app() -> FastAPI:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    container = build_container(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        on_startup(container)
        try:
            yield
        finally:
            on_shutdown()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        start = perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (perf_counter() - start) * 1000
            client_ip = request.client.host if request.client else "-"
            access_logger.info(
                '%s "%s %s" %s %.2fms',
                client_ip,
                request.method,
                request.url.path,
                status_code,
                duration_ms,
            )

    app.include_router(health_router)
    app.include_router(webhook_router)
    app.include_router(regions_router)
    app.include_router(recommendations_router)
    app.include_router(businesses_router)

    return app


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run("storebot.main:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
