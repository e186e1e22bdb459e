"""
Huissier HTTP service.

create_app() wires settings, logging, the DIContainer and the routes;
run() serves the app with uvicorn (python -m huissier).
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from huissier import __version__
from huissier.config.settings import Settings, get_settings
from huissier.di.container import DIContainer
from huissier.domain.exceptions import HuissierException
from huissier.infrastructure.monitoring import get_logger, setup_logging
from huissier.presentation.api.middleware import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    huissier_exception_handler,
    request_validation_handler,
)
from huissier.presentation.api.routes import authenticate, health

DESCRIPTION = "Realm member authentication for DAO chat"

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[DIContainer] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the container's, then
            get_settings())
        container: Pre-built container, e.g. with in-memory collaborators

    Returns:
        Configured application; the container is on app.state.container
    """
    if settings is None:
        settings = container.settings if container else get_settings()
    if container is None:
        container = DIContainer(settings)

    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENV == "production")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{settings.APP_NAME} starting (ENV={settings.ENV})")
        await container.initialize()
        try:
            yield
        finally:
            await container.shutdown()
            logger.info(f"{settings.APP_NAME} stopped")

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description=DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.container = container

    _add_middleware(app, settings)
    _add_routes(app, settings)

    return app


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: CORS wraps request-ID handling
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    app.add_exception_handler(HuissierException, huissier_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


def _add_routes(app: FastAPI, settings: Settings) -> None:
    app.include_router(health.router, prefix="/api")
    app.include_router(authenticate.router, prefix="/api")

    @app.get("/", tags=["Health"])
    async def root():
        """Service banner."""
        return {
            "service": settings.APP_NAME,
            "status": "running",
            "version": settings.APP_VERSION,
            "package": __version__,
            "description": DESCRIPTION,
        }

    @app.get("/metrics", tags=["Monitoring"])
    async def metrics():
        """Prometheus scrape endpoint."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
