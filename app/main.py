"""
E-commerce catalog API - brands and products over FastAPI
"""
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from starlette_context import plugins
from starlette_context.middleware import ContextMiddleware
import sentry_sdk

from app.api.v1 import api_router, health_router
from app.core.config import settings
from app.core.database import Database
from app.core.logging import setup_logging, log
from app.core.exceptions import (
    BaseAPIException,
    handle_api_exception,
    handle_unexpected_exception,
    handle_validation_exception,
)
from app.middleware import RequestTimeoutMiddleware, TimingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events
    """
    # Startup
    setup_logging()
    log.info("Starting E-commerce API", version=settings.VERSION, env=settings.ENVIRONMENT)

    # Initialize Sentry if configured
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            traces_sample_rate=0.1,
        )
        log.info("Sentry initialized")

    # Tests install their own handle before startup
    owns_db = getattr(app.state, "db", None) is None
    if owns_db:
        app.state.db = Database(settings)
        await app.state.db.wait_until_ready()

    yield

    # Shutdown
    log.info("Shutting down E-commerce API")
    if owns_db:
        await app.state.db.dispose()
        app.state.db = None


def create_application(database: Optional[Database] = None) -> FastAPI:
    """
    Create FastAPI application with all configurations
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url="/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        default_response_class=ORJSONResponse,  # Fast JSON responses
        lifespan=lifespan,
        debug=settings.DEBUG,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "brands", "description": "Brand management"},
            {"name": "products", "description": "Product management"},
        ],
    )
    app.state.db = database

    # Add custom exception handlers
    app.add_exception_handler(BaseAPIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    # Add middleware stack (last added runs first)

    # Request deadline (innermost, so cancellation lands in the handler)
    if settings.server_write_timeout:
        app.add_middleware(RequestTimeoutMiddleware, timeout=settings.server_write_timeout)

    # Access log and timing
    app.add_middleware(TimingMiddleware)

    # Request context (correlation IDs)
    app.add_middleware(
        ContextMiddleware,
        plugins=(
            plugins.RequestIdPlugin(),
            plugins.CorrelationIdPlugin(force_new_uuid=False),
        ),
    )

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # CORS
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_origins],
            allow_credentials=False,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
            expose_headers=["X-Request-ID", "X-Correlation-ID", "X-Process-Time"],
        )

    # Add API routes
    app.include_router(health_router, tags=["health"])
    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Add Prometheus metrics
    if settings.enable_metrics:
        from prometheus_fastapi_instrumentator import Instrumentator

        Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    # Root endpoint
    @app.get("/", tags=["root"])
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information"""
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.DEBUG,
        workers=settings.workers if not settings.DEBUG else 1,
        timeout_keep_alive=settings.server_read_timeout,
        log_config=None,  # Use our custom logging
        access_log=False,  # We handle access logs in middleware
        server_header=False,
    )
