"""
FastAPI application for the materials inventory service.

Run with `uvicorn matinv.api.main:app` or `python -m matinv.api.main`.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matinv.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from matinv.api.middleware.error_handler import setup_exception_handlers
from matinv.api.routes import (
    health_router,
    materials_router,
    reports_router,
    stock_router,
    suppliers_router,
    users_router,
    warehouses_router,
)
from matinv.config import Settings, configure_logging, get_logger, get_settings

logger = get_logger(__name__)

ROUTERS = (
    health_router,
    materials_router,
    stock_router,
    reports_router,
    suppliers_router,
    warehouses_router,
    users_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate and open the database before serving; close the pool on shutdown."""
    from matinv.infrastructure.storage.sqlite import close_connection_pool, get_connection_pool
    from matinv.infrastructure.storage.sqlite.migrations import run_migrations

    settings = get_settings()
    logger.info(
        "application_starting",
        db_path=str(settings.storage.db_path),
        environment=settings.environment,
    )

    results = await run_migrations()
    failed = [r for r in results if not r.success]
    if failed:
        raise RuntimeError(f"Migration v{failed[0].version} failed: {failed[0].error}")
    pool = await get_connection_pool()

    logger.info(
        "application_started",
        migrations_applied=[r.version for r in results],
        pool_size=pool.pool_size,
    )

    try:
        yield
    finally:
        await close_connection_pool()
        logger.info("application_stopped")


def _service_info(settings: Settings) -> dict[str, str]:
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs" if settings.api.debug else "",
    }


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Raw materials stock levels, adjustments and reorder planning",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Added last runs first: errors escaping the logging middleware still get a JSON body
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )

    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    # Plain liveness probe for container orchestrators
    @app.get("/health", include_in_schema=False)
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": settings.app_version}

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return _service_info(settings)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "matinv.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
