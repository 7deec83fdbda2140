"""
Health check endpoints.

These are unauthenticated so load balancers and the auth proxy can probe them.
"""

import time

from fastapi import APIRouter

from matinv.application.dto.responses import ComponentHealthResponse, HealthResponse
from matinv.config import get_logger, get_settings

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

_start_time = time.monotonic()


def _uptime() -> float:
    return time.monotonic() - _start_time


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: the process is up."""
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=_uptime(),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Readiness: the inventory database answers queries.

    Reports round-trip latency, the applied schema version and how many
    pooled connections are idle. Failures are reported, not raised.
    """
    from matinv.infrastructure.storage.sqlite import get_connection_pool
    from matinv.infrastructure.storage.sqlite.migrations import get_current_version

    try:
        pool = await get_connection_pool()
        started = time.perf_counter()
        async with pool.acquire() as conn:
            version = await get_current_version(conn)
        database = ComponentHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.perf_counter() - started) * 1000,
            schema_version=version,
            pool_size=pool.pool_size,
            idle_connections=pool.available,
        )
    except Exception as e:
        logger.warning("database_health_check_failed", error=str(e))
        database = ComponentHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if database.available else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=_uptime(),
        database=database,
    )
