"""
Request logging middleware.

Each request gets a request id, reused from the auth proxy's X-Request-ID
header when it sends one. The id, method and path are bound to the structlog
context for the whole request, so use case and store events carry them too.
"""

import time
import uuid
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from matinv.config import bind_log_context, clear_log_context, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log request completion with status, acting user and timing."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        incoming = request.headers.get(REQUEST_ID_HEADER, "").strip()
        request_id = incoming[:MAX_REQUEST_ID_LENGTH] or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        bind_log_context(request_id=request_id, method=request.method, path=request.url.path)

        started = time.perf_counter()
        logger.debug(
            "request_started",
            client=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("request_failed", error=str(e), duration_ms=_elapsed_ms(started))
            raise
        else:
            duration_ms = _elapsed_ms(started)
            logger.info(
                "request_completed",
                status=response.status_code,
                user_id=getattr(request.state, "user_id", None),
                duration_ms=duration_ms,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
            return response
        finally:
            clear_log_context()
