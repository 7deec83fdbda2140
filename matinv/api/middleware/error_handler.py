"""
Turns inventory errors, request validation failures and framework HTTP errors
into one JSON error body: error_code, message, hint, path and, for client
errors, a context object with the fields behind the error.
"""

import traceback
from typing import Any
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from matinv.application.dto.responses import ErrorResponse
from matinv.config import get_logger
from matinv.core.exceptions import (
    ConcurrentAdjustmentError,
    DuplicateMaterialCodeError,
    InvalidAdjustmentError,
    InventoryError,
    MaterialInUseError,
    NotFoundError,
    PermissionDeniedError,
    PersistenceError,
    StorageError,
    UnauthenticatedError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first match wins, so subclasses come first
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    InvalidAdjustmentError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateMaterialCodeError: status.HTTP_409_CONFLICT,
    MaterialInUseError: status.HTTP_409_CONFLICT,
    ConcurrentAdjustmentError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "MATERIAL_NOT_FOUND": "Check the material ID and try GET /api/materials to list materials.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID and try GET /api/suppliers to list suppliers.",
    "WAREHOUSE_NOT_FOUND": "Check the warehouse ID and try GET /api/warehouses to list warehouses.",
    "INVALID_ADJUSTMENT": "The adjustment would leave a negative quantity. Reduce the amount removed.",
    "CONCURRENT_ADJUSTMENT": "The stock level changed while saving. Reload the material and retry.",
    "DUPLICATE_MATERIAL_CODE": "Material codes are unique. Choose a different code.",
    "MATERIAL_IN_USE": "Materials with stock history cannot be deleted.",
    "UNAUTHENTICATED": "Sign in through the authentication proxy and retry.",
    "PERMISSION_DENIED": "Ask an administrator to grant the required role.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed; nothing was saved. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication required.",
    403: "You do not have permission for this action.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state. Reload and retry.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _present(details: dict[str, Any]) -> dict[str, Any] | None:
    return {k: v for k, v in details.items() if v is not None} or None


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)
    server_fault = status_code >= 500

    if isinstance(exc, InventoryError):
        error_code = exc.code
        message = exc.message
        # Details are returned for client errors only
        context = None if server_fault else _present(exc.details)
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        context = None

    log = logger.error if server_fault else logger.warning
    log(
        "request_error",
        request_id=getattr(request.state, "request_id", None),
        status=status_code,
        error_type=error_code,
        error=str(exc),
        details=getattr(exc, "details", None),
        traceback=traceback.format_exc() if server_fault else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        context=context,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions that escape the exception handlers to
    standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            return build_error_response(request, e)


# Codes for framework-raised HTTP errors (unknown routes, wrong methods)
HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(
        request: Request,
        exc: InventoryError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors with one entry per bad field."""
        fields = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        logger.info("request_validation_failed", fields=[f["field"] for f in fields])

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint=HINT_MAP["VALIDATION_ERROR"],
                detail="; ".join(f"{f['field']}: {f['message']}" for f in fields),
                context={"fields": fields},
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail or "An error occurred"),
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json", exclude_none=True),
            headers=getattr(exc, "headers", None),
        )
