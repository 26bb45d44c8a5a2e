"""
Request logging middleware and exception handlers for the Supplement Tracker API
"""

import time
import logging
from datetime import datetime, timezone
from uuid import uuid4

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import AppError, StorageError

logger = logging.getLogger("supplement_tracker.middleware")


def error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    """Build the error envelope shared by every handler"""
    error = {"code": code, "message": message}
    if details:
        error["details"] = jsonable_encoder(details)
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with an id and its processing time"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            f"Request started {request.method} {request.url.path}",
            extra={"request_id": request_id},
        )
        start_time = time.time()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"Request failed {request.method} {request.url.path}: {exc}",
                extra={
                    "request_id": request_id,
                    "process_time": f"{time.time() - start_time:.4f}s",
                },
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"Request completed {request.method} {request.url.path} "
            f"-> {response.status_code}",
            extra={
                "request_id": request_id,
                "process_time": f"{process_time:.4f}s",
            },
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")
    return error_response(
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        details=exc.errors(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")
    return error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


async def storage_exception_handler(request: Request, exc: StorageError):
    """Storage detail goes to the log only"""
    logger.error(f"Storage failure on {request.url}: {exc}")
    return error_response(
        exc.http_status,
        exc.code or exc.default_code,
        "Storage is temporarily unavailable, please try again",
    )


async def app_exception_handler(request: Request, exc: AppError):
    """Handle service errors (validation, auth, not found, conflict)"""
    logger.warning(f"{type(exc).__name__} on {request.url}: {exc}")
    return error_response(
        exc.http_status, exc.code or exc.default_code, exc.message, details=exc.details
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )
