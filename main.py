"""
Supplement Tracker FastAPI Application
Main entry point: middleware, exception handlers, storage and the rollover loop
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import asyncio
import logging
import uvicorn
from contextlib import asynccontextmanager, suppress
import anyio

from api.routes import auth, days, health, library, stats, templates

from domain.models import init_database
from adapters import create_document_store

from app.clock import system_clock
from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    storage_exception_handler,
    app_exception_handler,
    general_exception_handler,
)
from app.exceptions import AppError, StorageError
from services.rollover_service import RolloverScheduler

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("supplement_tracker.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Initializes the account database with retries, opens the document store
    and runs the day rollover loop until shutdown.
    """
    _logger.info(f"Starting SupplementTracker in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(init_database)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise

    store = await anyio.to_thread.run_sync(create_document_store, settings)
    app.state.document_store = store
    _logger.info(f"Document store ready: {type(store).__name__}")

    scheduler = RolloverScheduler(
        store,
        system_clock,
        interval_sec=settings.rollover_check_interval_sec,
        carry_forward=settings.rollover_carry_forward,
    )
    app.state.rollover_scheduler = scheduler
    rollover_task = asyncio.create_task(scheduler.run())

    try:
        yield
    finally:
        _logger.info("Shutting down SupplementTracker")
        rollover_task.cancel()
        with suppress(asyncio.CancelledError):
            await rollover_task

        try:
            store.close()
            _logger.info("Document store closed")
        except Exception as e:
            _logger.exception("Error closing document store during shutdown: %s", e)


# Create FastAPI application with enhanced configuration
app = FastAPI(
    title=settings.api_title,
    version=settings.app_version,
    description=settings.api_description,
    lifespan=lifespan,
    debug=settings.debug,
    openapi_url=(
        f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
    ),
    docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
    redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Register exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(StorageError, storage_exception_handler)
app.add_exception_handler(AppError, app_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(days.router, prefix=settings.api_prefix)
app.include_router(library.router, prefix=settings.api_prefix)
app.include_router(templates.router, prefix=settings.api_prefix)
app.include_router(stats.router, prefix=settings.api_prefix)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
