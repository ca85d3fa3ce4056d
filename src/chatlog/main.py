# src/chatlog/main.py
"""Main entry point for the chatlog application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from chatlog.api.v1 import message_counter_router, messages_router
from chatlog.core.errors import InvalidArgument, StoreError, StoreUnavailable
from chatlog.core.logging import configure_logging
from chatlog.core.settings import settings
from chatlog.services.aggregation_worker import AggregationWorker

logger = logging.getLogger(__name__)

configure_logging()

# Initialize FastAPI app
app = FastAPI(
    title="Chatlog API",
    description="Anonymous chat message log with paging and usage summaries",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(messages_router, prefix="/api/v1")
app.include_router(message_counter_router, prefix="/api/v1")


@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(_: Request, exc: InvalidArgument) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Bad Request: " + "; ".join(messages)},
    )


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(_: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.warning("Store unavailable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "service unavailable"},
    )


@app.exception_handler(StoreError)
async def store_error_handler(_: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "internal server error"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    if settings.aggregation_enabled:
        worker = AggregationWorker()
        await worker.start()
        app.state.aggregation_worker = worker
        logger.info(
            "Aggregation worker started (every %.0fs)", settings.aggregation_interval_seconds
        )
    else:
        app.state.aggregation_worker = None


@app.on_event("shutdown")
async def on_shutdown() -> None:
    worker: AggregationWorker | None = getattr(app.state, "aggregation_worker", None)
    if worker:
        await worker.stop()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chatlog.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
