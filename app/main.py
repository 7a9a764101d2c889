"""
Camera Surveillance API - FastAPI Application

Main entry point for the FastAPI application.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from app.api import router as api_router
from app.clients import (
    GatewayClient,
    WorkerClient,
    set_gateway_client,
    set_worker_client,
)
from app.core.config import get_settings
from app.core.deps import Worker
from app.core.exceptions import AppError
from app.db.base import Base
from app.db import models_registry  # noqa: F401 - Import to register models
from app.db.session import engine
from app.workers.alert_notifier import alert_notifier

settings = get_settings()

# Global instances
worker_client: WorkerClient | None = None
gateway_client: GatewayClient | None = None
notifier_task: asyncio.Task | None = None


async def init_database() -> None:
    """Initialize database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized")


async def start_background_services() -> None:
    """Create outbound clients and start the alert notifier."""
    global worker_client, gateway_client, notifier_task

    worker_client = WorkerClient()
    set_worker_client(worker_client)
    logger.info(f"Stream worker client ready ({settings.worker_url})")

    gateway_client = GatewayClient()
    set_gateway_client(gateway_client)
    logger.info(f"Media gateway client ready ({settings.media_gateway_url})")

    notifier_task = asyncio.create_task(alert_notifier.run())


async def stop_background_services() -> None:
    """Stop background services."""
    global worker_client, gateway_client, notifier_task

    if notifier_task:
        alert_notifier.stop()
        notifier_task.cancel()
        try:
            await notifier_task
        except asyncio.CancelledError:
            pass
        notifier_task = None

    if worker_client:
        await worker_client.close()
        set_worker_client(None)
        worker_client = None
        logger.info("Stream worker client closed")

    if gateway_client:
        await gateway_client.close()
        set_gateway_client(None)
        gateway_client = None
        logger.info("Media gateway client closed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Camera Surveillance API...")

    await init_database()
    await start_background_services()

    logger.info(f"Camera Surveillance API started on port {settings.port}")

    yield

    # Shutdown
    logger.info("Shutting down Camera Surveillance API...")
    await stop_background_services()
    await engine.dispose()
    logger.info("Camera Surveillance API stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Camera Surveillance API - cameras, stream control and alerts",
    lifespan=lifespan,
    docs_url="/swagger" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=["Location"],
)


def _format_validation_error(error: dict) -> str:
    """Render one pydantic error as "field: message"."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {message}" if loc else message


# Exception handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render application errors as {"error": ..., ...}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report every invalid field at once with status 400."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation Error",
            "details": [_format_validation_error(e) for e in exc.errors()],
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler. Internals are logged, never returned."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error"},
    )


# Include API router
app.include_router(api_router)


@app.get("/health")
async def health(worker: Worker) -> dict:
    """Liveness check, also reports whether the stream worker answers."""
    worker_ok = await worker.health_check()
    return {"status": "ok", "worker": worker_ok}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers,
    )
