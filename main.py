# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Hausmeister Service
===================
Tracks the rotating Hausmeister duty from a recurring calendar feed and
answers "who is on duty", "is it me" and "how long until my turn".

A background task refreshes the calendar every REFRESH_INTERVAL_SECONDS and
swaps in a complete snapshot; HTTP readers never see a partial update.

Port: 8005
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hausmeister.controllers import (
    duty_controller,
    profile_controller,
    system_controller,
    task_controller,
)
from hausmeister.core.config import settings
from hausmeister.core.dependencies import get_duty_service, get_task_service
from hausmeister.core.exceptions import HausmeisterError
from hausmeister.core.logging import get_logger
from hausmeister.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None


# ── Background refresh ────────────────────────────────────────────────────
async def refresh_loop(interval: Optional[float] = None) -> None:
    """Refresh the duty snapshot and reset stale tasks until cancelled."""
    interval = interval or settings.REFRESH_INTERVAL_SECONDS
    duty_service = get_duty_service()
    task_service = get_task_service()
    while True:
        task_service.reset_if_needed()
        try:
            await duty_service.refresh()
        except HausmeisterError as exc:
            logger.warning("Scheduled refresh failed, retrying in %.0fs: %s", interval, exc)
        except Exception:
            logger.exception("Scheduled refresh crashed, retrying in %.0fs", interval)
        await asyncio.sleep(interval)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Start the refresh task on startup; cancel it on shutdown."""
    refresh_task: Optional[asyncio.Task] = None
    if settings.REFRESH_ON_STARTUP:
        refresh_task = asyncio.create_task(refresh_loop())
        logger.info("Refresh task started — interval=%ss", settings.REFRESH_INTERVAL_SECONDS)
    yield
    if refresh_task is not None:
        refresh_task.cancel()
        try:
            await refresh_task
        except asyncio.CancelledError:
            logger.info("Refresh task cancelled — shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Hausmeister Service",
    description="Resolves the current duty holder from a recurring calendar feed.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        422: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


# ── Routers ───────────────────────────────────────────────────────────────
app.include_router(system_controller.router)
app.include_router(duty_controller.router)
app.include_router(task_controller.router)
app.include_router(profile_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
