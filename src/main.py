"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.cp_audit.api.router import router as audit_router
from src.cp_coi.api.router import router as coi_router
from src.cp_common.database import engine
from src.cp_common.errors import AppError, InternalError
from src.cp_common.logging_config import configure_logging
from src.cp_common.redis_client import close_redis, get_redis, redis_enabled
from src.cp_common.response import error_response
from src.cp_contractors.api.router import router as contractors_router
from src.cp_dashboard.api.router import router as dashboard_router
from src.cp_deficiencies.api.router import router as deficiencies_router
from src.cp_gateway.api.router import router as auth_router
from src.cp_gateway.api.session_router import router as sessions_router
from src.cp_gateway.middleware.api_version import ApiVersionMiddleware
from src.cp_gateway.middleware.request_log import RequestLogMiddleware
from src.cp_health.api.router import router as health_router
from src.cp_hold_harmless.api.router import router as hold_harmless_router
from src.cp_notifications.api.router import router as notifications_router
from src.cp_programs.api.router import router as programs_router
from src.cp_projects.api.router import router as projects_router
from src.cp_reminders.api.router import router as reminders_router
from src.cp_review.api.router import router as review_router
from src.cp_tasks.jobs import build_scheduler
from src.cp_trades.api.router import router as trades_router
from src.cp_users.api.router import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging, DB + Redis connections, scheduler. Shutdown: reverse."""
    configure_logging()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if redis_enabled():
        await get_redis()
    scheduler = build_scheduler() if settings.SCHEDULER_ENABLED else None
    if scheduler is not None:
        scheduler.start()
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield
    if scheduler is not None:
        await scheduler.stop()
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(ApiVersionMiddleware)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    message = exc.message
    if settings.is_production and exc.http_status >= 500:
        message = "Internal server error"
    resp = error_response(exc.code, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    internal = InternalError()
    message = internal.message if settings.is_production else str(exc) or type(exc).__name__
    resp = error_response(internal.code, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=internal.http_status, content=resp.model_dump())


for api_router in (
    auth_router,
    sessions_router,
    users_router,
    contractors_router,
    projects_router,
    programs_router,
    coi_router,
    hold_harmless_router,
    review_router,
    deficiencies_router,
    reminders_router,
    notifications_router,
    audit_router,
    dashboard_router,
    trades_router,
):
    app.include_router(api_router, prefix="/api")

app.include_router(health_router)
