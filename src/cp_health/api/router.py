"""Health endpoints (mounted at the root, outside /api).

GET /health            — database and cache
GET /health/liveness   — process is up
GET /health/readiness  — database reachable
"""

import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.cp_common.cache import cache
from src.cp_common.database import engine
from src.cp_common.datetime_utils import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


async def check_database() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database health check failed", exc_info=True)
        return False


async def check_cache() -> bool:
    try:
        return await cache.ping()
    except Exception:
        logger.warning("Cache health check failed", exc_info=True)
        return False


def _result(checks: dict[str, Any]) -> JSONResponse:
    healthy = all(c["status"] == "ok" for c in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ok" if healthy else "error",
            "timestamp": utc_now().isoformat(),
            "checks": checks,
        },
    )


@router.get("")
async def health() -> JSONResponse:
    db_ok = await check_database()
    cache_ok = await check_cache()
    return _result(
        {
            "database": {"status": "ok" if db_ok else "error"},
            "cache": {"status": "ok" if cache_ok else "error", "backend": cache.backend},
        }
    )


@router.get("/liveness")
async def liveness() -> dict[str, str]:
    return {"status": "ok", "timestamp": utc_now().isoformat()}


@router.get("/readiness")
async def readiness() -> JSONResponse:
    db_ok = await check_database()
    return _result({"database": {"status": "ok" if db_ok else "error"}})
