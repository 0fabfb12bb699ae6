"""Request logging middleware.

Every request gets a ``req_<12 hex>`` id on ``request.state.request_id`` and
in the ``X-Request-ID`` response header; routers copy it into ApiResponse.

Log format:
    INFO [POST] /api/auth/login -> 200 (23ms) req_a1b2c3d4e5f6 ip=10.0.0.7
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("cp.request")

USER_AGENT_LOG_LEN = 200


def client_user_agent(request: Request) -> str:
    """User agent truncated and stripped of line breaks (log injection)."""
    raw = request.headers.get("user-agent", "")[:USER_AGENT_LOG_LEN]
    return raw.replace("\r", "").replace("\n", "")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id
        client_ip = request.client.host if request.client else "-"

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.error(
                "[%s] %s -> unhandled (%.0fms) %s ip=%s",
                request.method,
                request.url.path,
                elapsed_ms,
                request_id,
                client_ip,
            )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "[%s] %s -> %d (%.0fms) %s ip=%s ua=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
            client_ip,
            client_user_agent(request),
        )
        response.headers["X-Request-ID"] = request_id
        return response
