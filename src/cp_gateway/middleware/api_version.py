"""Header-based API versioning.

Clients select a version with ``X-API-Version``; a missing header means the
default version. Unsupported versions are rejected with the standard error
envelope before reaching any router. The resolved version is echoed back.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from config.settings import settings
from src.cp_common.errors import UnsupportedApiVersionError
from src.cp_common.response import error_response

VERSION_HEADER = "X-API-Version"
_EXEMPT_PREFIXES = ("/health", "/docs", "/redoc", "/openapi.json")


class ApiVersionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(_EXEMPT_PREFIXES):
            return await call_next(request)

        version = request.headers.get(VERSION_HEADER, settings.API_DEFAULT_VERSION).strip()
        if version not in settings.API_SUPPORTED_VERSIONS:
            exc = UnsupportedApiVersionError(version, settings.API_SUPPORTED_VERSIONS)
            return JSONResponse(
                status_code=exc.http_status,
                content=error_response(exc.code, exc.message).model_dump(),
                headers={VERSION_HEADER: settings.API_DEFAULT_VERSION},
            )

        request.state.api_version = version
        response = await call_next(request)
        response.headers[VERSION_HEADER] = version
        return response
