import logging
import time
from uuid import uuid4

import sentry_sdk
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from wedding_api.config.settings import settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
UNLOGGED_PATHS = frozenset({"/api/health", "/favicon.ico"})


def internal_error_response(exc: Exception) -> JSONResponse:
    message = str(exc) if settings.is_development else "Internal server error"
    return JSONResponse(status_code=500, content={"error": message})


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log one line per request once it finishes."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req_{uuid4().hex}"
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            # Unhandled errors escape the inner app; answer here so the id header is kept
            logger.exception(
                "Unhandled error on %s %s [%s]", request.method, request.url.path, request_id
            )
            sentry_sdk.capture_exception(e)
            response = internal_error_response(e)

        response.headers[REQUEST_ID_HEADER] = request_id
        if request.url.path not in UNLOGGED_PATHS:
            logger.info(
                "%s %s -> %d in %.1fms [%s]",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
                request_id,
            )
        return response
