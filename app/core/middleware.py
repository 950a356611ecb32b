# Request logging middleware
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.exceptions import general_exception_handler

LOGGER = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Write one line per request: method, path, status, latency and client."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.perf_counter()
        client = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception as exc:
            # Render here, inside CORSMiddleware, so 500s keep their CORS headers
            response = await general_exception_handler(request, exc)

        latency_ms = (time.perf_counter() - start_time) * 1000
        LOGGER.info(
            "%s %s %s %.2fms client=%s",
            request.method,
            request.url.path,
            response.status_code,
            latency_ms,
            client,
        )
        return response
