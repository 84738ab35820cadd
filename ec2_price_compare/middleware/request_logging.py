"""
Request logging middleware for FastAPI.
Logs every request on arrival and its status and duration on completion.
"""
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware that logs method, path, client, status and duration."""

    async def dispatch(self, request: Request, call_next: ASGIApp):
        """
        Log the request, pass it on and log the response.

        Args:
            request: FastAPI request object
            call_next: Next middleware or route handler

        Returns:
            Response object
        """
        start_time = time.monotonic()
        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        logger.info(f"{method} {path} - Request received from {client_ip}")

        response = await call_next(request)

        duration_ms = (time.monotonic() - start_time) * 1000
        logger.info(
            f"{method} {path} - Response sent with status {response.status_code} in {duration_ms:.0f}ms"
        )
        return response
