# middleware.py
"""
Middleware for security headers and request logging.
"""
from datetime import datetime, timezone
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from budget_server.core.logging import logger

SLOW_REQUEST_SECONDS = 2.0


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status, duration and caller."""

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = datetime.now(timezone.utc)
        client_ip = request.client.host if request.client else None

        response = await call_next(request)

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        # Set by the authentication dependency
        user_id = getattr(request.state, "user_id", None)

        logger.info(
            f"Request: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {duration:.3f}s | "
            f"User: {user_id} | "
            f"IP: {client_ip}"
        )

        if duration > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path} | "
                f"Duration: {duration:.3f}s | "
                f"User: {user_id}"
            )

        if response.status_code in (401, 403, 404):
            logger.warning(
                f"Security status code: {response.status_code} | "
                f"Path: {request.url.path} | "
                f"User: {user_id} | "
                f"IP: {client_ip}"
            )

        return response
