"""
FastAPI middleware for the translation proxy API.
"""

import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from translation_proxy.utils.logging import api_logger

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation id and log its outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        route = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path
        }
        started = time.perf_counter()

        api_logger.debug(
            f"{request.method} {request.url.path}",
            event="request_started",
            metadata={**route, "client_ip": request.client.host if request.client else None}
        )

        try:
            response = await call_next(request)
        except Exception as e:
            api_logger.error(
                f"{request.method} {request.url.path} raised {type(e).__name__}",
                event="request_failed",
                metrics={"processing_time_ms": _elapsed_ms(started)},
                metadata=route,
                exc_info=True
            )
            raise

        elapsed = _elapsed_ms(started)
        api_logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            event="request_completed",
            metrics={"processing_time_ms": elapsed, "status_code": response.status_code},
            metadata=route
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers[PROCESS_TIME_HEADER] = str(elapsed)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add fixed security headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


def setup_middleware(app: FastAPI):
    """Install CORS, request logging and security headers."""
    # Last added runs first
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[CORRELATION_HEADER, PROCESS_TIME_HEADER]
    )
