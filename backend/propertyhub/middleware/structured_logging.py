# backend/propertyhub/middleware/structured_logging.py
from __future__ import annotations

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..config import settings

log = logging.getLogger("propertyhub.request")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    One "http_request" record per request. Fields travel as logging extras so
    the JSON formatter emits them as top-level keys next to request_id.

    Runs inside RequestIdMiddleware. user_id is the dev identity header; in
    jwt mode the principal is only known inside handlers, so it is left out.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log.info(
                "http_request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "query": request.url.query or None,
                    "status_code": status_code,
                    "latency_ms": int((time.perf_counter() - started) * 1000),
                    "user_id": request.headers.get(settings.dev_header_user_id),
                },
            )
