# backend/propertyhub/middleware/request_id.py
from __future__ import annotations

import re
import uuid
from contextvars import ContextVar
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_SAFE_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_ctx: ContextVar[str | None] = ContextVar("propertyhub_request_id", default=None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def resolve_request_id(incoming: str | None) -> str:
    """Trust a caller-supplied id only if it is short and log-safe."""
    rid = (incoming or "").strip()
    if rid and _SAFE_ID.match(rid):
        return rid
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Outermost middleware: binds the id for logging and echoes it on the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        token = request_id_ctx.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
