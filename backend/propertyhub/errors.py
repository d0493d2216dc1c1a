# backend/propertyhub/errors.py
from __future__ import annotations

import logging
from typing import Any, Iterable

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .schemas import ErrorOut

log = logging.getLogger("propertyhub.errors")

# documented error bodies, shared by every router
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorOut, "description": "Invalid request data"},
    401: {"model": ErrorOut, "description": "Not authenticated"},
    403: {"model": ErrorOut, "description": "Not allowed for this caller"},
    404: {"model": ErrorOut, "description": "Not found"},
    500: {"model": ErrorOut, "description": "Internal storage error"},
}


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=404, detail=detail)


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status_code=403, detail=detail)


class UnauthenticatedError(HTTPException):
    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(status_code=401, detail=detail)


class InvalidInputError(HTTPException):
    """400 with per-field messages. Raised before any store call."""

    def __init__(self, detail: str = "Invalid request data", errors: Iterable[dict[str, str]] = ()) -> None:
        super().__init__(status_code=400, detail=detail)
        self.errors = list(errors)


def _field_name(loc: Iterable[Any]) -> str:
    # ("body", "price") -> "price"; ("query", "minPrice") -> "minPrice"
    parts = [str(x) for x in loc if x not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) or "request"


def field_errors_from_validation(exc: RequestValidationError) -> list[dict[str, str]]:
    out: list[dict[str, str]] = []
    for e in exc.errors():
        msg = str(e.get("msg") or "invalid value")
        # pydantic prefixes custom ValueError messages
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append({"field": _field_name(e.get("loc") or ()), "message": msg})
    return out


def _error_response(status_code: int, detail: str, errors: Iterable[dict[str, str]] = ()) -> JSONResponse:
    body = ErrorOut(detail=detail, errors=list(errors))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_defaults=status_code != 400))


async def _invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return _error_response(400, exc.detail, exc.errors)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, "Invalid request data", field_errors_from_validation(exc))


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    log.exception("store operation failed: %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, "Internal storage error")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidInputError, _invalid_input_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)
