# backend/propertyhub/main.py
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .errors import ERROR_RESPONSES, install_error_handlers
from .logging_config import configure_logging

from .middleware.request_id import RequestIdMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.health import router as health_router
from .routers.auth import router as auth_router
from .routers.properties import router as properties_router
from .routers.dashboard import router as dashboard_router
from .routers.analytics import router as analytics_router
from .routers.tutorials import router as tutorials_router
from .routers.ai_chat import router as ai_chat_router

API_PREFIX = "/api"


def _cors_origins() -> list[str]:
    val = settings.cors_allow_origins
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="PropertyHub API", version=settings.app_version)

    # last added runs first: request id must be set before the request log line
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    app.include_router(health_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)
    app.include_router(auth_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)

    # Listings + dashboards
    app.include_router(properties_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)
    app.include_router(dashboard_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)
    app.include_router(analytics_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)

    # Learning + assistant
    app.include_router(tutorials_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)
    app.include_router(ai_chat_router, prefix=API_PREFIX, responses=ERROR_RESPONSES)

    return app


app = create_app()
