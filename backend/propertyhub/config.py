# backend/propertyhub/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-19.v1"
    database_url: str = "sqlite:///./propertyhub.db"

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Logging (logging_config.py) ----
    log_level: str = "INFO"
    sql_log_level: str = "WARNING"

    # ---- Session / identity provider ----
    auth_mode: str = "dev"  # dev|jwt
    session_jwt_secret: str = "dev-change-me"
    session_jwt_audience: str | None = None
    session_cookie_name: str = "propertyhub_session"

    # Dev header names
    dev_header_user_id: str = "X-User-Id"
    dev_header_user_email: str = "X-User-Email"
    dev_header_user_role: str = "X-User-Role"

    # ---- Dashboard ----
    dashboard_metric_strategy: str = "latest"  # latest|aggregate

    # ---- Paging defaults ----
    property_page_size: int = 12
    tutorial_page_size: int = 20
    chat_history_limit: int = 50
    max_page_size: int = 500

    def model_post_init(self, __context) -> None:
        strategy = (self.dashboard_metric_strategy or "latest").strip().lower()
        if strategy not in ("latest", "aggregate"):
            raise ValueError(f"dashboard_metric_strategy must be latest|aggregate, got {strategy!r}")
        object.__setattr__(self, "dashboard_metric_strategy", strategy)

        env = (self.app_env or "local").strip().lower()
        if env in ("prod", "production"):
            if (self.auth_mode or "").strip().lower() == "dev":
                raise ValueError("SECURITY: auth_mode=dev is not allowed in prod")
            if self.session_jwt_secret == "dev-change-me":
                raise ValueError("SECURITY: session_jwt_secret must be set in prod")

            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
