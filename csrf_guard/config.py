from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CSRF_SECRET = "dev-csrf-secret-change-me"


class Settings(BaseSettings):
    # CSRF: secret used for the keyed token hash. Must be overridden in prod.
    CSRF_SECRET: str = DEFAULT_CSRF_SECRET
    CSRF_COOKIE_NAME: str = "csrftoken"
    CSRF_FORM_FIELD: str = "csrf_token"
    CSRF_HEADER_NAME: str = "X-CSRF-Token"
    CSRF_COOKIE_SECURE: bool = False  # enable in prod (HTTPS only)
    CSRF_COOKIE_SAMESITE: str = "lax"  # 'lax' or 'strict'
    CSRF_COOKIE_MAX_AGE: Optional[int] = None  # None -> session cookie
    CSRF_ENFORCE: bool = True  # enforce CSRF on protected POST routes

    # CORS: cookies need explicit origins, not "*"
    CORS_ALLOW_ORIGINS: list[str] = [
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Security headers toggles
    SECURITY_ENABLE_HSTS: bool = False  # enable in production behind HTTPS
    SECURITY_CSP: str = (
        "default-src 'self'; "
        "style-src 'self'; "
        "img-src 'self' data:; "
        "connect-src 'self'; "
        "frame-ancestors 'none'"
    )

    # Logging / diagnostics
    LOG_LEVEL: str = "INFO"
    REQUEST_ID_HEADER: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
