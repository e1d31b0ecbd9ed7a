"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SUPPORTED_DRIVERS = ("postgresql+asyncpg://", "sqlite+aiosqlite://")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Everything has a default so the app (and tests) can be constructed without
    a database; the engine is created lazily on first session.
    """

    # App
    app_name: str = "saas-platform"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Tenant resolution
    tenant_subdomain_header: str = "X-Tenant-Subdomain"
    public_paths: list[str] = [
        "/api/v1/health",
        "/api/v1/auth/signup",
        "/api/v1/auth/login",
        "/api/v1/auth/oauth",
        "/api/v1/internal",
        "/actuator/health",
        "/actuator/info",
        "/docs",
        "/redoc",
        "/openapi.json",
    ]
    static_path_prefixes: list[str] = ["/static", "/public"]
    static_extensions: list[str] = [".js", ".css", ".ico"]

    # Quota: lock the tenant row while counting so concurrent creators serialize
    quota_serialize_creators: bool = True

    # Event bus (AWS EventBridge)
    eventbridge_enabled: bool = False
    eventbridge_bus_name: str = "default"
    eventbridge_region: str = "us-east-1"
    eventbridge_endpoint_url: str | None = None
    eventbridge_source: str = "com.platform.saas"

    # Rate limiting for mutating endpoints (slowapi syntax)
    write_rate_limit: str = "120/minute"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_database_url(self) -> "Settings":
        """Reject database URLs whose driver the persistence layer does not support."""
        if self.database_url and not self.database_url.startswith(_SUPPORTED_DRIVERS):
            raise ValueError(
                "DATABASE_URL must use postgresql+asyncpg:// or sqlite+aiosqlite://, "
                f"got: {self.database_url.split('://', 1)[0]!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so the
    next get_settings() uses the new values.
    """
    return Settings()
