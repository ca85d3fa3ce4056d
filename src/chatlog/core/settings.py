"""Application settings and configuration.

This module defines all configuration options for the chatlog service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Chatlog", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./chatlog.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Session cookie handling
    session_cookie_name: str = Field(default="sessionId", alias="SESSION_COOKIE_NAME")
    session_ttl_seconds: int = Field(default=259_200, alias="SESSION_TTL_SECONDS")
    session_cookie_secure: bool = Field(default=True, alias="SESSION_COOKIE_SECURE")

    # Message log limits
    default_per_page: int = Field(default=20, alias="DEFAULT_PER_PAGE")
    max_per_page: int = Field(default=100, alias="MAX_PER_PAGE")
    fetch_since_limit: int = Field(default=100, alias="FETCH_SINCE_LIMIT")

    # Usage aggregation
    aggregation_enabled: bool = Field(default=False, alias="AGGREGATION_ENABLED")
    aggregation_interval_seconds: float = Field(
        default=3600.0,
        alias="AGGREGATION_INTERVAL_SECONDS",
    )
    aggregation_lookback_seconds: int = Field(
        default=21_600,
        alias="AGGREGATION_LOOKBACK_SECONDS",
    )
    range_ttl_seconds: int = Field(default=259_200, alias="RANGE_TTL_SECONDS")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()
