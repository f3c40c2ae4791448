"""Application settings and configuration.

This module defines all configuration options for the Tribune application,
both for the table store service and for the board client. Settings are
loaded from environment variables with sensible defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Tribune", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(default="dev-secret-change-me", alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./tribune.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    # Board client
    api_base_url: str = Field(
        default="http://localhost:8000/api/v1",
        alias="TRIBUNE_API_BASE_URL",
    )
    http_timeout_seconds: float | None = Field(
        default=None,
        alias="TRIBUNE_HTTP_TIMEOUT_SECONDS",
    )
    storage_path: Path = Field(
        default=Path("~/.tribune/storage.json"),
        alias="TRIBUNE_STORAGE_PATH",
    )
    guest_name_prefix: str = Field(default="Fan de Foot", alias="TRIBUNE_GUEST_NAME_PREFIX")
    fallback_display_name: str = Field(
        default="Anonyme",
        alias="TRIBUNE_FALLBACK_DISPLAY_NAME",
    )
    sidebar_guest_label: str = Field(default="Invité", alias="TRIBUNE_SIDEBAR_GUEST_LABEL")
    max_image_bytes: int = Field(default=2 * 1024 * 1024, alias="TRIBUNE_MAX_IMAGE_BYTES")
    relative_time_days: int = Field(default=7, alias="TRIBUNE_RELATIVE_TIME_DAYS")
    locale: str = Field(default="fr", alias="TRIBUNE_LOCALE")

    # Content with no recorded owner may be edited or deleted by any actor.
    anonymous_content_editable: bool = Field(
        default=True,
        alias="TRIBUNE_ANONYMOUS_CONTENT_EDITABLE",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
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
