"""Application settings loaded from the environment."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from familytree.core.config.enums import Environment, Locale


class Settings(BaseSettings):
    """Backend settings.

    Values come from environment variables or a local ``.env`` file. Either set
    ``DATABASE_URL`` directly or provide the ``POSTGRES_*`` parts.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Family Tree"
    ENVIRONMENT: Environment = Environment.LOCAL
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_V1_PREFIX: str = ""
    CORS_ORIGINS: str = "http://localhost:3000"

    # Database
    DATABASE_URL: Optional[str] = None
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "familytree"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "familytree"
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False
    RUN_ALEMBIC_MIGRATIONS: bool = False
    CREATE_TABLES_ON_STARTUP: bool = False

    # Sessions
    SESSION_SECRET: str = Field(..., min_length=32)
    SESSION_COOKIE_NAME: str = "familytree_session"
    SESSION_TTL_HOURS: int = 24 * 7
    SESSION_COOKIE_SECURE: bool = False

    # Guest access
    GUEST_CODE_TTL_HOURS: int = 48
    LOCALE: Locale = Locale.EN

    MAX_PROFILE_PICTURE_BYTES: int = 5 * 1024 * 1024
    HEALTH_CHECK_TIMEOUT: float = 5.0

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:  # noqa: N802
        """Async SQLAlchemy URL, preferring an explicit ``DATABASE_URL``."""
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            if url.startswith("postgresql://"):
                return url.replace("postgresql://", "postgresql+asyncpg://", 1)
            if url.startswith("sqlite://") and not url.startswith("sqlite+aiosqlite://"):
                return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
            return url
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured datastore is SQLite."""
        return self.SQLALCHEMY_ASYNC_DATABASE_URI.startswith("sqlite")

    @property
    def cors_origins(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
