from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal
from functools import lru_cache

from ..exceptions.base import ConfigError


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    APP_NAME: str = "warehouse-catalog"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database configuration.
    # DATABASE_URL_OVERRIDE wins over the POSTGRES_* parts when set (e.g. sqlite for local runs).
    DATABASE_URL_OVERRIDE: str | None = None
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "warehouse_user"
    POSTGRES_PASSWORD: str = "warehouse_password"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "warehouse_db"

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # Connection pool
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: float = 30.0
    DB_POOL_RECYCLE: int = 3600

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Repository / health
    DEFAULT_ACTOR_ID: int = 1
    HEALTH_CHECK_TIMEOUT_SECONDS: float = 2.0

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path | None = Path("/var/log/warehouse-catalog")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - `DATABASE_URL_OVERRIDE` is returned verbatim when provided.
        - With `TESTING=True` and `TEST_POSTGRES_DB` set, the test database name is used
          so test runs never touch the regular database.
        - Otherwise the URL is assembled from the POSTGRES_* parts.
        """
        if self.DATABASE_URL_OVERRIDE:
            return self.DATABASE_URL_OVERRIDE

        db_name = self.POSTGRES_DB
        if self.TESTING and self.TEST_POSTGRES_DB:
            db_name = self.TEST_POSTGRES_DB

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{db_name}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check runs,
        so `LOG_LEVEL=debug` in the environment is accepted.
        """
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("DB_POOL_SIZE", "DB_MAX_OVERFLOW")
    def non_negative_pool_values(cls, v: int) -> int:
        if v < 0:
            raise ValueError("pool sizes must be >= 0")
        return v

    @field_validator("HEALTH_CHECK_TIMEOUT_SECONDS")
    def positive_health_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("health check timeout must be > 0")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def load_settings(**overrides) -> Settings:
    """
    Build a Settings instance, turning pydantic validation failures into ConfigError.

    Keyword overrides take precedence over the environment (handy in tests and scripts).
    """
    try:
        return Settings(**overrides)
    except PydanticValidationError as exc:
        fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
        raise ConfigError(f"Invalid configuration for: {', '.join(fields)}", fields=fields) from exc


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every dependency call.
@lru_cache()
def get_settings() -> Settings:
    return load_settings()
