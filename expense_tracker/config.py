"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_DB_PASSWORD = "expense_password"  # noqa: S105


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    db_host: str = Field(default="localhost")
    db_user: str = Field(default="postgres")
    db_password: str = Field(default=DEFAULT_DB_PASSWORD)
    db_name: str = Field(default="expense_tracker")
    db_port: int = Field(default=5432)
    database_url: str | None = Field(default=None)  # Overrides the DB_* parts when set
    db_pool_size: int = Field(default=10)
    db_max_overflow: int = Field(default=10)

    # API
    port: int = Field(default=5000)
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default=["*"])

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.environment == "production" and self.database_url is None:
            if self.db_password == DEFAULT_DB_PASSWORD:
                raise ValueError("DB_PASSWORD must be changed in production")
        return self

    @property
    def sqlalchemy_database_url(self) -> str:
        """Connection URL, assembled from the DB_* settings unless DATABASE_URL is set."""
        if self.database_url:
            return self.database_url
        url = URL.create(
            "postgresql",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
