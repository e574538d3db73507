"""Application configuration via Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENV: Literal["dev", "prod"] = "dev"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./dev.db"
    SQL_ECHO: bool = False
    DB_POOL_SIZE: int = 5

    # App secret (keys the stored access token hashes)
    SECRET_KEY: str = "dev-secret-key"

    # Access tokens never expire when unset
    TOKEN_TTL_MINUTES: int | None = None

    # Seeded admin account
    ADMIN_NAME: str = "Administrador"
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "password123"

    # SPA origins allowed to call the API
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    # Pagination
    DEFAULT_PER_PAGE: int = 15

    @model_validator(mode="after")
    def validate_prod_settings(self) -> "Settings":
        """Ensure dev defaults are not used in production."""
        if self.ENV == "prod":
            if self.SECRET_KEY == "dev-secret-key":
                raise ValueError("SECRET_KEY must be changed in prod")
            if self.ADMIN_PASSWORD == "password123":
                raise ValueError("ADMIN_PASSWORD must be changed in prod")
        return self

    @property
    def is_dev(self) -> bool:
        return self.ENV == "dev"

    @property
    def is_prod(self) -> bool:
        return self.ENV == "prod"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
