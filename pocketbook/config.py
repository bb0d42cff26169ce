"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = Field(default="sqlite:///./pocketbook.db")

    # JWT (one shared key signs both access and refresh tokens)
    jwt_secret: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expiration_minutes: int = Field(default=60)
    refresh_token_expiration_days: int = Field(default=7)

    # Auth cookies
    cookie_path: str = Field(default="/api")
    cookie_samesite: str = Field(default="none")
    cookie_secure: bool = Field(default=True)
    cookie_domain: str | None = Field(default=None)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.is_production:
            if self.jwt_secret == "change-me-in-production":  # noqa: S105
                raise ValueError("JWT_SECRET must be changed in production")
            if self.database_url.startswith("sqlite"):
                raise ValueError("DATABASE_URL should not use SQLite in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def access_token_max_age(self) -> int:
        """Access cookie lifetime in seconds."""
        return self.access_token_expiration_minutes * 60

    @property
    def refresh_token_max_age(self) -> int:
        """Refresh cookie lifetime in seconds."""
        return self.refresh_token_expiration_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
