"""
Application configuration management.

Loads settings from environment variables via .env file.
Supports multiple environments (development, staging, production).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values should be stored in .env file (not committed to git).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "CaltransBizConnect"
    app_version: str = "2.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = Field(default=False, description="Enable debug mode")

    # API Configuration
    api_prefix: str = "/api"
    mount_unprefixed: bool = Field(
        default=True,
        description="Also serve every route without the API prefix (proxies that strip /api)",
    )
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    allowed_origins: str = Field(
        default=(
            "http://localhost:3000,http://localhost:5500,http://127.0.0.1:5500,"
            "https://caltransbizconnect.org,https://www.caltransbizconnect.org"
        ),
        description="CORS allowed origins (comma-separated)"
    )

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # Database - single SQLite file
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data.db",
        description="SQLAlchemy connection string"
    )
    database_timeout: float = Field(
        default=5.0,
        ge=0.1,
        le=60.0,
        description="Seconds to wait for the database file lock when connecting",
    )
    database_echo: bool = Field(default=False, description="Echo SQL queries")
    seed_sample_opportunities: bool = Field(
        default=True,
        description="Insert sample opportunities when the table is empty at startup",
    )

    # Capability statement uploads
    upload_dir: str = "uploads"
    upload_max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    upload_allowed_extensions: str = ".pdf,.doc,.docx"

    @property
    def allowed_upload_extensions(self) -> set[str]:
        """Get allowed upload extensions as a lowercase set."""
        return {
            ext.strip().lower()
            for ext in self.upload_allowed_extensions.split(",")
            if ext.strip()
        }

    # Admin capability tokens
    secret_key: str = Field(
        default="change-me-in-production",
        description="Key used to sign admin capability tokens"
    )
    admin_token_algorithm: str = "HS256"
    admin_token_expire_minutes: int = Field(default=720, ge=1)

    # Contact form (logged, never mailed)
    contact_inbox: str = "support@caltransbizconnect.org"

    # Demo account seeding
    seed_user_password: str = Field(
        default="password123",
        description="Password given to demo accounts created by the seed command"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Ensure SQLite URLs use the aiosqlite driver."""
        if v and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
