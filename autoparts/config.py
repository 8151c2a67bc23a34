"""
Configuration settings for the Auto Parts storefront.
Uses Pydantic for type-safe configuration management.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "Auto Parts Storefront"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "postgresql+asyncpg://autoparts:autoparts@db:5432/autoparts"
    database_echo: bool = False

    # Security
    secret_key: str = "your-secret-key-change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    # Bootstrap admin account, created on startup when set
    admin_username: Optional[str] = None
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    seed_categories: bool = True

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # API
    api_v1_prefix: str = "/api/v1"

    # Document storage
    storage_dir: str = "media"
    storage_url_prefix: str = "/media"
    max_upload_size: int = 10 * 1024 * 1024  # 10MB

    # Storefront
    currency: str = "UGX"
    catalog_page_size: int = 24
    appointments_page_size: int = 5
    history_page_size: int = 10
    expiry_warning_days: int = 30


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
