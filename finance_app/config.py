"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


DEFAULT_CORS_ORIGINS = ["http://localhost:3000"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_title: str = Field(default="Sepur Finance")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Supabase Configuration
    supabase_url: str = Field(default="https://example.supabase.co", description="Supabase project URL")
    supabase_anon_key: str = Field(default="temp-key", description="Supabase anonymous key")
    supabase_service_key: str = Field(default="temp-key", description="Supabase service role key")
    supabase_jwt_secret: str = Field(
        default="development-secret-key-change-in-production",
        description="Secret used by Supabase Auth to sign access tokens"
    )

    # CORS
    cors_origins: str | List[str] = Field(default="http://localhost:3000")
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Pagination
    default_page_size: int = Field(default=20)
    max_page_size: int = Field(default=100)

    # Document storage
    documents_bucket: str = Field(default="documents")
    invoice_files_table: str = Field(default="invoice_files")
    max_document_size_mb: int = Field(default=20)

    # Reports
    report_months_back: int = Field(default=12)
    top_clients_limit: int = Field(default=50)

    # Branding shown on generated documents
    company_name: str = Field(default="Sepur Engineering Roblox")
    product_name: str = Field(default="Sepur Finance")

    # Localization
    default_currency: str = Field(default="IDR")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if v is None:
            return list(DEFAULT_CORS_ORIGINS)
        if isinstance(v, str):
            if not v.strip():
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in v.split(",")]
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def max_document_size_bytes(self) -> int:
        """Get max stored document size in bytes."""
        return self.max_document_size_mb * 1024 * 1024

    def validate_environment(self) -> None:
        """Validate that all required environment variables are set."""
        required_vars = [
            "supabase_url",
            "supabase_anon_key",
            "supabase_service_key",
            "supabase_jwt_secret"
        ]

        missing_vars = []
        for var in required_vars:
            value = getattr(self, var, None)
            if not value or value == "temp-key":
                missing_vars.append(var.upper())

        if missing_vars:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the application.
    """
    settings = Settings()

    # Validate environment in production
    if settings.is_production:
        settings.validate_environment()

    return settings


# Create a global settings instance
settings = get_settings()
