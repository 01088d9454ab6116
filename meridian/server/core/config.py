"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class GoogleConfig(BaseModel):
    """Google Gemini configuration used by the minutes and email helpers."""

    api_key: Optional[str] = Field(
        default=None, alias="GOOGLE_API_KEY", description="Google API key for Gemini authentication"
    )
    minutes_model: str = Field(
        default="gemini-2.0-flash",
        alias="MERIDIAN_MINUTES_MODEL",
        description="Model used for short transcripts",
    )
    minutes_long_model: str = Field(
        default="gemini-2.0-pro",
        alias="MERIDIAN_MINUTES_LONG_MODEL",
        description="Model used once a transcript reaches the long-transcript threshold",
    )
    long_transcript_threshold: int = Field(
        default=8000,
        alias="MERIDIAN_LONG_TRANSCRIPT_THRESHOLD",
        description="Transcript length (characters) at which the long model is selected",
    )
    email_model: str = Field(
        default="gemini-2.5-flash", alias="MERIDIAN_EMAIL_MODEL", description="Model used for email polishing"
    )

    model_config = {"populate_by_name": True}


class ApiTokenConfig(BaseModel):
    """Issues API token and paging configuration."""

    prefix: str = Field(default="mrd_", alias="MERIDIAN_API_TOKEN_PREFIX", description="Plaintext token prefix")
    default_limit: int = Field(default=50, alias="MERIDIAN_ISSUES_API_DEFAULT_LIMIT", description="Default page size")
    max_limit: int = Field(default=100, alias="MERIDIAN_ISSUES_API_MAX_LIMIT", description="Maximum page size")

    model_config = {"populate_by_name": True}


class ImportConfig(BaseModel):
    """CSV import and transcript upload configuration."""

    batch_size: int = Field(default=50, alias="MERIDIAN_IMPORT_BATCH_SIZE", description="Rows inserted per batch")
    max_transcript_bytes: int = Field(
        default=5 * 1024 * 1024,
        alias="MERIDIAN_MAX_TRANSCRIPT_BYTES",
        description="Largest accepted transcript upload in bytes",
    )

    model_config = {"populate_by_name": True}


class CORSConfig(BaseModel):
    """CORS configuration."""

    origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS", description="Allowed CORS origins (use * for all)")
    allow_credentials: bool = Field(
        default=True, alias="CORS_ALLOW_CREDENTIALS", description="Allow credentials in CORS requests"
    )
    allow_methods: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_METHODS", description="Allowed HTTP methods (use * for all)"
    )
    allow_headers: list[str] = Field(
        default=["*"], alias="CORS_ALLOW_HEADERS", description="Allowed HTTP headers (use * for all)"
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Meridian Server Configuration
    # =====================================================================
    server_host: str = Field(
        default="0.0.0.0",
        description="Meridian server host address to bind to",
        alias="MERIDIAN_SERVER_HOST",
    )
    server_port: int = Field(
        default=8000,
        description="Meridian server port number",
        alias="MERIDIAN_SERVER_PORT",
    )
    log_level: str = Field(
        default="INFO",
        description="Meridian logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="MERIDIAN_LOG_LEVEL",
    )

    # =====================================================================
    # Database Configuration
    # =====================================================================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./meridian.db",
        description="Async SQLAlchemy connection URL for the application database",
        alias="DATABASE_URL",
    )

    # =====================================================================
    # Grouped settings sources (read through the properties below)
    # =====================================================================
    google_api_key: Optional[str] = Field(default=None, alias="GOOGLE_API_KEY")
    minutes_model: str = Field(default="gemini-2.0-flash", alias="MERIDIAN_MINUTES_MODEL")
    minutes_long_model: str = Field(default="gemini-2.0-pro", alias="MERIDIAN_MINUTES_LONG_MODEL")
    long_transcript_threshold: int = Field(default=8000, alias="MERIDIAN_LONG_TRANSCRIPT_THRESHOLD")
    email_model: str = Field(default="gemini-2.5-flash", alias="MERIDIAN_EMAIL_MODEL")
    api_token_prefix: str = Field(default="mrd_", alias="MERIDIAN_API_TOKEN_PREFIX")
    issues_api_default_limit: int = Field(default=50, alias="MERIDIAN_ISSUES_API_DEFAULT_LIMIT")
    issues_api_max_limit: int = Field(default=100, alias="MERIDIAN_ISSUES_API_MAX_LIMIT")
    import_batch_size: int = Field(default=50, alias="MERIDIAN_IMPORT_BATCH_SIZE")
    max_transcript_bytes: int = Field(default=5 * 1024 * 1024, alias="MERIDIAN_MAX_TRANSCRIPT_BYTES")
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def google(self) -> GoogleConfig:
        """Get Google Gemini configuration from environment variables."""
        return GoogleConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def api_tokens(self) -> ApiTokenConfig:
        """Get issues API token configuration from environment variables."""
        return ApiTokenConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def imports(self) -> ImportConfig:
        """Get import/upload configuration from environment variables."""
        return ImportConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def cors(self) -> CORSConfig:
        """Get CORS configuration from environment variables."""
        return CORSConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
