"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class StorageBackend(str, Enum):
    """Document store implementations selectable by configuration"""

    MONGO = "mongo"
    LOCAL = "local"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="SupplementTracker", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # SQL database (accounts and sessions)
    database_url: str = Field(
        default="sqlite:///./supplement_tracker.db",
        description="SQLAlchemy connection URL for accounts and sessions",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=5, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Document store (daily data, templates, library)
    storage_backend: StorageBackend = Field(
        default=StorageBackend.LOCAL, description="Document store implementation"
    )
    storage_fallback_to_local: bool = Field(
        default=True,
        description="Use the local store when MongoDB cannot be reached at startup",
    )
    mongo_uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    mongo_db_name: str = Field(
        default="supplement_tracker", description="MongoDB database name"
    )
    local_store_path: Optional[str] = Field(
        default="./data/local_store.json",
        description="JSON file backing the local store (memory only when empty)",
    )

    # Tracker behaviour
    timezone: Optional[str] = Field(
        default=None,
        description="IANA time zone used for calendar days (server local when unset)",
    )
    rollover_check_interval_sec: float = Field(
        default=60.0, gt=0, description="Seconds between day rollover checks"
    )
    rollover_carry_forward: bool = Field(
        default=False,
        description="Carry the previous day's list (unchecked) into a new day "
        "when no template is saved",
    )
    template_range_max_days: int = Field(
        default=90, ge=1, description="Largest inclusive span for a range apply"
    )
    session_ttl_days: int = Field(
        default=30, ge=1, description="Lifetime of a login session"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="Supplement Tracker API", description="API documentation title"
    )
    api_description: str = Field(
        default="Daily supplement intake tracking with templates and adherence stats",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("storage_backend", mode="before")
    @classmethod
    def validate_storage_backend(cls, v):
        if isinstance(v, str):
            return StorageBackend(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING


# Global settings instance
settings = Settings()
