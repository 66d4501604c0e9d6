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


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="MealLedger", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="sqlite:///./meal_ledger.db",
        description="SQLAlchemy database URL for the meal ledger",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=3, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=1.0, ge=0, description="Delay between DB init attempts"
    )

    # Ledger settings
    ledger_timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone used for day bucketing (host local time if unset)",
    )
    default_calorie_goal: int = Field(
        default=1800, gt=0, description="Daily calorie goal used until one is set"
    )

    # Nutrition lookup (OpenAI-compatible chat completions)
    openai_api_key: Optional[str] = Field(
        default=None, description="API key for the nutrition lookup service"
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the chat completions API",
    )
    nutrition_model: str = Field(
        default="gpt-4.1-mini", description="Model used for nutrition estimates"
    )
    nutrition_lookup_timeout_sec: float = Field(
        default=15.0, gt=0, description="Timeout for a single nutrition lookup"
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
        default="MealLedger API", description="API documentation title"
    )
    api_description: str = Field(
        default="Personal nutrition ledger with daily and rolling analytics",
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

    @field_validator("ledger_timezone", mode="before")
    @classmethod
    def validate_timezone(cls, v):
        """Treat an empty timezone as unset"""
        if isinstance(v, str) and not v.strip():
            return None
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
