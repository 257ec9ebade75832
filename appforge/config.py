"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file and override existing env vars
load_dotenv(override=True)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = True

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Completion service
    anthropic_api_key: str = Field(default="")
    anthropic_model: str = "claude-sonnet-4-20250514"
    completion_timeout_seconds: float = 120.0
    completion_temperature: float = 0.7

    # Per-file and per-phase token budgets
    max_tokens_package_json: int = 500
    max_tokens_layout: int = 1800
    max_tokens_globals_css: int = 1000
    max_tokens_homepage: int = 2000
    max_tokens_tailwind_config: int = 800
    max_tokens_components: int = 6000
    max_tokens_page: int = 1200

    # Retry policy: calls above the threshold get a single attempt
    large_call_threshold: int = 3000
    max_completion_attempts: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = 1.0

    # Fixed interval enforced before every completion call
    pacing_interval_seconds: float = Field(default=1.5, ge=0)

    # Run caps
    max_pages: int = Field(default=4, ge=0)
    max_custom_components: int = Field(default=4, ge=0)
    min_valid_components: int = Field(default=2, ge=1)
    default_style: str = "modern"

    # Content validation
    disable_truncation_check: bool = False

    # Prompt compression
    compression_min_chars: int = 200

    # Caches
    cache_path: str = "cache/components-cache.json"
    smart_cache_path: str | None = "cache/smart-cache.json"
    smart_cache_max_entries: int = 100
    smart_cache_ttl_hours: float = 24.0

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_directory: str = "logs"
    log_file_name: str = "appforge.log"

    # Debug dumps of run inputs/outputs
    save_debug_data: bool = False

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
