"""Application configuration settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class DetectorSettings(BaseSettings):
    """Reputation detector configuration."""

    dns_timeout: float = 5.0  # seconds
    enable_cache: bool = True
    cache_ttl: float = 300.0  # seconds

    class Config:
        env_prefix = "MAILGUARD_"


class Settings(BaseSettings):
    """Main application settings."""

    app_name: str = "MailGuard Reputation Service"
    debug: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # Sub-configurations
    detector: DetectorSettings = Field(default_factory=DetectorSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
