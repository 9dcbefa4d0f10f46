"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings

from homecalc.calculations.base import CallToAction


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./dev.db"

    # App settings
    app_name: str = "Home Buyer Calculators"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Call to action shown with recommendations
    cta_url: str = "/consultation"
    cta_text: str = "Get Professional Help"

    # Usage tracking
    enable_analytics: bool = True

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"

    def call_to_action(self) -> CallToAction:
        return CallToAction(url=self.cta_url, text=self.cta_text)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
