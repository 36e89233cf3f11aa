"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Oracle Vision Signals"
    app_version: str = "0.3.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    frontend_url: str = "http://localhost:3000"
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Market data provider (CoinGecko public API)
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    http_user_agent: str = "oracle-vision-v3"
    http_timeout_seconds: Optional[float] = None  # None = aiohttp default

    # Historical window used for RSI / volume ratio
    chart_days: int = 2
    chart_interval: str = "hourly"

    # Scan request defaults
    default_symbols: str = "btc,eth,sol"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
