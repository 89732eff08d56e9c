"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode connection strings or API endpoints in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Personal Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Snapshot store
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./ledger.db")

    # Currencies
    REFERENCE_CURRENCY: str = os.getenv("REFERENCE_CURRENCY", "USD")
    PREFERRED_CURRENCY: str = os.getenv("PREFERRED_CURRENCY", "USD")

    # Exchange rates
    RATES_API_URL: str = os.getenv(
        "RATES_API_URL",
        "https://api.exchangerate-api.com/v4/latest"
    )
    RATES_REFRESH_SECONDS: int = int(os.getenv("RATES_REFRESH_SECONDS", "3600"))
    RATES_TIMEOUT_SECONDS: float = float(os.getenv("RATES_TIMEOUT_SECONDS", "10"))
    RATES_AUTO_REFRESH: bool = os.getenv("RATES_AUTO_REFRESH", "false").lower() == "true"

    # Snapshot store
    SNAPSHOT_KEEP: int = int(os.getenv("SNAPSHOT_KEEP", "50"))

    # Recurring payment projection
    PROJECTION_MAX_ITERATIONS: int = int(
        os.getenv("PROJECTION_MAX_ITERATIONS", "10000")
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls.
    """
    return Settings()
