"""Configuration settings for the forecast announcer service."""

import os
from typing import Final

from dotenv import load_dotenv

from forecast_announcer.errors import ConfigurationError

load_dotenv()

# Service metadata
SERVICE_NAME: Final[str] = "forecast-announcer"
SERVICE_VERSION: Final[str] = "0.1.0"

# Weather API configuration
WEATHER_API_KEY: str = os.getenv("WEATHER_API_KEY") or "2d6c6dd16cd2173821879b85ec204213"
WEATHER_BASE_URL: str = os.getenv("WEATHER_BASE_URL") or "https://api.openweathermap.org"
FORECAST_UNITS: Final[str] = "imperial"
FORECAST_DAYS: Final[int] = 5
DATE_FORMAT: Final[str] = "%Y-%m-%d"

# IANA timezone name used to bucket forecast samples by day, or "local"
FORECAST_TIMEZONE: str = os.getenv("FORECAST_TIMEZONE", "UTC")

# Language model configuration
OPENAI_MODEL: Final[str] = "gpt-3.5-turbo"
OPENAI_TEMPERATURE: Final[float] = 0.7

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "3001"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


def get_openai_api_key() -> str:
    """Return the language model credential.

    Raises:
        ConfigurationError: If OPENAI_API_KEY is not set
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ConfigurationError("Missing OPENAI_API_KEY environment variable")
    return api_key
