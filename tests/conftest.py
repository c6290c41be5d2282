"""
Pytest configuration and shared fixtures for forecast announcer tests.
"""

import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from forecast_announcer.narration.generator import NarrationGenerator
from forecast_announcer.pipeline import ForecastAnnouncer
from forecast_announcer.weather.client import OpenWeatherClient
from forecast_announcer.weather.geocoding import Geocoder
from forecast_announcer.weather.service import WeatherService

TEST_API_KEY = "test-weather-key"
TEST_BASE_URL = "https://weather.test"
START = datetime(2026, 10, 18, tzinfo=timezone.utc)


def make_sample(moment: datetime, temp: float, description: str = "clear sky") -> dict:
    """Build one raw forecast sample as returned by OpenWeather."""
    return {
        "dt": int(moment.timestamp()),
        "main": {"temp": temp, "humidity": 50},
        "weather": [{"id": 800, "main": "Clear", "description": description}],
    }


def make_forecast_payload(days: int = 6, step_hours: int = 3) -> dict:
    """Forecast payload with samples every ``step_hours`` for ``days`` days."""
    samples = []
    moment = START
    while moment < START + timedelta(days=days):
        day_index = (moment - START).days
        samples.append(make_sample(moment, 60.4 + day_index, f"conditions day {day_index + 1}"))
        moment += timedelta(hours=step_hours)
    return {"cod": "200", "cnt": len(samples), "list": samples}


NARRATION = {
    "day1": "Ladies and gentlemen, Saturday opens at 60 degrees under clear skies!",
    "day2": "Sunday charges in at 61 with the crowd on its feet!",
    "day3": "Monday delivers 62 degrees, what a play!",
    "day4": "Tuesday holds the line at 63!",
    "day5": "And Wednesday brings it home at 64, touchdown!",
}


def fenced(payload: dict) -> str:
    """Model-style output wrapping a JSON payload in a fenced block."""
    return f"Here is your forecast!\n```json\n{json.dumps(payload)}\n```"


class WeatherApi:
    """Fake OpenWeather API backed by httpx.MockTransport."""

    def __init__(self):
        self.geocoding = {"status_code": 200, "json": [{"name": "Chicago", "lat": 41.8781, "lon": -87.6298, "country": "US"}]}
        self.forecast = {"status_code": 200, "json": make_forecast_payload()}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/geo/1.0/direct":
            return httpx.Response(**self.geocoding)
        if request.url.path == "/data/2.5/forecast":
            return httpx.Response(**self.forecast)
        return httpx.Response(404, text="not found")


def make_openai_client(content: str) -> MagicMock:
    """OpenAI client double whose chat completion returns ``content``."""
    client = MagicMock()
    response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    client.chat.completions.create = AsyncMock(return_value=response)
    client.close = AsyncMock()
    return client


@pytest.fixture
def weather_api():
    """Fake weather API recording incoming requests."""
    return WeatherApi()


@pytest.fixture
def weather_client(weather_api):
    """OpenWeather client wired to the fake weather API."""
    return OpenWeatherClient(
        api_key=TEST_API_KEY,
        base_url=TEST_BASE_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(weather_api))
    )


@pytest.fixture
def openai_client():
    """OpenAI client double answering with a well-formed narration."""
    return make_openai_client(fenced(NARRATION))


@pytest.fixture
def announcer(weather_client, openai_client):
    """Full pipeline backed by fake upstream services."""
    geocoder = Geocoder(weather_client)
    return ForecastAnnouncer(
        geocoder=geocoder,
        weather_service=WeatherService(weather_client, geocoder=geocoder, timezone_name="UTC"),
        generator=NarrationGenerator(openai_client)
    )
