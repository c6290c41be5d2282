"""Forecast narration pipeline."""

import logging
from typing import Optional

from forecast_announcer.config import WEATHER_API_KEY, WEATHER_BASE_URL
from forecast_announcer.narration.generator import NarrationGenerator
from forecast_announcer.narration.models import ForecastNarration
from forecast_announcer.narration.parser import StructuredOutputParser
from forecast_announcer.narration.prompt import NarrationPrompt, format_weather_data
from forecast_announcer.weather.client import OpenWeatherClient
from forecast_announcer.weather.geocoding import Geocoder
from forecast_announcer.weather.service import WeatherService

logger = logging.getLogger(__name__)


class ForecastAnnouncer:
    """Turns a location name into a narrated five day forecast.

    Stages run strictly in sequence: geocode, fetch forecast, format prompt,
    generate narration, parse. Any failure aborts the whole run.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        weather_service: WeatherService,
        generator: NarrationGenerator,
        parser: Optional[StructuredOutputParser[ForecastNarration]] = None,
        prompt: Optional[NarrationPrompt] = None
    ):
        self.geocoder = geocoder
        self.weather_service = weather_service
        self.generator = generator
        self.parser = parser or StructuredOutputParser(ForecastNarration)
        self.prompt = prompt or NarrationPrompt(self.parser.get_format_instructions())

    @classmethod
    def create(
        cls,
        openai_api_key: str,
        weather_api_key: str = WEATHER_API_KEY,
        weather_base_url: str = WEATHER_BASE_URL
    ) -> "ForecastAnnouncer":
        """Build the pipeline with default clients."""
        client = OpenWeatherClient(api_key=weather_api_key, base_url=weather_base_url)
        geocoder = Geocoder(client)
        return cls(
            geocoder=geocoder,
            weather_service=WeatherService(client, geocoder=geocoder),
            generator=NarrationGenerator.from_api_key(openai_api_key)
        )

    async def announce(self, location: str) -> ForecastNarration:
        """Produce the narrated forecast for a location.

        Args:
            location: Free-text location name

        Returns:
            ForecastNarration with one entry per day

        Raises:
            LocationNotFoundError: If the location cannot be geocoded
            WeatherServiceError: If a weather API call fails
            ParseError: If the model output does not match the narration schema
        """
        coordinates = await self.geocoder.geocode(location)
        forecasts = await self.weather_service.get_daily_forecasts(coordinates)

        prompt = self.prompt.format(location=location, weather_data=format_weather_data(forecasts))
        output = await self.generator.generate(prompt)

        narration = self.parser.parse(output)
        logger.info(f"Narrated {len(forecasts)} day forecast for {coordinates.resolved_name}")
        return narration

    async def aclose(self):
        """Close the weather and language model clients."""
        try:
            await self.weather_service.client.aclose()
        finally:
            await self.generator.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
