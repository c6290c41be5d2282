"""HTTP client for the OpenWeather API."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from forecast_announcer.config import FORECAST_UNITS, WEATHER_API_KEY, WEATHER_BASE_URL
from forecast_announcer.errors import WeatherServiceError

logger = logging.getLogger(__name__)

REDACTED = "HIDDEN"


class OpenWeatherClient:
    """Async client for the OpenWeather geocoding and forecast endpoints."""

    def __init__(
        self,
        api_key: str = WEATHER_API_KEY,
        base_url: str = WEATHER_BASE_URL,
        client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the weather client.

        Args:
            api_key: OpenWeather API key, sent as the ``appid`` parameter
            base_url: Base URL for the OpenWeather API
            client: Optional preconfigured httpx client
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient()

    def redact(self, text: str) -> str:
        """Replace the API key in ``text`` so it can be logged."""
        if not self.api_key:
            return text
        return text.replace(self.api_key, REDACTED)

    async def geocode_direct(self, location: str, limit: int = 1) -> List[Any]:
        """Look up a location by name.

        Args:
            location: Free-text location query
            limit: Maximum number of matches

        Returns:
            Raw list of matches from the geocoding API

        Raises:
            WeatherServiceError: If the request fails or returns a non-success status
        """
        data = await self._get_json("/geo/1.0/direct", {"q": location, "limit": limit})
        logger.info(f"Geocoding response: {data}")
        return data

    async def get_forecast(self, lat: float, lon: float, units: str = FORECAST_UNITS) -> Dict[str, Any]:
        """Fetch the multi-day forecast for given coordinates.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            units: OpenWeather unit system

        Returns:
            Raw forecast data from the forecast API

        Raises:
            WeatherServiceError: If the request fails or returns a non-success status
        """
        data = await self._get_json("/data/2.5/forecast", {"lat": lat, "lon": lon, "units": units})
        logger.info(f"Weather data received for coordinates: lat={lat}, lon={lon}")
        return data

    async def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        url = httpx.URL(f"{self.base_url}{path}", params={**params, "appid": self.api_key})
        logger.info(f"Weather API request: {self.redact(str(url))}")

        try:
            response = await self.client.get(url)
        except httpx.RequestError as e:
            message = self.redact(str(e)) or type(e).__name__
            logger.error(f"Request error to weather API: {message}")
            raise WeatherServiceError(f"Weather API request failed: {message}") from e

        if not response.is_success:
            logger.error(f"Weather API error response: {response.status_code} - {response.text}")
            raise WeatherServiceError.from_response(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Weather API returned invalid JSON: {e}")
            raise WeatherServiceError(
                f"Weather API returned invalid JSON: {e}",
                status_code=response.status_code,
                body=response.text
            ) from e

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
