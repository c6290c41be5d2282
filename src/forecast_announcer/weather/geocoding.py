"""Geocoding service for the forecast announcer."""

import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError
from timezonefinder import TimezoneFinder

from forecast_announcer.errors import (
    ForecastAnnouncerError, LocationNotFoundError, WeatherServiceError, with_context
)
from forecast_announcer.weather.client import OpenWeatherClient
from forecast_announcer.weather.models import Coordinates, GeocodingMatch

logger = logging.getLogger(__name__)

_matches_adapter = TypeAdapter(List[GeocodingMatch])


class Geocoder:
    """Resolves location names to coordinates and timezones."""

    def __init__(self, client: OpenWeatherClient, timezone_finder: Optional[TimezoneFinder] = None):
        """Initialize the geocoder.

        Args:
            client: OpenWeather client used for lookups
            timezone_finder: Preloaded timezone finder, required by get_timezone
        """
        self.client = client
        self.tf = timezone_finder

    async def geocode(self, location: str) -> Coordinates:
        """Convert a location name to coordinates.

        Args:
            location: Free-text location query

        Returns:
            Coordinates of the first match

        Raises:
            LocationNotFoundError: If the geocoder has no match
            WeatherServiceError: If the geocoding request fails
        """
        try:
            raw = await self.client.geocode_direct(location, limit=1)
            try:
                matches = _matches_adapter.validate_python(raw)
            except ValidationError as e:
                raise WeatherServiceError(f"Invalid geocoding response format: {e}") from e

            if not matches:
                raise LocationNotFoundError()

            match = matches[0]
            logger.info(f"Geocoded '{location}' to {match.name} ({match.lat}, {match.lon})")
            return Coordinates(latitude=match.lat, longitude=match.lon, resolved_name=match.name)

        except ForecastAnnouncerError as e:
            logger.error(f"Geocoding error for '{location}': {e}")
            raise with_context(e, f"Failed to get coordinates for {location}") from e

    def get_timezone(self, coordinates: Coordinates) -> str:
        """Get the timezone for coordinates.

        Args:
            coordinates: Resolved coordinates

        Returns:
            Timezone string (e.g., "America/Chicago") or "UTC" if not found
        """
        if self.tf is None:
            raise RuntimeError("Geocoder was created without a timezone finder")

        timezone = self.tf.timezone_at(lng=coordinates.longitude, lat=coordinates.latitude)
        if timezone:
            logger.info(f"Found timezone '{timezone}' for {coordinates.resolved_name}")
            return timezone

        logger.warning(f"No timezone found for {coordinates.resolved_name}, defaulting to UTC")
        return "UTC"
