"""Weather service for fetching and reducing forecast data."""

import logging
import math
import zoneinfo
from datetime import datetime, timezone
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from timezonefinder import TimezoneFinder

from forecast_announcer.config import (
    DATE_FORMAT, FORECAST_DAYS, FORECAST_TIMEZONE, FORECAST_UNITS
)
from forecast_announcer.errors import ForecastAnnouncerError, WeatherServiceError, with_context
from forecast_announcer.weather.client import OpenWeatherClient
from forecast_announcer.weather.geocoding import Geocoder
from forecast_announcer.weather.models import (
    Coordinates, DailyForecast, ForecastResponse, ForecastSample
)

logger = logging.getLogger(__name__)

LOCAL_TIMEZONE = "local"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


def sample_date(sample: ForecastSample, tz: zoneinfo.ZoneInfo, date_format: str = DATE_FORMAT) -> str:
    """Calendar date of a forecast sample in the given timezone."""
    moment = datetime.fromtimestamp(sample.dt, tz=timezone.utc).astimezone(tz)
    return moment.strftime(date_format)


def reduce_to_daily(
    samples: List[ForecastSample],
    tz: zoneinfo.ZoneInfo,
    days: int = FORECAST_DAYS
) -> List[DailyForecast]:
    """Reduce subdaily samples to one forecast per calendar day.

    The first sample seen for each date wins, so the result depends on input
    order. At most ``days`` entries are returned, in order of first appearance.

    Args:
        samples: Forecast samples, normally in chronological order
        tz: Timezone used to derive calendar dates
        days: Maximum number of days to return

    Returns:
        List of daily forecasts
    """
    daily: List[DailyForecast] = []
    seen = set()

    for sample in samples:
        date = sample_date(sample, tz)
        if date in seen:
            continue
        seen.add(date)
        daily.append(DailyForecast(
            date=date,
            temperature=round_half_up(sample.main.temp),
            description=sample.weather[0].description
        ))

    return daily[:days]


class WeatherService:
    """Service for fetching daily forecasts."""

    def __init__(
        self,
        client: OpenWeatherClient,
        geocoder: Optional[Geocoder] = None,
        timezone_name: str = FORECAST_TIMEZONE,
        days: int = FORECAST_DAYS
    ):
        """Initialize the weather service.

        Args:
            client: Weather client instance
            geocoder: Geocoder used to resolve timezones when ``timezone_name`` is "local"
            timezone_name: IANA timezone used for day bucketing, or "local"
            days: Number of days to return

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If timezone_name is not a known timezone
        """
        self.client = client
        self.geocoder = geocoder or Geocoder(client)
        self.timezone_name = timezone_name
        self.days = days
        self._zone = None if timezone_name == LOCAL_TIMEZONE else zoneinfo.ZoneInfo(timezone_name)

        if self._zone is None and self.geocoder.tf is None:
            logger.info("Loading timezone data for local day bucketing")
            self.geocoder.tf = TimezoneFinder(in_memory=True)

    async def resolve_timezone(self, coordinates: Coordinates) -> zoneinfo.ZoneInfo:
        """Timezone used to bucket samples for the given coordinates."""
        if self._zone is not None:
            return self._zone
        # Polygon lookup is CPU bound
        name = await run_in_threadpool(self.geocoder.get_timezone, coordinates)
        return zoneinfo.ZoneInfo(name)

    async def get_daily_forecasts(self, coordinates: Coordinates) -> List[DailyForecast]:
        """Get one forecast per day for the given coordinates.

        Args:
            coordinates: Resolved coordinates

        Returns:
            Up to ``days`` daily forecasts, in chronological order

        Raises:
            WeatherServiceError: If the forecast request fails or the response is malformed
        """
        try:
            raw_data = await self.client.get_forecast(
                coordinates.latitude,
                coordinates.longitude,
                units=FORECAST_UNITS
            )
            try:
                forecast = ForecastResponse.model_validate(raw_data)
            except ValidationError as e:
                raise WeatherServiceError(f"Invalid forecast response format: {e}") from e

            logger.info(f"Processing {len(forecast.samples)} forecast samples")
            tz = await self.resolve_timezone(coordinates)
            daily = reduce_to_daily(forecast.samples, tz, self.days)
            logger.info(f"Extracted {len(daily)} daily forecasts")
            return daily

        except ForecastAnnouncerError as e:
            logger.error(f"Weather data error: {e}")
            raise with_context(e, "Failed to get weather data") from e
