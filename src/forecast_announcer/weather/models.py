"""Data models for geocoding and forecast data."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Resolved location for a free-text query."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    resolved_name: str = Field(..., description="Canonical location name from the geocoder")


class DailyForecast(BaseModel):
    """One forecast entry per calendar day."""
    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    temperature: int = Field(..., description="Temperature in Fahrenheit, rounded")
    description: str = Field(..., description="Weather condition description")


class GeocodingMatch(BaseModel):
    """Raw entry from the OpenWeather direct geocoding API."""
    lat: float = Field(..., description="Latitude")
    lon: float = Field(..., description="Longitude")
    name: str = Field(..., description="Location name")


class MainReading(BaseModel):
    """Main measurements of a forecast sample."""
    temp: float = Field(..., description="Temperature in requested units")


class WeatherCondition(BaseModel):
    """Weather condition of a forecast sample."""
    description: str = Field(..., description="Condition description")


class ForecastSample(BaseModel):
    """Raw subdaily entry from the OpenWeather 5 day forecast API."""
    dt: int = Field(..., description="Forecast time as Unix epoch seconds")
    main: MainReading
    weather: List[WeatherCondition] = Field(..., min_length=1)


class ForecastResponse(BaseModel):
    """Raw response from the OpenWeather 5 day forecast API."""
    samples: List[ForecastSample] = Field(..., alias="list", description="Forecast samples")
