"""Tests for forecast fetching and daily reduction."""

import zoneinfo
from datetime import datetime, timedelta, timezone

import pytest

from forecast_announcer.errors import WeatherServiceError
from forecast_announcer.weather.models import Coordinates, ForecastSample
from forecast_announcer.weather.service import WeatherService, reduce_to_daily, round_half_up

from conftest import START, make_forecast_payload, make_sample

UTC = zoneinfo.ZoneInfo("UTC")
CHICAGO = Coordinates(latitude=41.8781, longitude=-87.6298, resolved_name="Chicago")


def samples(*raw):
    return [ForecastSample.model_validate(entry) for entry in raw]


def test_reduce_caps_at_five_days_in_order():
    forecast = make_forecast_payload(days=6)
    daily = reduce_to_daily(samples(*forecast["list"]), UTC)

    assert [day.date for day in daily] == [
        "2026-10-18", "2026-10-19", "2026-10-20", "2026-10-21", "2026-10-22"
    ]
    assert [day.temperature for day in daily] == [60, 61, 62, 63, 64]
    assert daily[0].description == "conditions day 1"


def test_reduce_keeps_first_sample_per_date():
    daily = reduce_to_daily(samples(
        make_sample(START + timedelta(hours=3), 50.0, "light rain"),
        make_sample(START + timedelta(hours=12), 70.0, "clear sky"),
        make_sample(START + timedelta(days=1), 55.0, "overcast clouds"),
    ), UTC)

    assert len(daily) == 2
    assert daily[0].temperature == 50
    assert daily[0].description == "light rain"
    assert daily[1].description == "overcast clouds"


def test_reduce_is_order_dependent_for_same_date():
    first = make_sample(START + timedelta(hours=3), 50.0, "light rain")
    second = make_sample(START + timedelta(hours=6), 70.0, "clear sky")

    assert reduce_to_daily(samples(first, second), UTC)[0].description == "light rain"
    assert reduce_to_daily(samples(second, first), UTC)[0].description == "clear sky"


def test_reduce_buckets_by_configured_timezone():
    # 03:00 UTC on the 19th is still the 18th in Chicago
    moment = datetime(2026, 10, 19, 3, tzinfo=timezone.utc)
    raw = samples(make_sample(moment, 60.0))

    assert reduce_to_daily(raw, UTC)[0].date == "2026-10-19"
    assert reduce_to_daily(raw, zoneinfo.ZoneInfo("America/Chicago"))[0].date == "2026-10-18"


def test_reduce_empty_input():
    assert reduce_to_daily([], UTC) == []


@pytest.mark.parametrize("value,expected", [
    (72.4, 72), (72.5, 73), (72.6, 73), (-2.5, -2), (-2.6, -3), (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.asyncio
async def test_get_daily_forecasts(weather_client):
    service = WeatherService(weather_client, timezone_name="UTC")

    daily = await service.get_daily_forecasts(CHICAGO)

    assert len(daily) == 5
    assert len({day.date for day in daily}) == 5


def test_local_timezone_loads_finder_up_front(weather_client):
    service = WeatherService(weather_client, timezone_name="local")

    assert service.geocoder.tf is not None


def test_fixed_timezone_skips_finder(weather_client):
    service = WeatherService(weather_client, timezone_name="UTC")

    assert service.geocoder.tf is None


@pytest.mark.asyncio
async def test_local_timezone_uses_coordinates(weather_client):
    service = WeatherService(weather_client, timezone_name="local")

    assert await service.resolve_timezone(CHICAGO) == zoneinfo.ZoneInfo("America/Chicago")


@pytest.mark.asyncio
async def test_local_timezone_lookup_runs_in_threadpool(weather_client, monkeypatch):
    service = WeatherService(weather_client, timezone_name="local")
    calls = []

    async def fake_run_in_threadpool(func, *args):
        calls.append(func)
        return func(*args)

    monkeypatch.setattr("forecast_announcer.weather.service.run_in_threadpool", fake_run_in_threadpool)

    daily = await service.get_daily_forecasts(CHICAGO)

    assert calls == [service.geocoder.get_timezone]
    # First sample is 00:00 UTC on the 18th, still the 17th in Chicago
    assert daily[0].date == "2026-10-17"


@pytest.mark.asyncio
async def test_non_success_status_includes_status_code(weather_client, weather_api):
    weather_api.forecast = {"status_code": 503, "text": "Service Unavailable"}
    service = WeatherService(weather_client, timezone_name="UTC")

    with pytest.raises(WeatherServiceError) as exc_info:
        await service.get_daily_forecasts(CHICAGO)

    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "Failed to get weather data: Weather API error: 503 - Service Unavailable"


@pytest.mark.asyncio
async def test_malformed_forecast_payload_raises(weather_client, weather_api):
    weather_api.forecast = {"status_code": 200, "json": {"list": [{"dt": 1, "main": {}, "weather": []}]}}
    service = WeatherService(weather_client, timezone_name="UTC")

    with pytest.raises(WeatherServiceError, match="Invalid forecast response format"):
        await service.get_daily_forecasts(CHICAGO)


def test_unknown_timezone_is_rejected(weather_client):
    with pytest.raises(zoneinfo.ZoneInfoNotFoundError):
        WeatherService(weather_client, timezone_name="Mars/Olympus_Mons")
