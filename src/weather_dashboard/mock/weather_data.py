"""Synthetic, deterministic weather payloads for the mock backend."""

import hashlib
import random
from datetime import datetime, timedelta, timezone
from typing import List

from weather_dashboard.client.models import (
    Astronomy, CurrentWeather, Forecast, ForecastDaily, ForecastDay,
    ForecastHour, ForecastResponse, Location, WeatherCondition, WeatherResponse
)

CONDITIONS = [
    WeatherCondition(text="Sunny", icon="//cdn.weatherapi.com/weather/64x64/day/113.png", code=1000),
    WeatherCondition(text="Partly cloudy", icon="//cdn.weatherapi.com/weather/64x64/day/116.png", code=1003),
    WeatherCondition(text="Overcast", icon="//cdn.weatherapi.com/weather/64x64/day/122.png", code=1009),
    WeatherCondition(text="Light rain", icon="//cdn.weatherapi.com/weather/64x64/day/296.png", code=1183),
]
WIND_DIRECTIONS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


def c_to_f(celsius: float) -> float:
    return round(celsius * 9 / 5 + 32, 1)


def kph_to_mph(kph: float) -> float:
    return round(kph / 1.609344, 1)


def mm_to_in(mm: float) -> float:
    return round(mm / 25.4, 2)


def _rng(location: str, salt: str = "") -> random.Random:
    digest = hashlib.sha256(f"{location.lower()}|{salt}".encode("utf-8")).hexdigest()
    return random.Random(int(digest[:16], 16))


def build_location(name: str, now: datetime) -> Location:
    """Stable coordinates for a location name."""
    rng = _rng(name)
    return Location(
        name=name,
        region="",
        country="Mockland",
        lat=round(rng.uniform(-60, 70), 2),
        lon=round(rng.uniform(-180, 180), 2),
        tz_id="UTC",
        localtime_epoch=int(now.timestamp()),
        localtime=now.strftime("%Y-%m-%d %H:%M")
    )


def build_current(location: str, now: datetime) -> WeatherResponse:
    rng = _rng(location, "current")
    temp_c = round(rng.uniform(-10, 35), 1)
    feels_c = round(temp_c + rng.uniform(-3, 3), 1)
    wind_kph = round(rng.uniform(0, 50), 1)
    gust_kph = round(wind_kph + rng.uniform(0, 20), 1)
    precip_mm = round(rng.uniform(0, 5), 1)
    pressure_mb = round(rng.uniform(980, 1040), 1)
    vis_km = round(rng.uniform(2, 10), 1)

    current = CurrentWeather(
        last_updated_epoch=int(now.timestamp()),
        last_updated=now.strftime("%Y-%m-%d %H:%M"),
        temp_c=temp_c,
        temp_f=c_to_f(temp_c),
        is_day=1 if 6 <= now.hour < 18 else 0,
        condition=rng.choice(CONDITIONS),
        wind_mph=kph_to_mph(wind_kph),
        wind_kph=wind_kph,
        wind_degree=rng.randint(0, 359),
        wind_dir=rng.choice(WIND_DIRECTIONS),
        pressure_mb=pressure_mb,
        pressure_in=round(pressure_mb * 0.02953, 2),
        precip_mm=precip_mm,
        precip_in=mm_to_in(precip_mm),
        humidity=rng.randint(20, 100),
        cloud=rng.randint(0, 100),
        feelslike_c=feels_c,
        feelslike_f=c_to_f(feels_c),
        vis_km=vis_km,
        vis_miles=round(vis_km / 1.609344, 1),
        uv=float(rng.randint(0, 10)),
        gust_mph=kph_to_mph(gust_kph),
        gust_kph=gust_kph
    )
    return WeatherResponse(location=build_location(location, now), current=current)


def _build_hours(location: str, day_start: datetime) -> List[ForecastHour]:
    hours = []
    for hour in range(24):
        at = day_start + timedelta(hours=hour)
        rng = _rng(location, at.isoformat())
        temp_c = round(rng.uniform(-10, 35), 1)
        wind_kph = round(rng.uniform(0, 50), 1)
        hours.append(ForecastHour(
            time_epoch=int(at.timestamp()),
            time=at.strftime("%Y-%m-%d %H:%M"),
            temp_c=temp_c,
            temp_f=c_to_f(temp_c),
            is_day=1 if 6 <= hour < 18 else 0,
            condition=rng.choice(CONDITIONS),
            wind_mph=kph_to_mph(wind_kph),
            wind_kph=wind_kph,
            wind_degree=rng.randint(0, 359),
            wind_dir=rng.choice(WIND_DIRECTIONS),
            humidity=rng.randint(20, 100),
            cloud=rng.randint(0, 100),
            precip_mm=round(rng.uniform(0, 2), 1),
            chance_of_rain=rng.randint(0, 100)
        ))
    return hours


def build_forecast(location: str, days: int, include_hourly: bool, now: datetime) -> ForecastResponse:
    """Forecast days in ascending date order, starting today (UTC)."""
    today = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
    forecast_days = []

    for offset in range(days):
        day_start = today + timedelta(days=offset)
        rng = _rng(location, day_start.date().isoformat())
        min_c = round(rng.uniform(-10, 20), 1)
        max_c = round(min_c + rng.uniform(2, 15), 1)
        avg_c = round((min_c + max_c) / 2, 1)
        maxwind_kph = round(rng.uniform(5, 60), 1)
        precip_mm = round(rng.uniform(0, 20), 1)
        chance_of_rain = rng.randint(0, 100)

        forecast_days.append(ForecastDaily(
            date=day_start.strftime("%Y-%m-%d"),
            date_epoch=int(day_start.timestamp()),
            day=ForecastDay(
                maxtemp_c=max_c,
                maxtemp_f=c_to_f(max_c),
                mintemp_c=min_c,
                mintemp_f=c_to_f(min_c),
                avgtemp_c=avg_c,
                avgtemp_f=c_to_f(avg_c),
                maxwind_mph=kph_to_mph(maxwind_kph),
                maxwind_kph=maxwind_kph,
                totalprecip_mm=precip_mm,
                totalprecip_in=mm_to_in(precip_mm),
                avghumidity=float(rng.randint(20, 100)),
                daily_will_it_rain=1 if chance_of_rain >= 50 else 0,
                daily_chance_of_rain=chance_of_rain,
                uv=float(rng.randint(0, 10)),
                condition=rng.choice(CONDITIONS)
            ),
            astro=Astronomy(
                sunrise="06:12 AM",
                sunset="07:48 PM",
                moonrise="09:30 PM",
                moonset="08:05 AM",
                moon_phase="Waxing Gibbous",
                moon_illumination=float(rng.randint(0, 100))
            ),
            hour=_build_hours(location, day_start) if include_hourly else None
        ))

    return ForecastResponse(
        location=build_location(location, now),
        forecast=Forecast(forecastday=forecast_days)
    )
