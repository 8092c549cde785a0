import asyncio
import requests
from datetime import datetime, timezone
from typing import Dict, Optional
import logging
from .base import (
    REQUEST_TIMEOUT,
    WeatherApiError,
    WeatherConfigError,
    WeatherFetchError,
    WeatherProvider,
)
from ..models import (
    CurrentWeather,
    DailyWeather,
    Location,
    MAX_DAILY_FORECAST_DAYS,
    Units,
    Weather,
    WeatherData,
    WeatherProviderConfig,
)
from ..units import bearing_to_direction, normalize_bearing, ratio_to_percent, round_half_up, round_int

logger = logging.getLogger(__name__)

# Pirate Weather names its unit systems after the Dark Sky API
UNITS_MAP: Dict[str, str] = {
    Units.METRIC.value: "si",
    Units.IMPERIAL.value: "us",
}
DEFAULT_UNITS = "si"

# Pirate Weather icon code to unified condition
CONDITION_MAP: Dict[str, Weather] = {
    "clear-day": Weather.CLEAR_SKY,
    "clear-night": Weather.CLEAR_SKY,
    "rain": Weather.RAIN,
    "snow": Weather.SNOW,
    "sleet": Weather.SNOW,
    "wind": Weather.CLOUDS,
    "fog": Weather.MIST,
    "cloudy": Weather.CLOUDS,
    "partly-cloudy-day": Weather.CLOUDS,
    "partly-cloudy-night": Weather.CLOUDS,
    "hail": Weather.SNOW,
    "thunderstorm": Weather.RAIN,
    "tornado": Weather.CLOUDS,
}

# Pirate Weather icon code to OpenWeatherMap icon, so both providers look alike
ICON_MAP: Dict[str, str] = {
    "clear-day": "01d",
    "clear-night": "01n",
    "rain": "10d",
    "snow": "13d",
    "sleet": "13d",
    "wind": "50d",
    "fog": "50d",
    "cloudy": "04d",
    "partly-cloudy-day": "02d",
    "partly-cloudy-night": "02n",
    "hail": "09d",
    "thunderstorm": "11d",
    "tornado": "50d",
}
DEFAULT_ICON = "01d"
ICON_URL = "https://openweathermap.org/img/wn/{icon}@2x.png"


def _first_present(day: dict, key: str, fallback: str):
    """Value of key, or of fallback when key is missing or null. Zero counts as present."""
    value = day.get(key)
    return value if value is not None else day[fallback]


class PirateWeatherProvider(WeatherProvider):
    """Pirate Weather API provider implementation.

    Supported units:
    - METRIC: uses units=si in API calls (default)
    - IMPERIAL: uses units=us in API calls

    Humidity and cloud cover come back as 0-1 ratios and are converted
    to percentages.
    """

    id = "pirateweather"
    name = "Pirate Weather"
    description = "Pirate Weather API provider for weather data"
    base_url = "https://api.pirateweather.net/forecast"

    async def fetch_weather_async(self, config: WeatherProviderConfig) -> WeatherData:
        """Fetch weather data from the Pirate Weather forecast endpoint."""
        if not config.api_key:
            raise WeatherConfigError("Pirate Weather API key is required")
        if not config.latitude or not config.longitude:
            raise WeatherConfigError("Latitude and longitude are required")

        url = f"{self.base_url}/{config.api_key}/{config.latitude},{config.longitude}"
        params = {'units': self.map_units(config.units)}
        logger.debug(f"PirateWeather: Fetching weather for {config.latitude},{config.longitude} with units={params['units']}")

        try:
            response = await asyncio.to_thread(requests.get, url, params=params, timeout=REQUEST_TIMEOUT)
            if not response.ok:
                raise WeatherApiError("Pirate Weather", response.status_code, response.reason)
            return self.transform_response(response.json())
        except WeatherApiError:
            raise
        except Exception as e:
            raise WeatherFetchError(f"Failed to fetch Pirate Weather data: {e}") from e

    @staticmethod
    def map_units(units) -> str:
        """Map metric/imperial to the Pirate Weather units parameter."""
        key = units.value if isinstance(units, Units) else units
        return UNITS_MAP.get(key, DEFAULT_UNITS)

    @staticmethod
    def map_icon_to_condition(icon: Optional[str]) -> Weather:
        return CONDITION_MAP.get(icon, Weather.ALL)

    @staticmethod
    def get_icon_url(icon: Optional[str]) -> str:
        return ICON_URL.format(icon=ICON_MAP.get(icon, DEFAULT_ICON))

    @staticmethod
    def format_condition(summary: Optional[str]) -> str:
        return summary or "Unknown"

    def transform_response(self, data: dict) -> WeatherData:
        currently = data['currently']
        daily = data.get('daily', {}).get('data', [])

        current = CurrentWeather(
            temperature=round_int(currently['temperature']),
            feels_like=round_int(currently['apparentTemperature']),
            condition=self.format_condition(currently.get('summary')),
            condition_unified=self.map_icon_to_condition(currently.get('icon')),
            icon=self.get_icon_url(currently.get('icon')),
            humidity=ratio_to_percent(currently.get('humidity')),
            pressure=round_int(currently['pressure']),
            wind_speed=round_half_up(currently['windSpeed'], 1),
            wind_direction=bearing_to_direction(currently.get('windBearing')),
            uv_index=currently.get('uvIndex'),
        )

        location = None
        if 'latitude' in data and 'longitude' in data:
            location = Location(
                latitude=data['latitude'],
                longitude=data['longitude'],
                timezone=data.get('timezone'),
            )

        return WeatherData(
            current=current,
            daily=[self.transform_daily_weather(day) for day in daily[:MAX_DAILY_FORECAST_DAYS]],
            location=location,
            attribution="Powered by Pirate Weather",
        )

    def transform_daily_weather(self, day: dict) -> DailyWeather:
        gust = day.get('windGust')
        return DailyWeather(
            date=datetime.fromtimestamp(day['time'], tz=timezone.utc),
            temperature_max=round_int(_first_present(day, 'temperatureMax', 'temperatureHigh')),
            temperature_min=round_int(_first_present(day, 'temperatureMin', 'temperatureLow')),
            condition=self.format_condition(day.get('summary')),
            condition_unified=self.map_icon_to_condition(day.get('icon')),
            icon=self.get_icon_url(day.get('icon')),
            humidity=ratio_to_percent(day.get('humidity')),
            pressure=round_int(day['pressure']),
            wind_speed=round_half_up(day['windSpeed'], 1),
            wind_gust=round_half_up(gust, 1) if gust else None,
            wind_bearing=normalize_bearing(day.get('windBearing')),
            cloud_cover=ratio_to_percent(day.get('cloudCover')),
            uv_index=day.get('uvIndex'),
        )
