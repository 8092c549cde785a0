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
from ..units import bearing_to_direction, clamp_percent, normalize_bearing, round_half_up, round_int

logger = logging.getLogger(__name__)

UNITS_MAP: Dict[str, str] = {
    Units.METRIC.value: "metric",
    Units.IMPERIAL.value: "imperial",
}
DEFAULT_UNITS = "metric"

# Weather condition group ("main") to unified condition
CONDITION_MAP: Dict[str, Weather] = {
    "Clear": Weather.CLEAR_SKY,
    "Clouds": Weather.CLOUDS,
    "Rain": Weather.RAIN,
    "Drizzle": Weather.RAIN,
    "Thunderstorm": Weather.THUNDERSTORM,
    "Snow": Weather.SNOW,
    "Mist": Weather.MIST,
    "Smoke": Weather.MIST,
    "Haze": Weather.MIST,
    "Dust": Weather.MIST,
    "Sand": Weather.MIST,
    "Ash": Weather.MIST,
    "Fog": Weather.FOG,
    "Squall": Weather.WIND,
    "Tornado": Weather.EXTREME,
}

# Weather condition group to Font Awesome icons
ICON_MAP: Dict[str, str] = {
    "Clear": "sun",
    "Clouds": "cloud",
    "Rain": "cloud-rain",
    "Drizzle": "cloud-rain",
    "Thunderstorm": "cloud-bolt",
    "Snow": "snowflake",
    "Mist": "smog",
    "Smoke": "smog",
    "Haze": "smog",
    "Dust": "smog",
    "Fog": "smog",
    "Sand": "smog",
    "Ash": "smog",
    "Squall": "wind",
    "Tornado": "tornado",
}
DEFAULT_ICON = "cloud"

# Night variants of icons
NIGHT_ICON_MAPPING = {
    "sun": "moon",
}


class OpenWeatherMapProvider(WeatherProvider):
    """OpenWeatherMap One Call API provider implementation.

    Supported units:
    - METRIC: uses units=metric in API calls (default)
    - IMPERIAL: uses units=imperial in API calls

    Humidity and cloud cover are already percentages in this API.
    """

    id = "openweathermap"
    name = "OpenWeatherMap"
    description = "OpenWeatherMap One Call API provider for weather data"
    base_url = "https://api.openweathermap.org/data/3.0/onecall"

    async def fetch_weather_async(self, config: WeatherProviderConfig) -> WeatherData:
        """Fetch current conditions and the daily forecast in one call."""
        if not config.api_key:
            raise WeatherConfigError("OpenWeatherMap API key is required")
        if not config.latitude or not config.longitude:
            raise WeatherConfigError("Latitude and longitude are required")

        params = {
            'lat': config.latitude,
            'lon': config.longitude,
            'appid': config.api_key,
            'units': self.map_units(config.units),
            'exclude': 'minutely,hourly,alerts',
        }
        logger.debug(f"OpenWeatherMap: Fetching weather for {config.latitude},{config.longitude} with units={params['units']}")

        try:
            response = await asyncio.to_thread(requests.get, self.base_url, params=params, timeout=REQUEST_TIMEOUT)
            if not response.ok:
                raise WeatherApiError("OpenWeatherMap", response.status_code, response.reason)
            return self.transform_response(response.json())
        except WeatherApiError:
            raise
        except Exception as e:
            raise WeatherFetchError(f"Failed to fetch OpenWeatherMap data: {e}") from e

    @staticmethod
    def map_units(units) -> str:
        key = units.value if isinstance(units, Units) else units
        return UNITS_MAP.get(key, DEFAULT_UNITS)

    @staticmethod
    def map_icon_to_condition(condition: Optional[str]) -> Weather:
        return CONDITION_MAP.get(condition, Weather.ALL)

    @staticmethod
    def get_icon(condition: Optional[str], is_day: bool = True) -> str:
        """Convert an OpenWeatherMap condition group to an icon name."""
        icon = ICON_MAP.get(condition, DEFAULT_ICON)

        # Use night variant if available and it's night
        if not is_day and icon in NIGHT_ICON_MAPPING:
            icon = NIGHT_ICON_MAPPING[icon]
        return icon

    @staticmethod
    def _first_condition(entry: dict) -> dict:
        weather = entry.get('weather') or [{}]
        return weather[0]

    @staticmethod
    def _is_day(condition: dict) -> bool:
        # Icon codes end in "d" for day and "n" for night
        return not str(condition.get('icon', '')).endswith('n')

    @staticmethod
    def format_condition(condition: dict) -> str:
        description = condition.get('description') or condition.get('main')
        return description.capitalize() if description else "Unknown"

    def transform_response(self, data: dict) -> WeatherData:
        current_data = data['current']
        condition = self._first_condition(current_data)

        current = CurrentWeather(
            temperature=round_int(current_data['temp']),
            feels_like=round_int(current_data['feels_like']),
            condition=self.format_condition(condition),
            condition_unified=self.map_icon_to_condition(condition.get('main')),
            icon=self.get_icon(condition.get('main'), self._is_day(condition)),
            humidity=clamp_percent(current_data.get('humidity')),
            pressure=round_int(current_data['pressure']),
            wind_speed=round_half_up(current_data['wind_speed'], 1),
            wind_direction=bearing_to_direction(current_data.get('wind_deg')),
            uv_index=current_data.get('uvi'),
        )

        location = None
        if 'lat' in data and 'lon' in data:
            location = Location(latitude=data['lat'], longitude=data['lon'], timezone=data.get('timezone'))

        daily = data.get('daily', [])
        return WeatherData(
            current=current,
            daily=[self.transform_daily_weather(day) for day in daily[:MAX_DAILY_FORECAST_DAYS]],
            location=location,
            attribution="Weather data by OpenWeatherMap",
        )

    def transform_daily_weather(self, day: dict) -> DailyWeather:
        condition = self._first_condition(day)
        gust = day.get('wind_gust')
        return DailyWeather(
            date=datetime.fromtimestamp(day['dt'], tz=timezone.utc),
            temperature_max=round_int(day['temp']['max']),
            temperature_min=round_int(day['temp']['min']),
            condition=day.get('summary') or self.format_condition(condition),
            condition_unified=self.map_icon_to_condition(condition.get('main')),
            # Always use day icons for daily forecast
            icon=self.get_icon(condition.get('main'), True),
            humidity=clamp_percent(day.get('humidity')),
            pressure=round_int(day['pressure']),
            wind_speed=round_half_up(day['wind_speed'], 1),
            wind_gust=round_half_up(gust, 1) if gust else None,
            wind_bearing=normalize_bearing(day.get('wind_deg')),
            cloud_cover=clamp_percent(day.get('clouds')),
            uv_index=day.get('uvi'),
        )
