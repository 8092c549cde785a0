"""Weather package for the Wall Clock Card."""

from .models import (
    WeatherData,
    CurrentWeather,
    DailyWeather,
    Location,
    Weather,
    Units,
    WeatherProviderConfig,
)
from .providers import (
    WeatherProvider,
    WeatherProviderRegistry,
    OpenWeatherMapProvider,
    PirateWeatherProvider,
    create_default_registry,
)

__all__ = [
    'WeatherData',
    'CurrentWeather',
    'DailyWeather',
    'Location',
    'Weather',
    'Units',
    'WeatherProviderConfig',
    'WeatherProvider',
    'WeatherProviderRegistry',
    'OpenWeatherMapProvider',
    'PirateWeatherProvider',
    'create_default_registry',
]
