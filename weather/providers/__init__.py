"""Weather providers package."""

from .base import (
    WeatherProvider,
    WeatherProviderError,
    WeatherConfigError,
    WeatherApiError,
    WeatherFetchError,
)
from .openweathermap import OpenWeatherMapProvider
from .pirateweather import PirateWeatherProvider
from .registry import WeatherProviderRegistry, create_default_registry

__all__ = [
    'WeatherProvider',
    'WeatherProviderError',
    'WeatherConfigError',
    'WeatherApiError',
    'WeatherFetchError',
    'OpenWeatherMapProvider',
    'PirateWeatherProvider',
    'WeatherProviderRegistry',
    'create_default_registry',
]
