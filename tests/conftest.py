import pytest
import logging
from datetime import datetime, timezone
from weather.models import CurrentWeather, DailyWeather, Weather, WeatherData, WeatherProviderConfig
from weather.providers import WeatherProvider, WeatherProviderRegistry

logger = logging.getLogger(__name__)


class FakeProvider(WeatherProvider):
    """Provider returning canned data and counting fetches."""

    id = "fake"
    name = "Fake"
    description = "Canned weather for tests"

    def __init__(self, data: WeatherData, error: Exception = None):
        self.data = data
        self.error = error
        self.calls = []

    async def fetch_weather_async(self, config: WeatherProviderConfig) -> WeatherData:
        self.calls.append(config)
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def mock_env_vars():
    """Provide test environment variables"""
    return {
        'WEATHER_PROVIDER': 'PirateWeather',
        'WEATHER_API_KEY': 'test_weather_key',
        'Coordinates_LAT': '51.5085',
        'Coordinates_LNG': '-0.1257',
        'weather_unit': 'Imperial',
        'show_weather': 'true',
        'log_level': 'debug',
        'language': 'cs',
    }


@pytest.fixture
def sample_weather_data():
    return WeatherData(
        current=CurrentWeather(
            temperature=15,
            feels_like=14,
            condition="Light rain",
            condition_unified=Weather.RAIN,
            icon="cloud-rain",
            humidity=80,
            pressure=1012,
            wind_speed=3.5,
            wind_direction="SW",
        ),
        daily=[
            DailyWeather(
                date=datetime(2024, 1, 1, tzinfo=timezone.utc),
                temperature_max=16,
                temperature_min=8,
                condition="Rain in the afternoon",
                condition_unified=Weather.RAIN,
                icon="cloud-rain",
                humidity=75,
                pressure=1012,
                wind_speed=4.4,
                wind_bearing=225,
                cloud_cover=90,
            )
        ],
    )


@pytest.fixture
def fake_provider(sample_weather_data):
    return FakeProvider(sample_weather_data)


@pytest.fixture
def registry(fake_provider):
    registry = WeatherProviderRegistry()
    registry.register(fake_provider)
    return registry
