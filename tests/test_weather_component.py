import asyncio
import pytest
from datetime import datetime, timedelta
from backoff import ExponentialBackoff
from card.messenger import Messenger, WeatherMessage
from card.translations import Translations
from card.weather_component import WeatherComponent
from weather.models import Units, Weather
from weather.providers import PirateWeatherProvider, WeatherConfigError, WeatherProviderRegistry


@pytest.fixture
def translations():
    translations = Translations()
    asyncio.run(translations.load_async())
    return translations


@pytest.fixture
def component(registry, translations):
    component = WeatherComponent(registry, Messenger(), translations)
    component.show_weather = True
    component.weather_provider = "fake"
    component.weather_config = {'apiKey': 'key', 'latitude': 50.85, 'longitude': 4.35}
    return component


def test_provider_config_overlays_defaults(component, fake_provider):
    component.weather_config = {'apiKey': 'key', 'latitude': 50.85}
    config = component.build_provider_config(fake_provider)
    assert config.api_key == 'key'
    assert config.latitude == 50.85
    assert config.longitude == 0
    assert config.units == Units.METRIC


def test_initialize_fetches_once(component, fake_provider):
    asyncio.run(component.initialize())
    asyncio.run(component.initialize())

    assert len(fake_provider.calls) == 1
    assert component.weather_data.current.condition_unified == Weather.RAIN
    assert component.controller.is_ready


def test_disabled_component_does_not_fetch(component, fake_provider):
    component.show_weather = False
    asyncio.run(component.initialize())

    assert fake_provider.calls == []
    assert component.controller.is_ready
    assert component.render() == []


def test_provider_error_keeps_placeholder(component, fake_provider):
    fake_provider.error = WeatherConfigError("Latitude and longitude are required")

    asyncio.run(component.initialize())

    assert component.controller.is_ready
    assert component.weather_data is None
    assert component.error == "Latitude and longitude are required"
    assert component.render() == ["Weather", "Weather unavailable"]


def test_failed_update_backs_off(component, fake_provider):
    fake_provider.error = WeatherConfigError("Latitude and longitude are required")
    asyncio.run(component.update_weather())
    asyncio.run(component.update_weather())

    assert len(fake_provider.calls) == 1


def test_real_provider_validation_reaches_component():
    registry = WeatherProviderRegistry()
    registry.register(PirateWeatherProvider())
    component = WeatherComponent(registry)
    component.show_weather = True
    component.weather_provider = "pirateweather"
    component.weather_config = {'latitude': 50.85, 'longitude': 4.35}

    assert asyncio.run(component.update_weather()) is None
    assert component.error == "Pirate Weather API key is required"


def test_malformed_config_shows_unavailable(component, fake_provider):
    component.weather_config = {'apiKey': 'key', 'latitude': 'north', 'longitude': 4.35}

    asyncio.run(component.initialize())

    assert component.controller.is_ready
    assert fake_provider.calls == []
    assert component.error == "Invalid weather configuration: latitude"
    assert component.render() == ["Weather", "Weather unavailable"]


def test_malformed_config_does_not_escape_update(component):
    component.weather_config = {'latitude': 'north'}
    with pytest.raises(WeatherConfigError):
        component.build_provider_config(component.registry.get_provider("fake"))

    assert asyncio.run(component.update_weather()) is None
    assert component.error.startswith("Invalid weather configuration")


def test_refresh_uses_update_interval(component, fake_provider):
    component.weather_update_interval = 0

    async def run():
        task = asyncio.create_task(component.refresh_periodically())
        for _ in range(5):
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())

    assert len(fake_provider.calls) >= 2


def test_successful_update_publishes_condition(registry, fake_provider):
    messenger = Messenger()
    received = []
    messenger.subscribe(WeatherMessage, received.append)
    component = WeatherComponent(registry, messenger)
    component.show_weather = True
    component.weather_provider = "fake"

    asyncio.run(component.update_weather())

    assert [message.weather for message in received] == [Weather.RAIN]


def test_render_modes(component):
    asyncio.run(component.initialize())

    component.weather_display_mode = "current"
    current_lines = component.render()
    assert current_lines[1] == "15° Light rain"
    assert "Humidity 80%" in current_lines

    component.weather_display_mode = "forecast"
    assert component.render() == ["Weather", "Mon 8°/16° Rain in the afternoon"]


def test_backoff_window():
    backoff = ExponentialBackoff(initial_backoff=60, max_backoff=300)
    now = datetime(2024, 1, 1, 12, 0)
    assert backoff.should_retry(now)

    assert backoff.record_failure("timeout", now=now) == 60
    assert not backoff.should_retry(now + timedelta(seconds=59))
    assert backoff.should_retry(now + timedelta(seconds=60))
    assert backoff.record_failure("timeout", now=now) == 180
    assert backoff.record_failure("timeout", now=now) == 300
    assert backoff.failure_count == 3
    assert backoff.last_error == "timeout"

    backoff.record_success()
    assert backoff.failure_count == 0
    assert backoff.should_retry(now)
