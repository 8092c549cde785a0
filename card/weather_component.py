import asyncio
from typing import Any, Dict, List, Optional
import logging
from pydantic import ValidationError
from backoff import ExponentialBackoff
from weather.models import WeatherData, WeatherProviderConfig
from weather.providers import WeatherConfigError, WeatherProvider, WeatherProviderError, WeatherProviderRegistry
from .components import CardComponent
from .messenger import Messenger, WeatherMessage
from .translations import Translations

logger = logging.getLogger(__name__)


class WeatherComponent(CardComponent):
    """Shows current conditions and the daily forecast.

    The provider is looked up in the registry by the configured id on
    every update. Provider errors never escape: the component keeps a
    placeholder and remembers the error for display.
    """

    tag = "ha-weather"

    def __init__(
        self,
        registry: WeatherProviderRegistry,
        messenger: Optional[Messenger] = None,
        translations: Optional[Translations] = None,
    ):
        super().__init__()
        self.registry = registry
        self.messenger = messenger
        self.translations = translations or Translations()
        self.show_weather = False
        self.weather_provider: Optional[str] = None
        self.weather_config: Dict[str, Any] = {}
        self.weather_display_mode = "both"
        self.weather_forecast_days = 3
        self.weather_title: Optional[str] = None
        self.weather_update_interval = 1800
        self.language = "en"
        self.label_size: Optional[str] = None
        self.value_size: Optional[str] = None
        self.weather_data: Optional[WeatherData] = None
        self.error: Optional[str] = None
        self._backoff = ExponentialBackoff()

    async def setup(self) -> None:
        if not self.show_weather:
            logger.debug("Weather display disabled, not fetching")
            return
        await self.update_weather()

    def build_provider_config(self, provider: WeatherProvider) -> WeatherProviderConfig:
        """Overlay the card's weather_config on the provider defaults.

        Raises:
            WeatherConfigError: weather_config does not validate
        """
        try:
            overrides = WeatherProviderConfig.model_validate(self.weather_config or {})
        except ValidationError as e:
            fields = ", ".join(".".join(str(part) for part in error['loc']) for error in e.errors())
            raise WeatherConfigError(f"Invalid weather configuration: {fields}") from e
        return provider.get_default_config().model_copy(
            update=overrides.model_dump(exclude_unset=True)
        )

    async def update_weather(self) -> Optional[WeatherData]:
        """Fetch fresh weather data from the configured provider."""
        if not self.show_weather:
            return None

        if not self._backoff.should_retry():
            logger.warning(f"Skipping weather request, backing off until {self._backoff.get_retry_time_str()}")
            return self.weather_data

        provider = self.registry.get_provider(self.weather_provider)
        if provider is None:
            self.error = f"Weather provider not available: {self.weather_provider}"
            logger.error(self.error)
            return None

        try:
            config = self.build_provider_config(provider)
            weather_data = await provider.fetch_weather_async(config)
        except WeatherProviderError as e:
            self.error = str(e)
            self._backoff.record_failure(type(e).__name__)
            logger.error(f"Error fetching weather data from {provider.id}: {e}")
            return None

        self._backoff.record_success()
        self.weather_data = weather_data
        self.error = None
        logger.info(f"Weather updated from {provider.id}: {weather_data.current.temperature}° {weather_data.current.condition}")
        if self.messenger is not None:
            self.messenger.publish(WeatherMessage(weather_data.current.condition_unified))
        return weather_data

    async def refresh_periodically(self) -> None:
        """Re-fetch every weather_update_interval seconds until cancelled."""
        while True:
            await asyncio.sleep(self.weather_update_interval)
            await self.update_weather()

    def _t(self, key: str) -> str:
        return self.translations.translate(key, self.language)

    def render(self) -> List[str]:
        if not self.show_weather:
            return []

        lines = [self.weather_title or self._t("weather.title")]
        if self.weather_data is None:
            lines.append(self._t("weather.unavailable") if self.error else self._t("weather.loading"))
            return lines

        current = self.weather_data.current
        if self.weather_display_mode in ("current", "both"):
            lines.append(f"{current.temperature:g}° {current.condition}")
            lines.append(f"{self._t('weather.feels_like')} {current.feels_like:g}°")
            lines.append(f"{self._t('weather.humidity')} {current.humidity}%")
            lines.append(f"{self._t('weather.wind')} {current.wind_speed:g} {current.wind_direction}")
        if self.weather_display_mode in ("forecast", "both"):
            for day in self.weather_data.daily[:self.weather_forecast_days]:
                lines.append(f"{day.date.strftime('%a')} {day.temperature_min:g}°/{day.temperature_max:g}° {day.condition}")
        return lines
