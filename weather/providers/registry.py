from typing import Dict, List, Optional
import logging
from .base import WeatherProvider
from .openweathermap import OpenWeatherMapProvider
from .pirateweather import PirateWeatherProvider

logger = logging.getLogger(__name__)


class WeatherProviderRegistry:
    """Lookup table from provider id to provider instance.

    Build one registry at startup and pass it to whatever needs providers.
    Registration is expected to finish before concurrent lookups start;
    the registry does no locking of its own.
    """

    def __init__(self):
        self._providers: Dict[str, WeatherProvider] = {}

    def register(self, provider: WeatherProvider) -> None:
        """Register a provider under its id. A later registration for the same id wins."""
        previous = self._providers.get(provider.id)
        if previous is not None and previous is not provider:
            logger.warning(f"Weather provider '{provider.id}' is already registered, replacing {previous!r} with {provider!r}")
        self._providers[provider.id] = provider
        logger.debug(f"Registered weather provider: {provider.id}")

    def get_provider(self, provider_id: Optional[str]) -> Optional[WeatherProvider]:
        """Return the provider registered under provider_id, or None."""
        if provider_id is None:
            return None
        return self._providers.get(provider_id)

    def get_all_providers(self) -> List[WeatherProvider]:
        """All providers, in the order their ids were first registered."""
        return list(self._providers.values())

    def __contains__(self, provider_id) -> bool:
        return provider_id in self._providers

    def __len__(self) -> int:
        return len(self._providers)


def create_default_registry() -> WeatherProviderRegistry:
    """Create a registry holding the built-in providers.

    OpenWeatherMap is registered first so it leads provider listings.
    """
    registry = WeatherProviderRegistry()
    registry.register(OpenWeatherMapProvider())
    registry.register(PirateWeatherProvider())
    return registry
