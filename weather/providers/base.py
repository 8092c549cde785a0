from abc import ABC, abstractmethod
from ..models import WeatherData, WeatherProviderConfig
from typing import Optional
import logging

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10  # seconds


class WeatherProviderError(Exception):
    """Base class for every error raised by a weather provider."""


class WeatherConfigError(WeatherProviderError, ValueError):
    """The provider configuration is missing a credential or coordinates.

    Raised before any request is sent.
    """


class WeatherApiError(WeatherProviderError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, vendor: str, status_code: int, reason: Optional[str] = None):
        self.vendor = vendor
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"{vendor} API error: {status_code} {self.reason}".rstrip())


class WeatherFetchError(WeatherProviderError):
    """Any other failure while fetching or transforming provider data."""


class WeatherProvider(ABC):
    """Contract implemented by every weather data provider.

    A provider instance is created once and registered once. It keeps no
    per-request state: everything that varies between calls comes in
    through the WeatherProviderConfig passed to fetch_weather_async.
    """

    id: str = ""
    name: str = ""
    description: str = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    def get_default_config(self) -> WeatherProviderConfig:
        """Return the configuration a new card starts from.

        Pure, no I/O. Coordinates are left at 0, which means "not set".
        """
        return WeatherProviderConfig()

    @abstractmethod
    async def fetch_weather_async(self, config: WeatherProviderConfig) -> WeatherData:
        """Fetch and normalize weather data.

        Implementations validate the configuration before any network call
        and send exactly one request per call.

        Raises:
            WeatherConfigError: api key or coordinates are missing
            WeatherApiError: the API answered with a non-success status
            WeatherFetchError: transport, decoding or transform failure
        """
        pass
