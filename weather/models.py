from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum
import logging

logger = logging.getLogger(__name__)

MAX_DAILY_FORECAST_DAYS = 7


class Weather(str, Enum):
    """Unified weather condition shared by every provider.

    Providers map their own condition vocabulary onto these values.
    ALL is the catch-all for anything a provider table does not know.
    """
    CLEAR_SKY = "Clear"
    RAIN = "Rain"
    SNOW = "Snow"
    CLOUDS = "Clouds"
    FOG = "Fog"
    MIST = "Mist"
    WIND = "Wind"
    THUNDERSTORM = "Thunderstorm"
    EXTREME = "Extreme"
    ALL = "All"


class Units(str, Enum):
    """Measurement system requested from a provider.

    - METRIC: °C, m/s, hPa (default)
    - IMPERIAL: °F, mph, hPa
    """
    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, value) -> "Units":
        """Convert a configuration value to a Units member, defaulting to metric."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning(f"Invalid units '{value}', defaulting to metric")
            return cls.METRIC


class WeatherProviderConfig(BaseModel):
    """Per-request settings handed to a provider's fetch."""
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field("", alias="apiKey")
    latitude: float = 0
    longitude: float = 0
    units: Units = Units.METRIC

    @field_validator("api_key", mode="before")
    @classmethod
    def _none_key_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _none_coordinate_is_unset(cls, value):
        return 0 if value in (None, "") else value

    @field_validator("units", mode="before")
    @classmethod
    def _parse_units(cls, value):
        return Units.parse(value if value is not None else Units.METRIC)


class CurrentWeather(BaseModel):
    temperature: float
    feels_like: float
    condition: str
    condition_unified: Weather = Weather.ALL
    icon: str  # URL or icon name, depending on the provider
    humidity: int = Field(ge=0, le=100)
    pressure: float
    wind_speed: float
    wind_direction: str
    uv_index: Optional[float] = None


class DailyWeather(BaseModel):
    """One day of forecast.

    Attributes:
        date: Start of the forecast day (timezone-aware, UTC)
        temperature_max: Highest temperature of the day
        temperature_min: Lowest temperature of the day
        humidity: Relative humidity, 0-100
        wind_bearing: Direction the wind comes from in degrees, 0-359
        cloud_cover: Sky covered by clouds, 0-100
    """
    date: datetime
    temperature_max: float
    temperature_min: float
    condition: str
    condition_unified: Weather = Weather.ALL
    icon: str
    humidity: int = Field(ge=0, le=100)
    pressure: float
    wind_speed: float
    wind_gust: Optional[float] = None
    wind_bearing: int = Field(ge=0, le=359)
    cloud_cover: int = Field(ge=0, le=100)
    uv_index: Optional[float] = None


class Location(BaseModel):
    latitude: float
    longitude: float
    timezone: Optional[str] = None


class WeatherData(BaseModel):
    current: CurrentWeather
    daily: List[DailyWeather] = Field(default_factory=list, max_length=MAX_DAILY_FORECAST_DAYS)
    location: Optional[Location] = None
    attribution: Optional[str] = None
