from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
import os
import logging
import dotenv

logger = logging.getLogger(__name__)

DEFAULT_WEATHER_PROVIDER = "openweathermap"
DEFAULT_IMAGE_SOURCE = "picsum"


class CardModel(BaseModel):
    """Card configuration models accept both camelCase and snake_case keys."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CustomSizes(CardModel):
    clock_size: Optional[str] = Field(None, alias="clockSize")
    date_size: Optional[str] = Field(None, alias="dateSize")
    clock_top_margin: Optional[str] = Field(None, alias="clockTopMargin")
    label_size: Optional[str] = Field(None, alias="labelSize")
    value_size: Optional[str] = Field(None, alias="valueSize")
    action_bar_icon_size: Optional[str] = Field(None, alias="actionBarIconSize")


class SensorConfig(CardModel):
    entity: str
    label: Optional[str] = None


class ImageConfig(CardModel):
    entity: Optional[str] = None
    api_key: Optional[str] = Field(None, alias="apiKey")
    content_filter: Optional[str] = Field(None, alias="contentFilter")
    category: Optional[str] = None
    count: Optional[int] = None


class ActionConfig(CardModel):
    title: str
    icon: Optional[str] = None
    action_type: str = Field("call-service", alias="actionType")
    service: Optional[str] = None
    entity: Optional[str] = None


class ActionBarConfig(CardModel):
    actions: List[ActionConfig] = Field(default_factory=list)
    enabled: bool = False


class TransportationConfig(CardModel):
    stops: List[Dict[str, Any]] = Field(default_factory=list)
    max_departures: int = Field(3, alias="maxDepartures")


class CardConfig(CardModel):
    """Configuration of one wall clock card, as written in the dashboard YAML."""

    time_format: Optional[Dict[str, Any]] = Field(None, alias="timeFormat")
    date_format: Optional[Dict[str, Any]] = Field(None, alias="dateFormat")
    language: str = "en"
    time_zone: Optional[str] = Field(None, alias="timeZone")
    font_color: Optional[str] = Field(None, alias="fontColor")
    size: Optional[str] = None
    custom_sizes: Optional[CustomSizes] = Field(None, alias="customSizes")
    log_level: str = Field("info", alias="logLevel")

    sensors: List[SensorConfig] = Field(default_factory=list)

    show_weather: bool = Field(False, alias="showWeather")
    weather_provider: str = Field(DEFAULT_WEATHER_PROVIDER, alias="weatherProvider")
    weather_config: Dict[str, Any] = Field(default_factory=dict, alias="weatherConfig")
    weather_display_mode: str = Field("both", alias="weatherDisplayMode")
    weather_forecast_days: int = Field(3, alias="weatherForecastDays")
    weather_title: Optional[str] = Field(None, alias="weatherTitle")
    weather_update_interval: int = Field(1800, alias="weatherUpdateInterval")  # seconds

    image_source: str = Field(DEFAULT_IMAGE_SOURCE, alias="imageSource")
    image_config: Optional[ImageConfig] = Field(None, alias="imageConfig")
    background_images: List[str] = Field(default_factory=list, alias="backgroundImages")
    background_opacity: Optional[float] = Field(None, alias="backgroundOpacity")
    background_rotation_interval: int = Field(90, alias="backgroundRotationInterval")

    transportation: Optional[TransportationConfig] = None
    enable_action_bar: bool = Field(False, alias="enableActionBar")
    action_bar: Optional[ActionBarConfig] = Field(None, alias="actionBar")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "CardConfig":
        """Build a card configuration from environment variables / .env file."""
        dotenv.load_dotenv(env_file, override=True)

        weather_config = {
            'apiKey': os.getenv('WEATHER_API_KEY', ''),
            'latitude': os.getenv('Coordinates_LAT', 0),
            'longitude': os.getenv('Coordinates_LNG', 0),
            'units': os.getenv('weather_unit', 'metric').lower(),
        }
        config = cls(
            showWeather=os.getenv('show_weather', 'true').lower() == 'true',
            weatherProvider=os.getenv('WEATHER_PROVIDER', DEFAULT_WEATHER_PROVIDER).lower(),
            weatherConfig=weather_config,
            logLevel=os.getenv('log_level', 'info'),
            language=os.getenv('language', 'en'),
            enableActionBar=os.getenv('enable_action_bar', 'false').lower() == 'true',
        )
        logger.debug(f"Loaded card configuration from environment, weather provider: {config.weather_provider}")
        return config
