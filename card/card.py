import asyncio
from typing import Any, Dict, List, Optional, Union
import logging
import log_config
from weather.models import Weather
from weather.providers import WeatherProviderRegistry, create_default_registry
from .bottom_bar import ActionBarComponent, BottomBarManager, TransportationComponent
from .components import BackgroundImageComponent, CardComponent, ClockComponent, SensorComponent
from .config import ActionBarConfig, CardConfig
from .messenger import Messenger, WeatherMessage
from .translations import Translations
from .weather_component import WeatherComponent

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

LOG_PREFIX = "wall-clock"


class WallClockCard:
    """The card: owns configuration and brings up every sub-component.

    Registry, messenger and translations are shared objects; pass the
    host's instances in, or let the card create its own.
    """

    def __init__(
        self,
        config: Union[CardConfig, Dict[str, Any], None] = None,
        registry: Optional[WeatherProviderRegistry] = None,
        messenger: Optional[Messenger] = None,
        translations: Optional[Translations] = None,
        hass: Optional[Dict[str, Any]] = None,
    ):
        logger.info(f"WALL-CLOCK-CARD {__version__}")
        self.config = self._validate_config(config)
        self.registry = registry if registry is not None else create_default_registry()
        self.messenger = messenger if messenger is not None else Messenger()
        self.translations = translations if translations is not None else Translations()
        self.hass = hass

        # Components
        self.clock_component = ClockComponent()
        self.sensor_component = SensorComponent()
        self.weather_component = WeatherComponent(self.registry, self.messenger, self.translations)
        self.background_image_component = BackgroundImageComponent(self.messenger)
        self.transportation_component = TransportationComponent()
        self.action_bar_component = ActionBarComponent()

        self.bottom_bar_manager = BottomBarManager(self)
        self.bottom_bar_manager.register_component(self.transportation_component)
        self.bottom_bar_manager.register_component(self.action_bar_component)

        self._init_tasks: List[asyncio.Task] = []
        self.setup_components()

    @staticmethod
    def _validate_config(config) -> CardConfig:
        if isinstance(config, CardConfig):
            return config
        return CardConfig.model_validate(config or {})

    @property
    def components(self) -> List[CardComponent]:
        """Every sub-component the readiness barrier waits for."""
        return [
            self.weather_component,
            self.background_image_component,
            self.clock_component,
            self.sensor_component,
            self.transportation_component,
            self.action_bar_component,
        ]

    def set_config(self, config: Union[CardConfig, Dict[str, Any]]) -> None:
        self.config = self._validate_config(config)
        self.setup_components()

    def setup_components(self) -> None:
        """Push the current configuration into every sub-component."""
        config = self.config
        sizes = config.custom_sizes

        # Clock
        self.clock_component.time_format = config.time_format
        self.clock_component.date_format = config.date_format
        self.clock_component.language = config.language
        self.clock_component.time_zone = config.time_zone
        self.clock_component.font_color = config.font_color
        self.clock_component.size = config.size
        if sizes:
            self.clock_component.clock_size = sizes.clock_size
            self.clock_component.date_size = sizes.date_size
            self.clock_component.clock_top_margin = sizes.clock_top_margin

        # Sensors
        self.sensor_component.sensors = config.sensors
        self.sensor_component.font_color = config.font_color
        self.sensor_component.size = config.size
        if sizes:
            self.sensor_component.label_size = sizes.label_size
            self.sensor_component.value_size = sizes.value_size
        if self.hass:
            self.sensor_component.hass = self.hass

        # Weather
        self.weather_component.show_weather = config.show_weather
        self.weather_component.weather_provider = config.weather_provider
        self.weather_component.weather_config = config.weather_config
        self.weather_component.weather_display_mode = config.weather_display_mode
        self.weather_component.weather_forecast_days = config.weather_forecast_days
        self.weather_component.weather_title = config.weather_title
        self.weather_component.weather_update_interval = config.weather_update_interval
        self.weather_component.font_color = config.font_color
        self.weather_component.language = config.language
        self.weather_component.size = config.size
        if sizes:
            self.weather_component.label_size = sizes.label_size
            self.weather_component.value_size = sizes.value_size

        # Transportation
        self.transportation_component.transportation = config.transportation
        self.transportation_component.font_color = config.font_color

        # Action bar
        enabled = config.enable_action_bar is True
        if config.action_bar:
            action_bar = config.action_bar.model_copy(update={'enabled': enabled})
        else:
            action_bar = ActionBarConfig(actions=[], enabled=enabled)
        self.config = config.model_copy(update={'action_bar': action_bar})
        self.action_bar_component.config = action_bar
        self.action_bar_component.font_color = config.font_color
        self.action_bar_component.size = config.size
        if sizes:
            self.action_bar_component.icon_size = sizes.action_bar_icon_size

    def init_background_image_component(self) -> None:
        config = self.config
        image_config = config.image_config
        image_source_config = {
            'image_source_id': config.image_source or 'picsum',
            'background_images': config.background_images,
            'entity': image_config.entity if image_config else None,
            'api_key': image_config.api_key if image_config else None,
            'content_filter': image_config.content_filter if image_config else None,
            'category': image_config.category if image_config else None,
            'count': image_config.count if image_config else None,
        }
        self.background_image_component.background_opacity = (
            config.background_opacity if config.background_opacity is not None else 0.5
        )
        self.background_image_component.config = {
            'image_source_config': image_source_config,
            'background_rotation_interval': config.background_rotation_interval,
        }
        self.background_image_component.hass = self.hass
        logger.debug("Background image component initialized")

    async def connect(self) -> None:
        """Mount the card: configure, start every component, then run the post-ready steps."""
        self.init_background_image_component()

        # Re-apply component properties
        self.setup_components()

        self._init_tasks = [asyncio.create_task(component.initialize()) for component in self.components]
        await self.init_connect_async()

    async def init_connect_async(self) -> None:
        """Wait for every component to be ready, then configure logging and translations."""
        await asyncio.gather(*(component.controller.wait() for component in self.components))
        logger.debug("All card components ready")

        self.transportation_component.font_color = self.config.font_color
        self.transportation_component.transportation = self.config.transportation

        log_config.configure_logging(
            level=log_config.get_log_level_from_string(self.config.log_level or 'info'),
            prefix=LOG_PREFIX,
            enable_source_tracking=True,
            enable_timestamps=True,
            log_to_console=True,
            log_to_file=False,
        )

        try:
            await self.translations.load_async()
            logger.debug("Loaded translations for all languages")
        except Exception as e:
            logger.error(f"Error loading translations: {e}")

        if not self.config.show_weather:
            self.messenger.publish(WeatherMessage(Weather.ALL))

    def render(self) -> List[str]:
        """Text rendering of the card, top to bottom."""
        self.bottom_bar_manager.update_selection()
        lines = []
        lines.extend(self.background_image_component.render())
        lines.extend(self.sensor_component.render())
        if self.config.show_weather:
            lines.extend(self.weather_component.render())
        lines.extend(self.clock_component.render())
        lines.extend(self.bottom_bar_manager.render())
        return lines
