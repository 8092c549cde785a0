from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging
from weather.models import Weather
from .messenger import Messenger, WeatherMessage
from .readiness import ComponentState, ReadyController

logger = logging.getLogger(__name__)

PICSUM_URL = "https://picsum.photos/1920/1080?random={index}"


class CardComponent:
    """A sub-component of the card with its own readiness signal.

    The card assigns plain attributes first, then runs initialize() once.
    Subclasses put their own async setup in setup().
    """

    tag = "ha-component"

    def __init__(self):
        self.controller = ReadyController(self.tag)
        self.font_color: Optional[str] = None
        self.size: Optional[str] = None

    async def initialize(self) -> None:
        """Run setup() and resolve the readiness signal, once."""
        if self.controller.state is not ComponentState.UNINITIALIZED:
            return
        self.controller.begin()
        try:
            await self.setup()
        except Exception as e:
            logger.error(f"Error initializing {self.tag}: {e}")
        finally:
            self.controller.mark_ready()

    async def setup(self) -> None:
        pass

    def render(self) -> List[str]:
        return []


class ClockComponent(CardComponent):
    tag = "ha-clock"

    def __init__(self):
        super().__init__()
        self.time_format: Optional[Dict[str, Any]] = None
        self.date_format: Optional[Dict[str, Any]] = None
        self.language = "en"
        self.time_zone: Optional[str] = None
        self.clock_size: Optional[str] = None
        self.date_size: Optional[str] = None
        self.clock_top_margin: Optional[str] = None

    def _zone(self):
        if not self.time_zone:
            return None
        try:
            return ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown time zone '{self.time_zone}', using local time")
            return None

    def format_time(self, now: datetime) -> str:
        time_format = self.time_format or {}
        pattern = "%I:%M" if time_format.get("hour12") else "%H:%M"
        if time_format.get("second"):
            pattern += ":%S"
        if time_format.get("hour12"):
            pattern += " %p"
        return now.strftime(pattern)

    def format_date(self, now: datetime) -> str:
        date_format = self.date_format or {}
        pattern = "%d %B %Y"
        if date_format.get("weekday", "long") != "none":
            pattern = "%A, " + pattern
        return now.strftime(pattern)

    def render(self, now: Optional[datetime] = None) -> List[str]:
        now = now or datetime.now(self._zone())
        return [self.format_time(now), self.format_date(now)]


class SensorComponent(CardComponent):
    tag = "ha-sensors"

    def __init__(self):
        super().__init__()
        self.sensors: List[Any] = []
        self.hass: Optional[Dict[str, Any]] = None
        self.label_size: Optional[str] = None
        self.value_size: Optional[str] = None

    def render(self) -> List[str]:
        lines = []
        states = (self.hass or {}).get("states", {})
        for sensor in self.sensors:
            state = states.get(sensor.entity)
            if state is None:
                logger.debug(f"Sensor {sensor.entity} not available")
                continue
            unit = state.get("attributes", {}).get("unit_of_measurement", "")
            label = sensor.label or sensor.entity
            lines.append(f"{label}: {state.get('state')}{unit}".rstrip())
        return lines


class BackgroundImageComponent(CardComponent):
    """Rotating background images.

    Follows WeatherMessage broadcasts so image sources can pick pictures
    that fit the current weather.
    """

    tag = "ha-background-image"

    def __init__(self, messenger: Optional[Messenger] = None):
        super().__init__()
        self.config: Dict[str, Any] = {}
        self.background_opacity = 0.5
        self.hass: Optional[Dict[str, Any]] = None
        self.weather = Weather.ALL
        self.images: List[str] = []
        self._index = 0
        if messenger is not None:
            messenger.subscribe(WeatherMessage, self.on_weather_message)

    def on_weather_message(self, message: WeatherMessage) -> None:
        logger.debug(f"Background image weather filter set to {message.weather.value}")
        self.weather = message.weather

    async def setup(self) -> None:
        source = self.config.get("image_source_config", {})
        images = list(source.get("background_images") or [])
        if not images and source.get("image_source_id", "picsum") == "picsum":
            count = source.get("count") or 10
            images = [PICSUM_URL.format(index=i) for i in range(count)]
        self.images = images
        logger.debug(f"Background images prepared: {len(images)} image(s) from {source.get('image_source_id')}")

    @property
    def current_image(self) -> Optional[str]:
        if not self.images:
            return None
        return self.images[self._index % len(self.images)]

    def next_image(self) -> Optional[str]:
        if self.images:
            self._index = (self._index + 1) % len(self.images)
        return self.current_image

    def render(self) -> List[str]:
        if self.current_image is None:
            return []
        return [f"[background {self.current_image} opacity={self.background_opacity}]"]
