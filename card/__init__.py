"""Wall Clock Card: clock, sensors, weather and background in one card."""

from .card import WallClockCard, __version__
from .config import CardConfig
from .messenger import Messenger, Message, WeatherMessage
from .readiness import ReadyController, ComponentState
from .bottom_bar import BottomBarComponent, BottomBarManager, first_with_content
from .translations import Translations

__all__ = [
    'WallClockCard',
    'CardConfig',
    'Messenger',
    'Message',
    'WeatherMessage',
    'ReadyController',
    'ComponentState',
    'BottomBarComponent',
    'BottomBarManager',
    'first_with_content',
    'Translations',
    '__version__',
]
