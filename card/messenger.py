from collections import defaultdict
from typing import Callable, Dict, List, Type
import logging
from weather.models import Weather

logger = logging.getLogger(__name__)


class Message:
    """Base class for messages sent over the Messenger."""


class WeatherMessage(Message):
    """Announces the weather condition other components should follow.

    Weather.ALL means "no particular condition", e.g. when weather is off.
    """

    def __init__(self, weather: Weather):
        self.weather = weather

    def __repr__(self) -> str:
        return f"WeatherMessage({self.weather.value})"


class Messenger:
    """In-process publish/subscribe channel.

    Create one per card host and hand it to publishers and subscribers.
    Delivery is immediate and synchronous; publishing with no subscriber
    does nothing.
    """

    def __init__(self):
        self._subscribers: Dict[Type[Message], List[Callable[[Message], None]]] = defaultdict(list)

    def subscribe(self, message_type: Type[Message], callback: Callable[[Message], None]) -> Callable[[], None]:
        """Subscribe to a message type. Returns a function that unsubscribes."""
        self._subscribers[message_type].append(callback)

        def unsubscribe():
            callbacks = self._subscribers.get(message_type, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def publish(self, message: Message) -> int:
        """Deliver a message to every subscriber of its type.

        Returns the number of subscribers that handled it.
        """
        delivered = 0
        for callback in list(self._subscribers.get(type(message), [])):
            try:
                callback(message)
                delivered += 1
            except Exception as e:
                logger.error(f"Error delivering {message!r} to {callback!r}: {e}")
        logger.debug(f"Published {message!r} to {delivered} subscriber(s)")
        return delivered
