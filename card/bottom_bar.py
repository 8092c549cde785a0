from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence
import logging
from .components import CardComponent

logger = logging.getLogger(__name__)


class BottomBarComponent(CardComponent, ABC):
    """A widget that can occupy the card's bottom bar."""

    component_id = ""

    @abstractmethod
    def has_content(self) -> bool:
        """Whether the widget currently has something worth showing."""
        pass

    @abstractmethod
    def render(self) -> List[str]:
        pass


SelectionPolicy = Callable[[Sequence[BottomBarComponent]], Optional[BottomBarComponent]]


def first_with_content(components: Sequence[BottomBarComponent]) -> Optional[BottomBarComponent]:
    """Pick the first registered widget that has content."""
    return next((component for component in components if component.has_content()), None)


class BottomBarManager:
    """Holds the bottom-bar widgets and the one currently shown.

    Widgets are registered once and stay registered. Which one is current
    is decided outside the manager, through select() or a selection policy.
    """

    def __init__(self, host: Any = None):
        self.host = host
        self._components: List[BottomBarComponent] = []
        self._current: Optional[BottomBarComponent] = None

    @property
    def components(self) -> tuple:
        return tuple(self._components)

    @property
    def current_component(self) -> Optional[BottomBarComponent]:
        return self._current

    def register_component(self, component: BottomBarComponent) -> None:
        if component in self._components:
            logger.debug(f"Bottom bar component {component.component_id} already registered")
            return
        self._components.append(component)
        logger.debug(f"Registered bottom bar component: {component.component_id}")

    def select(self, component: Optional[BottomBarComponent]) -> None:
        """Make component current, or clear the selection with None."""
        if component is not None and component not in self._components:
            raise ValueError(f"Bottom bar component {component.component_id} is not registered")
        if component is not self._current:
            logger.debug(f"Bottom bar switched to {component.component_id if component else 'none'}")
        self._current = component

    def update_selection(self, policy: SelectionPolicy = first_with_content) -> Optional[BottomBarComponent]:
        self.select(policy(self.components))
        return self._current

    def render(self) -> List[str]:
        if self._current is None:
            return []
        return self._current.render()


class TransportationComponent(BottomBarComponent):
    tag = "ha-transportation"
    component_id = "transportation"

    def __init__(self):
        super().__init__()
        self.transportation = None
        self.departures: List[Dict[str, Any]] = []

    def update_departures(self, departures: List[Dict[str, Any]]) -> None:
        self.departures = list(departures or [])

    def has_content(self) -> bool:
        return bool(self.transportation) and bool(self.departures)

    def render(self) -> List[str]:
        limit = self.transportation.max_departures if self.transportation else 3
        lines = []
        for departure in self.departures[:limit]:
            parts = [str(departure.get('line', '?')), departure.get('destination'), f"{departure.get('minutes', '?')} min"]
            lines.append(" ".join(part for part in parts if part))
        return lines


class ActionBarComponent(BottomBarComponent):
    tag = "ha-action-bar"
    component_id = "action-bar"

    def __init__(self):
        super().__init__()
        self.config = None
        self.icon_size: Optional[str] = None

    def has_content(self) -> bool:
        return bool(self.config and self.config.enabled and self.config.actions)

    def render(self) -> List[str]:
        if not self.has_content():
            return []
        return [" | ".join(action.title for action in self.config.actions)]
