import asyncio
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class ComponentState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class ReadyController:
    """One-shot readiness signal owned by a card sub-component.

    The controller moves UNINITIALIZED -> INITIALIZING -> READY. READY is
    terminal: once reached it never resets, and any number of tasks can
    await wait() before or after it happens.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._state = ComponentState.UNINITIALIZED
        self._event = asyncio.Event()

    @property
    def state(self) -> ComponentState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ComponentState.READY

    def begin(self) -> None:
        """Mark the start of initialization. No-op unless still uninitialized."""
        if self._state is ComponentState.UNINITIALIZED:
            self._state = ComponentState.INITIALIZING
            logger.debug(f"{self.name or 'component'} initializing")

    def mark_ready(self) -> bool:
        """Resolve the signal. Returns False if it was already resolved."""
        if self._state is ComponentState.READY:
            return False
        self._state = ComponentState.READY
        self._event.set()
        logger.debug(f"{self.name or 'component'} ready")
        return True

    async def wait(self) -> None:
        await self._event.wait()

    @property
    def ready(self):
        """Awaitable resolving once the component is ready."""
        return self.wait()
