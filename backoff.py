from datetime import datetime, timedelta
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ExponentialBackoff:
    def __init__(self, initial_backoff=60, max_backoff=3600, factor=3):
        """
        Delay refreshes after consecutive failures.

        Args:
            initial_backoff (int): Delay after the first failure in seconds (default: 60s)
            max_backoff (int): Upper bound for the delay in seconds (default: 3600s = 1 hour)
            factor (int): Growth of the delay per additional failure
        """
        self._consecutive_failures = 0
        self._next_retry_time: Optional[datetime] = None
        self._initial_backoff = initial_backoff
        self._max_backoff = max_backoff
        self._factor = factor
        self._last_error: Optional[str] = None

    def should_retry(self, now: Optional[datetime] = None) -> bool:
        """Check whether the backoff window has passed"""
        if self._next_retry_time is None:
            return True
        return (now or datetime.now()) >= self._next_retry_time

    def record_success(self):
        if self._consecutive_failures > 0:
            logger.info("Weather refresh recovered after %d failures", self._consecutive_failures)
        self.reset()

    def record_failure(self, error: Optional[str] = None, now: Optional[datetime] = None) -> int:
        """Register a failure and return the backoff delay in seconds."""
        self._consecutive_failures += 1
        self._last_error = error
        backoff_seconds = min(
            self._initial_backoff * (self._factor ** (self._consecutive_failures - 1)),
            self._max_backoff
        )
        self._next_retry_time = (now or datetime.now()) + timedelta(seconds=backoff_seconds)
        logger.warning("Weather refresh failed (%d consecutive failures). Backing off for %d seconds. Next retry at %s",
                       self._consecutive_failures, backoff_seconds, self.get_retry_time_str())
        return backoff_seconds

    def get_retry_time_str(self) -> str:
        if self._next_retry_time:
            return self._next_retry_time.strftime('%H:%M:%S')
        return ""

    def reset(self):
        self._consecutive_failures = 0
        self._next_retry_time = None
        self._last_error = None

    @property
    def failure_count(self) -> int:
        return self._consecutive_failures

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error
