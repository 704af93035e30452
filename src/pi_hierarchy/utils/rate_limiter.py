"""Rate limiting for Jira API calls.

Implements a token bucket shared by the worker threads that issue requests.
Requests are never retried: a throttled (429) response is a failure like any other.
"""

import time
import logging
import threading

logger = logging.getLogger(__name__)


class RateLimiter:
    """Thread-safe token bucket rate limiter."""

    def __init__(
        self,
        requests_per_second: float = 10.0,
        burst_size: int = 20,
    ):
        """
        Initialize rate limiter.

        Args:
            requests_per_second: Sustained request rate
            burst_size: Maximum burst capacity
        """
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")

        self.requests_per_second = requests_per_second
        self.burst_size = burst_size

        self._tokens = float(burst_size)
        self._last_update = time.monotonic()
        self._lock = threading.Lock()

    def _refill_tokens(self) -> None:
        """Refill tokens based on elapsed time."""
        now = time.monotonic()
        elapsed = now - self._last_update
        self._tokens = min(
            self.burst_size,
            self._tokens + elapsed * self.requests_per_second
        )
        self._last_update = now

    def acquire(self) -> None:
        """Acquire a token, blocking the calling thread if necessary."""
        with self._lock:
            self._refill_tokens()

            if self._tokens < 1.0:
                wait_time = (1.0 - self._tokens) / self.requests_per_second
                logger.debug(f"Rate limit: waiting {wait_time:.2f}s")
                time.sleep(wait_time)
                self._refill_tokens()

            self._tokens -= 1.0

    @property
    def available_tokens(self) -> float:
        with self._lock:
            self._refill_tokens()
            return self._tokens
