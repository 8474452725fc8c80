"""Retry policy with exponential backoff for directory fetches."""

import asyncio
import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts (including initial).
        base_delay_ms: Base delay in milliseconds for exponential backoff.
        max_delay_ms: Maximum delay in milliseconds.
    """

    max_attempts: int = 2
    base_delay_ms: int = 500
    max_delay_ms: int = 5000

    def get_delay_ms(self, attempt: int) -> int:
        """Calculate delay for a given attempt using exponential backoff.

        Args:
            attempt: The current attempt number (0-indexed).

        Returns:
            Delay in milliseconds before the next retry.
        """
        if attempt <= 0:
            return 0
        delay = self.base_delay_ms * (2 ** (attempt - 1))
        return min(delay, self.max_delay_ms)

    async def wait_before_retry(self, attempt: int) -> None:
        """Wait before retrying based on the attempt number."""
        delay_ms = self.get_delay_ms(attempt)
        if delay_ms > 0:
            logger.debug("Waiting %dms before retry attempt %d", delay_ms, attempt + 1)
            await asyncio.sleep(delay_ms / 1000.0)


def is_retryable_error(error: Exception) -> bool:
    """Determine if a fetch error should trigger a retry.

    Connection errors, timeouts, 429 and 5xx responses are retryable.
    Other 4xx responses and malformed payloads are not.
    """
    if isinstance(error, (httpx.TimeoutException, httpx.TransportError)):
        return True

    status_code = getattr(error, "status_code", None)
    if status_code is not None:
        return status_code == 429 or 500 <= status_code < 600

    cause = error.__cause__
    if isinstance(cause, (httpx.TimeoutException, httpx.TransportError)):
        return True

    return False
