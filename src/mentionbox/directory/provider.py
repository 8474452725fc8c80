"""Directory providers.

A provider returns an unordered batch of directory entries. The controller
sorts the batch and treats any provider failure as an empty directory.
"""

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import httpx

from mentionbox.directory.loader import DirectoryLoadError, load_directory, parse_directory
from mentionbox.directory.models import DirectoryEntry
from mentionbox.directory.retry import RetryConfig, is_retryable_error

if TYPE_CHECKING:
    from mentionbox.config.settings import Settings

logger = logging.getLogger(__name__)

# Constants
DEFAULT_TIMEOUT = 10.0  # seconds


class DirectoryFetchError(Exception):
    """Exception raised when fetching the directory over HTTP fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DirectoryProvider(Protocol):
    """Asynchronous source of directory entries."""

    async def fetch_directory(self) -> list[DirectoryEntry]:
        """Return an unordered batch of entries."""
        ...


class FileDirectoryProvider:
    """Reads the directory from a local JSON or YAML file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def fetch_directory(self) -> list[DirectoryEntry]:
        """Load the file without blocking the event loop.

        Raises:
            DirectoryLoadError: If the file cannot be read or validated.
        """
        logger.debug("Loading directory from file %s", self._path)
        return await asyncio.to_thread(load_directory, self._path)


class HttpDirectoryProvider:
    """Fetches the directory from an HTTP endpoint.

    The endpoint returns a JSON list in the wire shape
    ``{username, name, avatar_url}``. Retryable failures (connection errors,
    timeouts, 429 and 5xx) are retried with exponential backoff.
    """

    def __init__(
        self,
        url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ):
        """Initialize the HTTP provider.

        Args:
            url: The directory endpoint URL.
            http_client: Optional shared HTTP client. If not provided,
                one is created on first fetch and closed by ``aclose()``.
            timeout: Request timeout in seconds.
            retry_config: Optional retry configuration.
        """
        self._url = url
        self._http_client = http_client
        self._owns_client = http_client is None
        self._timeout = timeout
        self._retry_config = retry_config or RetryConfig()

    @property
    def url(self) -> str:
        return self._url

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_directory(self) -> list[DirectoryEntry]:
        """Fetch the directory, retrying transient failures.

        Raises:
            DirectoryFetchError: If every attempt fails or the payload is invalid.
        """
        attempts = max(1, self._retry_config.max_attempts)
        attempt = 0
        while True:
            if attempt > 0:
                await self._retry_config.wait_before_retry(attempt)

            try:
                return await self._fetch_once()
            except DirectoryFetchError as e:
                if not is_retryable_error(e) or attempt + 1 >= attempts:
                    raise
                logger.warning(
                    "Directory fetch attempt %d/%d failed: %s",
                    attempt + 1,
                    attempts,
                    e,
                )
            attempt += 1

    async def _fetch_once(self) -> list[DirectoryEntry]:
        client = self._ensure_client()
        logger.debug("Fetching directory from %s", self._url)

        try:
            response = await client.get(
                self._url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise DirectoryFetchError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise DirectoryFetchError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            body = response.text
            logger.error(
                "Directory endpoint returned error: status=%d, body=%s",
                response.status_code,
                body[:200],
            )
            raise DirectoryFetchError(
                f"Directory endpoint returned HTTP {response.status_code}: {body[:200]}",
                status_code=response.status_code,
            )

        try:
            raw = response.json()
        except ValueError as e:
            raise DirectoryFetchError(f"Invalid JSON from directory endpoint: {e}") from e

        try:
            return parse_directory(raw)
        except DirectoryLoadError as e:
            raise DirectoryFetchError(str(e)) from e


def create_provider(settings: "Settings") -> FileDirectoryProvider | HttpDirectoryProvider:
    """Build the provider described by settings. A URL wins over a path."""
    if settings.directory_url:
        return HttpDirectoryProvider(
            settings.directory_url,
            timeout=settings.fetch_timeout_seconds,
            retry_config=RetryConfig(
                max_attempts=settings.retry_attempts,
                base_delay_ms=settings.retry_backoff_ms,
            ),
        )
    return FileDirectoryProvider(settings.directory_path)
