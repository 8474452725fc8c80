"""Trailing-edge coalescing of query changes."""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_QUIET_SECONDS = 0.3


class QueryDispatcher:
    """Delivers the latest query to a listener after a quiet interval.

    Every ``schedule`` restarts the quiet interval, so a burst of keystrokes
    produces one notification carrying the last value. An empty query is
    delivered immediately and discards anything pending, so hiding the
    candidate list never lags behind the input.

    Timers run on the asyncio event loop; all calls must come from the
    loop's thread.
    """

    def __init__(
        self,
        listener: Callable[[str], None],
        quiet_seconds: float = DEFAULT_QUIET_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            listener: Callback receiving each dispatched query.
            quiet_seconds: Pause required before a query is delivered.
            loop: Event loop for timers. Defaults to the running loop at
                the time of the first ``schedule``.
        """
        if quiet_seconds < 0:
            raise ValueError(f"quiet_seconds must be >= 0, got {quiet_seconds}")
        self._listener = listener
        self._quiet_seconds = quiet_seconds
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._pending_query: str | None = None
        self._closed = False

    @property
    def quiet_seconds(self) -> float:
        return self._quiet_seconds

    @property
    def pending(self) -> bool:
        """Whether a notification is waiting for the quiet interval."""
        return self._handle is not None

    @property
    def pending_query(self) -> str | None:
        return self._pending_query

    @property
    def closed(self) -> bool:
        return self._closed

    def schedule(self, query: str) -> None:
        """Queue ``query`` for delivery, replacing any pending value."""
        if self._closed:
            logger.debug("Dispatcher closed, dropping query %r", query)
            return

        if not query:
            self.cancel()
            self._deliver(query)
            return

        self._cancel_timer()
        self._pending_query = query
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._quiet_seconds, self._fire)

    def cancel(self) -> None:
        """Discard the pending notification, if any. Safe to call repeatedly."""
        self._cancel_timer()
        self._pending_query = None

    def flush(self) -> None:
        """Deliver the pending notification now instead of waiting."""
        if self._handle is None:
            return
        self._fire()

    def close(self) -> None:
        """Cancel pending work and ignore later ``schedule`` calls."""
        self.cancel()
        self._closed = True

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._cancel_timer()
        query = self._pending_query
        self._pending_query = None
        if query is None:
            return
        self._deliver(query)

    def _deliver(self, query: str) -> None:
        logger.debug("Dispatching query %r", query)
        self._listener(query)
