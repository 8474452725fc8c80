"""Mention controller.

Owns the buffer, the open query span and the directory snapshot, and wires
span location, query dispatch, matching and replacement together.
"""

import asyncio
import logging
from collections.abc import Iterable

from mentionbox.config.settings import Settings
from mentionbox.controller.state import CandidateView, MentionState, Presenter
from mentionbox.directory.loader import parse_directory
from mentionbox.directory.matcher import filter_entries
from mentionbox.directory.models import DirectoryEntry, sort_directory
from mentionbox.directory.provider import DirectoryProvider, create_provider
from mentionbox.editing.dispatcher import DEFAULT_QUIET_SECONDS, QueryDispatcher
from mentionbox.editing.replace import ReplaceResult, replace_range
from mentionbox.editing.span import DEFAULT_TRIGGER, NO_SPAN, QuerySpan, locate_span

logger = logging.getLogger(__name__)


class MentionController:
    """Drives the edit, dispatch, match and select cycle for one editor.

    All methods must be called from the event loop's thread. The directory
    is fetched at most once, when the first mention is opened, and a failed
    fetch is treated as an empty directory.

    Usage:
        controller = MentionController(provider, presenter)
        controller.on_edit("hi @ol", 6)
        ...
        controller.on_select(entry)
        controller.close()
    """

    def __init__(
        self,
        provider: DirectoryProvider,
        presenter: Presenter | None = None,
        trigger: str = DEFAULT_TRIGGER,
        quiet_seconds: float = DEFAULT_QUIET_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            provider: Source of directory entries.
            presenter: Optional rendering collaborator.
            trigger: Character that opens a mention.
            quiet_seconds: Quiet interval before a query is matched.
            loop: Event loop for timers and the fetch task. Defaults to the
                running loop.
        """
        self._provider = provider
        self._presenter = presenter
        self._trigger = trigger
        self._loop = loop
        self._dispatcher = QueryDispatcher(
            self.on_query_dispatched,
            quiet_seconds=quiet_seconds,
            loop=loop,
        )

        self._buffer = ""
        self._caret = 0
        self._span: QuerySpan = NO_SPAN
        self._query = ""
        self._snapshot: tuple[DirectoryEntry, ...] | None = None
        self._candidates: CandidateView | None = None
        self._fetch_task: asyncio.Task | None = None
        self._owns_provider = False
        self._closed = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        presenter: Presenter | None = None,
    ) -> "MentionController":
        """Build a controller with the provider, trigger and interval from settings.

        The controller owns the provider it creates; release it with ``aclose()``.
        """
        controller = cls(
            create_provider(settings),
            presenter=presenter,
            trigger=settings.trigger,
            quiet_seconds=settings.quiet_interval_seconds,
        )
        controller._owns_provider = True
        return controller

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def span(self) -> QuerySpan:
        return self._span

    @property
    def query(self) -> str:
        """The query most recently delivered by the dispatcher."""
        return self._query

    @property
    def state(self) -> MentionState:
        return MentionState.COMPOSING if self._span.is_active else MentionState.IDLE

    @property
    def snapshot(self) -> tuple[DirectoryEntry, ...] | None:
        """The sorted directory, or None while it has not been loaded."""
        return self._snapshot

    @property
    def candidates(self) -> CandidateView | None:
        """The candidate view on display, or None when the list is hidden."""
        return self._candidates

    @property
    def dispatcher(self) -> QueryDispatcher:
        return self._dispatcher

    @property
    def closed(self) -> bool:
        return self._closed

    def on_edit(self, buffer: str, caret: int) -> QuerySpan:
        """Adopt a new buffer and caret from the editing surface.

        Returns:
            The span now open, or ``NO_SPAN``.
        """
        if self._closed:
            logger.debug("Controller closed, ignoring edit")
            return NO_SPAN

        span = locate_span(buffer, caret, previous=self._span, trigger=self._trigger)
        self._buffer = buffer
        self._caret = caret

        if not span.is_active:
            # Clear immediately, but only once per closed mention.
            was_open = self._span.is_active or self._dispatcher.pending or bool(self._query)
            self._span = NO_SPAN
            if was_open:
                logger.debug("Mention closed")
                self._dispatcher.schedule("")
            return NO_SPAN

        if not self._span.is_active:
            logger.debug("Mention opened at %d", span.start)
        self._span = span
        self._ensure_fetch()
        self._dispatcher.schedule(span.text(buffer))
        return span

    def on_query_dispatched(self, query: str) -> None:
        """Recompute and present candidates for a dispatched query."""
        self._query = query

        if not query:
            self._candidates = None
            if self._presenter is not None:
                self._presenter.hide_candidates()
            return

        self._refresh_candidates()

    def on_directory_ready(self, entries: Iterable[DirectoryEntry]) -> None:
        """Store the directory snapshot, sorted by display name.

        Only the first snapshot is kept. If a query is on display, its
        candidates are recomputed right away.
        """
        if self._snapshot is not None:
            logger.warning("Directory snapshot already loaded, ignoring new batch")
            return

        self._snapshot = sort_directory(entries)
        logger.info("Directory ready with %d entries", len(self._snapshot))

        if self._query and not self._closed:
            self._refresh_candidates()

    def on_select(self, entry: DirectoryEntry) -> ReplaceResult | None:
        """Replace the open mention with ``entry``'s display name.

        Does nothing and returns None when no mention is open.
        """
        if self._closed or not self._span.is_active:
            logger.debug("No open mention, ignoring selection of @%s", entry.handle)
            return None

        result = replace_range(self._buffer, self._span, entry.display_name)
        logger.debug(
            "Replaced %r with %r", self._span.text(self._buffer), entry.display_name
        )

        self._buffer = result.buffer
        self._caret = result.caret
        self._span = NO_SPAN
        self._dispatcher.schedule("")

        if self._presenter is not None:
            self._presenter.render_buffer(result.buffer, result.caret)
            self._presenter.focus_editor()

        return result

    async def ensure_directory(self) -> tuple[DirectoryEntry, ...]:
        """Start the directory fetch if needed and wait for it.

        Returns:
            The sorted snapshot (empty if the fetch failed).
        """
        if self._snapshot is None:
            task = self._ensure_fetch()
            if task is not None:
                await task
        return self._snapshot or ()

    def close(self) -> None:
        """Tear down: cancel pending dispatches and any in-flight fetch."""
        if self._closed:
            return
        self._closed = True
        self._dispatcher.close()
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        logger.debug("Mention controller closed")

    async def aclose(self) -> None:
        """Tear down and release the provider if this controller created it."""
        self.close()
        if not self._owns_provider:
            return
        provider_aclose = getattr(self._provider, "aclose", None)
        if provider_aclose is not None:
            await provider_aclose()
        self._owns_provider = False

    def _refresh_candidates(self) -> None:
        collecting = self._snapshot is None
        entries = filter_entries(self._query, self._snapshot or (), trigger=self._trigger)
        view = CandidateView(collecting=collecting, entries=tuple(entries))
        self._candidates = view
        if self._presenter is not None:
            self._presenter.show_candidates(view)

    def _ensure_fetch(self) -> asyncio.Task | None:
        if self._snapshot is not None or self._closed:
            return None
        if self._fetch_task is None:
            loop = self._loop or asyncio.get_running_loop()
            self._fetch_task = loop.create_task(self._load_directory())
        return self._fetch_task

    async def _load_directory(self) -> None:
        logger.debug("Fetching directory")
        try:
            entries = parse_directory(await self._provider.fetch_directory())
        except Exception as e:
            logger.warning("Directory fetch failed, treating as empty: %s", e)
            entries = []

        if self._closed:
            return
        self.on_directory_ready(entries)
