"""Tests for query dispatch coalescing."""

import asyncio

import pytest

from mentionbox.editing.dispatcher import QueryDispatcher

QUIET = 0.02


@pytest.fixture
def received():
    return []


@pytest.fixture
def dispatcher(received):
    d = QueryDispatcher(received.append, quiet_seconds=QUIET)
    yield d
    d.close()


class TestQueryDispatcher:
    """Tests for QueryDispatcher."""

    @pytest.mark.asyncio
    async def test_burst_collapses_to_latest(self, dispatcher, received):
        """Test that rapid schedules produce one notification with the last value."""
        for query in ["@", "@o", "@ol", "@oli"]:
            dispatcher.schedule(query)

        assert received == []
        assert dispatcher.pending
        await asyncio.sleep(QUIET * 5)

        assert received == ["@oli"]
        assert not dispatcher.pending

    @pytest.mark.asyncio
    async def test_same_query_twice_notifies_once(self, dispatcher, received):
        """Test that duplicate schedules coalesce."""
        dispatcher.schedule("@ol")
        dispatcher.schedule("@ol")
        await asyncio.sleep(QUIET * 5)

        assert received == ["@ol"]

    @pytest.mark.asyncio
    async def test_separate_bursts_notify_separately(self, dispatcher, received):
        """Test that queries separated by the quiet interval are both delivered."""
        dispatcher.schedule("@o")
        await asyncio.sleep(QUIET * 5)
        dispatcher.schedule("@ol")
        await asyncio.sleep(QUIET * 5)

        assert received == ["@o", "@ol"]

    @pytest.mark.asyncio
    async def test_empty_query_is_immediate(self, dispatcher, received):
        """Test that clearing bypasses the quiet interval and drops pending work."""
        dispatcher.schedule("@ol")
        dispatcher.schedule("")

        assert received == [""]
        assert not dispatcher.pending

        await asyncio.sleep(QUIET * 5)
        assert received == [""]

    @pytest.mark.asyncio
    async def test_cancel_discards_pending(self, dispatcher, received):
        """Test that cancel prevents the notification."""
        dispatcher.schedule("@ol")
        dispatcher.cancel()
        await asyncio.sleep(QUIET * 5)

        assert received == []
        assert dispatcher.pending_query is None

    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(self, dispatcher, received):
        """Test that cancel is safe with nothing pending."""
        dispatcher.cancel()
        dispatcher.cancel()
        dispatcher.schedule("@a")
        dispatcher.cancel()
        dispatcher.cancel()

        assert received == []

    @pytest.mark.asyncio
    async def test_flush_delivers_now(self, dispatcher, received):
        """Test that flush fires the pending notification immediately."""
        dispatcher.schedule("@ol")
        dispatcher.flush()

        assert received == ["@ol"]
        assert not dispatcher.pending

        await asyncio.sleep(QUIET * 5)
        assert received == ["@ol"]

    @pytest.mark.asyncio
    async def test_flush_without_pending_is_noop(self, dispatcher, received):
        """Test flush with nothing pending."""
        dispatcher.flush()

        assert received == []

    @pytest.mark.asyncio
    async def test_close_ignores_later_schedules(self, dispatcher, received):
        """Test that a closed dispatcher never fires."""
        dispatcher.schedule("@ol")
        dispatcher.close()
        dispatcher.schedule("@oli")
        dispatcher.schedule("")
        await asyncio.sleep(QUIET * 5)

        assert received == []
        assert dispatcher.closed

    def test_negative_interval_rejected(self):
        """Test that the quiet interval cannot be negative."""
        with pytest.raises(ValueError):
            QueryDispatcher(lambda q: None, quiet_seconds=-1)

    def test_empty_query_needs_no_loop(self, received):
        """Test that clearing works outside a running loop."""
        dispatcher = QueryDispatcher(received.append)
        dispatcher.schedule("")

        assert received == [""]
