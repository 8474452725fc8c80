"""Location of the in-progress mention query under the caret."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TRIGGER = "@"
SPACE = " "


@dataclass(frozen=True)
class QuerySpan:
    """Range of the buffer holding the mention being composed.

    ``buffer[start]`` is the trigger and ``buffer[start:end]`` is the whole
    token. ``NO_SPAN`` (``-1, -1``) means no mention is open.
    """

    start: int
    end: int

    @property
    def is_active(self) -> bool:
        return self.start >= 0

    def text(self, buffer: str) -> str:
        """The query string this span covers in ``buffer``."""
        if not self.is_active:
            return ""
        return buffer[self.start : self.end]


NO_SPAN = QuerySpan(-1, -1)


def _span_end(buffer: str, start: int) -> int:
    end = buffer.find(SPACE, start)
    return len(buffer) if end == -1 else end


def locate_span(
    buffer: str,
    caret: int,
    previous: QuerySpan = NO_SPAN,
    trigger: str = DEFAULT_TRIGGER,
) -> QuerySpan:
    """Find the mention span the caret is currently inside.

    Scans backward from the caret. The first trigger found that sits at the
    start of the buffer or right after a space opens the span; a space seen
    first means the caret is in an ordinary word. Triggers in the middle of a
    word (``user@host``) never open a span.

    Examples:
        ("hi @ol", 6) -> QuerySpan(3, 6)
        ("hi @oliver there", 5) -> QuerySpan(3, 10)
        ("oliver@gmail.com", 10) -> NO_SPAN
        ("@", 1) -> QuerySpan(0, 1)

    Args:
        buffer: Full buffer contents.
        caret: Caret offset in ``[0, len(buffer)]``.
        previous: The span located on the previous edit. Returned as-is when
            the result is unchanged.
        trigger: The trigger character.

    Returns:
        The active span, or ``NO_SPAN``.

    Raises:
        ValueError: If the caret is outside the buffer.
    """
    if caret < 0 or caret > len(buffer):
        raise ValueError(f"caret {caret} out of range for buffer of length {len(buffer)}")

    span = _scan(buffer, caret, trigger)
    if span == previous:
        return previous

    logger.debug("Query span changed: %s -> %s", previous, span)
    return span


def _scan(buffer: str, caret: int, trigger: str) -> QuerySpan:
    if not buffer:
        return NO_SPAN

    # No preceding character to classify, so a lone trigger opens a span.
    if len(buffer) == 1:
        if buffer[0] == trigger and caret == 1:
            return QuerySpan(0, caret)
        return NO_SPAN

    for i in range(caret - 1, -1, -1):
        ch = buffer[i]
        if ch == SPACE:
            return NO_SPAN
        if ch == trigger and (i == 0 or buffer[i - 1] == SPACE):
            return QuerySpan(i, _span_end(buffer, i))

    return NO_SPAN
