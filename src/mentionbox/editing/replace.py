"""Exact-range replacement of a mention span."""

from dataclasses import dataclass

from mentionbox.editing.span import QuerySpan


class InvalidSpanError(ValueError):
    """Raised when a replacement is requested for a span the buffer cannot hold.

    This is a programming error: callers must only pass active spans
    located against the same buffer.
    """

    pass


@dataclass(frozen=True)
class ReplaceResult:
    """Buffer and caret after a replacement."""

    buffer: str
    caret: int


def validate_span(buffer: str, span: QuerySpan) -> None:
    """Check that ``span`` is active and lies inside ``buffer``.

    Raises:
        InvalidSpanError: If the span is the sentinel or out of bounds.
    """
    if not span.is_active:
        raise InvalidSpanError("cannot replace without an active span")
    if not 0 <= span.start < span.end <= len(buffer):
        raise InvalidSpanError(
            f"span {span.start}:{span.end} out of bounds for buffer of length {len(buffer)}"
        )


def replace_range(buffer: str, span: QuerySpan, replacement: str) -> ReplaceResult:
    """Substitute ``replacement`` for the text covered by ``span``.

    The caret lands right after the inserted text. Surrounding text,
    including whitespace, is left untouched.

    Examples:
        ("hi @oliver there", QuerySpan(3, 10), "Oliver Young")
            -> ReplaceResult("hi Oliver Young there", 15)
    """
    validate_span(buffer, span)
    new_buffer = buffer[: span.start] + replacement + buffer[span.end :]
    return ReplaceResult(buffer=new_buffer, caret=span.start + len(replacement))
