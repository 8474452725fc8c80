"""Buffer editing primitives: span location, replacement and dispatch."""

from mentionbox.editing.dispatcher import DEFAULT_QUIET_SECONDS, QueryDispatcher
from mentionbox.editing.replace import (
    InvalidSpanError,
    ReplaceResult,
    replace_range,
    validate_span,
)
from mentionbox.editing.span import DEFAULT_TRIGGER, NO_SPAN, QuerySpan, locate_span

__all__ = [
    "DEFAULT_QUIET_SECONDS",
    "DEFAULT_TRIGGER",
    "InvalidSpanError",
    "NO_SPAN",
    "QueryDispatcher",
    "QuerySpan",
    "ReplaceResult",
    "locate_span",
    "replace_range",
    "validate_span",
]
