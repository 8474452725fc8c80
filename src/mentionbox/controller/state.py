"""Controller state types and the presentation interface."""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from mentionbox.directory.models import DirectoryEntry


class MentionState(str, Enum):
    """Lifecycle of a single mention."""

    IDLE = "idle"
    COMPOSING = "composing"


@dataclass(frozen=True)
class CandidateView:
    """What the candidate list should show.

    ``collecting`` is true while the directory fetch is still in flight;
    an empty ``entries`` with ``collecting`` false means nothing matched.
    """

    collecting: bool
    entries: tuple[DirectoryEntry, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def message(self) -> str | None:
        """Status text to show instead of entries, if any."""
        if self.collecting:
            return "Collecting User Data"
        if not self.entries:
            return "No Users Found"
        return None


class Presenter(Protocol):
    """Rendering side of the mention controller."""

    def show_candidates(self, view: CandidateView) -> None: ...

    def hide_candidates(self) -> None: ...

    def render_buffer(self, buffer: str, caret: int) -> None: ...

    def focus_editor(self) -> None: ...
