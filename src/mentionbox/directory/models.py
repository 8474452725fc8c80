"""Directory entry model and snapshot helpers."""

from collections.abc import Iterable
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DirectoryEntry(BaseModel):
    """A single referenceable user in the directory.

    Accepts the provider wire shape (``username``, ``name``, ``avatar_url``)
    as well as the field names.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    handle: Annotated[str, Field(min_length=1, max_length=100, alias="username")]
    display_name: Annotated[str, Field(max_length=200, alias="name")]
    avatar_ref: Annotated[str, Field(max_length=2000, alias="avatar_url")] = ""

    @field_validator("handle")
    @classmethod
    def handle_has_no_whitespace(cls, v: str) -> str:
        """Handles are single tokens."""
        if any(ch.isspace() for ch in v):
            raise ValueError(f"handle must not contain whitespace: {v!r}")
        return v

    def to_wire(self) -> dict[str, str]:
        """Serialize using the provider wire field names."""
        return self.model_dump(by_alias=True)


def sort_directory(entries: Iterable[DirectoryEntry]) -> tuple[DirectoryEntry, ...]:
    """Return entries sorted ascending by display name.

    Codepoint order, case-sensitive. Entries with equal names keep their
    incoming order.
    """
    return tuple(sorted(entries, key=lambda entry: entry.display_name))
