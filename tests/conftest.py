"""Pytest configuration and fixtures."""

import json
from pathlib import Path
from tempfile import NamedTemporaryFile
from unittest.mock import MagicMock

import pytest

from mentionbox.directory import DirectoryEntry

USER_DATA = [
    {
        "username": "oyoung",
        "name": "Oliver Young",
        "avatar_url": "https://avatars.example.com/oyoung.png",
    },
    {
        "username": "cbrown",
        "name": "Chris Brown",
        "avatar_url": "https://avatars.example.com/cbrown.png",
    },
    {
        "username": "zed",
        "name": "anna zed",
        "avatar_url": "https://avatars.example.com/zed.png",
    },
    {
        "username": "oliver_m",
        "name": "Oliver Millard",
        "avatar_url": "https://avatars.example.com/oliver_m.png",
    },
    {
        "username": "ada",
        "name": "Ada Lovelace",
        "avatar_url": "https://avatars.example.com/ada.png",
    },
]


class StaticProvider:
    """Provider returning a fixed batch, counting fetches."""

    def __init__(self, entries: list[DirectoryEntry]) -> None:
        self.entries = entries
        self.fetch_count = 0

    async def fetch_directory(self) -> list[DirectoryEntry]:
        self.fetch_count += 1
        return list(self.entries)


class FailingProvider:
    """Provider whose fetch always fails."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or RuntimeError("directory unavailable")

    async def fetch_directory(self) -> list[DirectoryEntry]:
        raise self.error


@pytest.fixture(autouse=True)
def test_directory_path(monkeypatch):
    """Create a temporary directory file and set MENTIONBOX_DIRECTORY_PATH for all tests."""
    with NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
        json.dump(USER_DATA, f)
        f.flush()
        directory_path = f.name

    monkeypatch.setenv("MENTIONBOX_DIRECTORY_PATH", directory_path)

    from mentionbox.config.settings import get_settings

    get_settings.cache_clear()

    yield directory_path

    # Cleanup
    Path(directory_path).unlink(missing_ok=True)
    get_settings.cache_clear()


@pytest.fixture
def entries() -> list[DirectoryEntry]:
    """Directory entries in provider (unsorted) order."""
    return [DirectoryEntry.model_validate(record) for record in USER_DATA]


@pytest.fixture
def by_handle(entries) -> dict[str, DirectoryEntry]:
    return {entry.handle: entry for entry in entries}


@pytest.fixture
def presenter() -> MagicMock:
    """A presenter that records every call."""
    return MagicMock(
        spec=["show_candidates", "hide_candidates", "render_buffer", "focus_editor"]
    )
