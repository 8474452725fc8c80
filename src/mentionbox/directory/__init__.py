"""Directory models, loading, providers and matching."""

from mentionbox.directory.loader import DirectoryLoadError, load_directory, parse_directory
from mentionbox.directory.matcher import entry_matches, filter_entries, normalize_query
from mentionbox.directory.models import DirectoryEntry, sort_directory
from mentionbox.directory.provider import (
    DirectoryFetchError,
    DirectoryProvider,
    FileDirectoryProvider,
    HttpDirectoryProvider,
    create_provider,
)
from mentionbox.directory.retry import RetryConfig, is_retryable_error

__all__ = [
    "DirectoryEntry",
    "DirectoryFetchError",
    "DirectoryLoadError",
    "DirectoryProvider",
    "FileDirectoryProvider",
    "HttpDirectoryProvider",
    "RetryConfig",
    "create_provider",
    "entry_matches",
    "filter_entries",
    "is_retryable_error",
    "load_directory",
    "normalize_query",
    "parse_directory",
    "sort_directory",
]
