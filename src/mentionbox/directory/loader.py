"""Directory file loader.

Reads a JSON or YAML list of ``{username, name, avatar_url}`` records.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import TypeAdapter, ValidationError

from mentionbox.directory.models import DirectoryEntry

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}

_entries_adapter = TypeAdapter(list[DirectoryEntry])


class DirectoryLoadError(Exception):
    """Raised when a directory file cannot be read or validated."""

    pass


def parse_directory(raw: object) -> list[DirectoryEntry]:
    """Validate already-decoded directory data.

    Args:
        raw: Decoded JSON/YAML content, expected to be a list of records.

    Returns:
        Validated entries in their original order.

    Raises:
        DirectoryLoadError: If the data is not a list of valid records.
    """
    if not isinstance(raw, list):
        raise DirectoryLoadError(
            f"Directory must be a list of records, got {type(raw).__name__}"
        )

    try:
        return _entries_adapter.validate_python(raw)
    except ValidationError as e:
        raise DirectoryLoadError(f"Directory validation failed: {e}") from e


def load_directory(path: str | Path) -> list[DirectoryEntry]:
    """Load and validate a directory file.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file.

    Returns:
        Validated entries in file order (unsorted).

    Raises:
        DirectoryLoadError: If the file is missing, empty, malformed or invalid.
    """
    path = Path(path)

    if not path.exists():
        raise DirectoryLoadError(f"Directory file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                raw = yaml.safe_load(f)
            else:
                raw = json.load(f)
    except yaml.YAMLError as e:
        raise DirectoryLoadError(f"Invalid YAML in {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise DirectoryLoadError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise DirectoryLoadError(f"Failed to read {path}: {e}") from e

    if raw is None:
        raise DirectoryLoadError(f"Empty directory file: {path}")

    entries = parse_directory(raw)
    logger.info("Loaded %d directory entries from %s", len(entries), path)
    return entries
