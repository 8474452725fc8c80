"""Substring matching of mention queries against the directory."""

from collections.abc import Sequence

from mentionbox.directory.models import DirectoryEntry


def normalize_query(query: str, trigger: str = "@") -> str:
    """Strip the leading trigger and lower-case the rest.

    Examples:
        "@Oli" -> "oli"
        "@" -> ""
    """
    if query.startswith(trigger):
        query = query[len(trigger) :]
    return query.lower()


def entry_matches(entry: DirectoryEntry, needle: str) -> bool:
    """Check an entry against an already normalized query.

    Display names are compared with spaces removed, since a mention
    query can never contain a space.
    """
    if needle in entry.handle.lower():
        return True
    return needle in entry.display_name.lower().replace(" ", "")


def filter_entries(
    query: str,
    directory: Sequence[DirectoryEntry],
    trigger: str = "@",
) -> list[DirectoryEntry]:
    """Return the entries matching a mention query, in directory order.

    A query of at most one character (the bare trigger) matches everything.

    Examples:
        "@" -> every entry
        "@oliv" -> entries whose handle or spaceless name contains "oliv"
        "@OliverY" -> matches display name "Oliver Young"

    Args:
        query: The raw query including the trigger, e.g. "@oli".
        directory: The sorted directory snapshot.
        trigger: The trigger character to strip.

    Returns:
        A new list; empty when nothing matches.
    """
    if len(query) <= 1:
        return list(directory)

    needle = normalize_query(query, trigger)
    return [entry for entry in directory if entry_matches(entry, needle)]
