"""Bin and board name resolution.

Users may pass either an ID or a display name wherever a bin or board is
expected. A candidate made only of letters and digits is taken to be an ID
as-is; anything else is looked up by case-insensitive name.

Note: a display name that happens to be purely alphanumeric (e.g. "Backlog")
is treated as an ID and never looked up.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from fb.integrations.exceptions import NameResolutionError

logger = logging.getLogger(__name__)


class Named(Protocol):
    id: str
    name: str


def is_candidate_id(candidate: str) -> bool:
    """Return True if every character is a letter or a decimal digit."""
    return bool(candidate) and all(ch.isalpha() or ch.isdecimal() for ch in candidate)


def find_by_name(items: Iterable[Named], name: str) -> Named | None:
    """Return the first item whose name matches case-insensitively."""
    wanted = name.casefold()
    for item in items:
        if item.name.casefold() == wanted:
            return item
    return None


def resolve_id(
    candidate: str,
    fetch_items: Callable[[], Iterable[Named]],
    kind: str,
) -> str:
    """Resolve a bin or board name to its ID.

    Args:
        candidate: ID or display name supplied by the user
        fetch_items: Fetches the full collection; only called for names
        kind: "bin" or "board", used in error messages

    Returns:
        The candidate unchanged if it looks like an ID, otherwise the ID of
        the first item whose name matches.

    Raises:
        NameResolutionError: If no item has a matching name
    """
    if is_candidate_id(candidate):
        return candidate

    match = find_by_name(fetch_items(), candidate)
    if match is None:
        raise NameResolutionError(kind, candidate)

    logger.debug("Resolved %s %r to %s", kind, candidate, match.id)
    return match.id


__all__ = [
    "is_candidate_id",
    "find_by_name",
    "resolve_id",
]
