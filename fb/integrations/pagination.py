"""Paginated collection fetching for bins and boards.

The listing endpoints answer in one of two shapes:

    {"results": [...], "page-token": "..."}   paginated, token optional
    [...]                                     legacy, no pagination metadata

decode_page() turns a response body into the matching page type and
fetch_all() walks the page-token chain until a page carries no token.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fb.integrations.exceptions import ResponseParseError

logger = logging.getLogger(__name__)

MAX_RESULTS = 1000
PAGE_TOKEN_FIELD = "page-token"


@dataclass(frozen=True)
class PaginatedPage:
    """A page in the current response shape.

    Attributes:
        items: Raw item objects from the "results" field
        next_token: Cursor for the following page, None on the last page
    """

    items: list[dict[str, Any]]
    next_token: str | None = None


@dataclass(frozen=True)
class LegacyPage:
    """A bare-array response. Always the only page."""

    items: list[dict[str, Any]]


Page = PaginatedPage | LegacyPage


def decode_page(body: bytes | str, what: str) -> Page:
    """Decode a listing response body.

    The paginated shape is tried first and is recognised by a "results" list.
    Anything else must be a bare JSON array.

    Args:
        body: Raw response body
        what: Collection name for error messages (e.g. "bins")

    Returns:
        PaginatedPage or LegacyPage

    Raises:
        ResponseParseError: If the body matches neither shape
    """
    raw = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResponseParseError(
            f"failed to parse {what} response: {e}",
            raw_response=raw,
            original_error=e,
        ) from e

    if isinstance(data, dict) and isinstance(data.get("results"), list):
        token = data.get(PAGE_TOKEN_FIELD)
        if token is not None and not isinstance(token, str):
            raise ResponseParseError(
                f"failed to parse {what} response: {PAGE_TOKEN_FIELD} is not a string",
                raw_response=raw,
            )
        return PaginatedPage(items=_objects(data["results"], what, raw), next_token=token or None)

    if isinstance(data, list):
        return LegacyPage(items=_objects(data, what, raw))

    raise ResponseParseError(
        f"failed to parse {what} response: expected a results object or an array",
        raw_response=raw,
    )


def _objects(items: list[Any], what: str, raw: str) -> list[dict[str, Any]]:
    for item in items:
        if not isinstance(item, dict):
            raise ResponseParseError(
                f"failed to parse {what} response: expected objects, got {type(item).__name__}",
                raw_response=raw,
            )
    return items


def page_params(page_token: str | None) -> dict[str, str]:
    """Query parameters for one listing request."""
    params = {"max-results": str(MAX_RESULTS)}
    if page_token:
        params[PAGE_TOKEN_FIELD] = page_token
    return params


def fetch_all(get_page: Callable[[str | None], bytes], what: str) -> list[dict[str, Any]]:
    """Fetch every page of a collection and concatenate the items.

    Items keep response order; nothing is de-duplicated or sorted. Any
    error on any page propagates and the pages already fetched are dropped.

    Args:
        get_page: Performs one request for the given page token (None for
            the first page) and returns the raw body
        what: Collection name for error messages

    Returns:
        All items across all pages
    """
    items: list[dict[str, Any]] = []
    token: str | None = None
    pages = 0

    while True:
        page = decode_page(get_page(token), what)
        pages += 1
        items.extend(page.items)

        if isinstance(page, LegacyPage) or not page.next_token:
            break
        token = page.next_token

    logger.debug("Fetched %d %s across %d page(s)", len(items), what, pages)
    return items


__all__ = [
    "MAX_RESULTS",
    "PaginatedPage",
    "LegacyPage",
    "Page",
    "decode_page",
    "page_params",
    "fetch_all",
]
