"""
Hacker News Search (via Algolia).

Keyword search over HN stories. Items without an outbound link
point at the HN discussion page instead.

API: https://hn.algolia.com/api
Rate Limits: Generous (Algolia hosted)
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from core.errors import MalformedBackendResponse, SourceUnavailable
from models.search import DiscoveryItem

__all__ = ["search", "search_by_date"]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

SOURCE_NAME = "hackernews"
API_BASE = "https://hn.algolia.com/api/v1"
API_TIMEOUT = 30.0
ITEM_URL = "https://news.ycombinator.com/item?id={object_id}"
THUMBNAIL_URL = "https://news.ycombinator.com/y18.svg"
MAX_HITS_PER_PAGE = 50

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# Search Functions
# ══════════════════════════════════════════════════════════════════════════════


async def search(
    query: Optional[str] = None,
    *,
    search_type: str = "story",
    max_results: int = 15,
    page: Optional[int] = None,
    min_points: int = 0,
    numeric_filters: Optional[str] = None,
    by_date: bool = False,
) -> list[DiscoveryItem]:
    """
    Search Hacker News via Algolia.

    Args:
        query: Search terms; omit for front-page/recent stories
        search_type: Tag filter - 'story', 'ask_hn', 'show_hn', 'comment', or 'all'
        max_results: Hits per page (capped at 50)
        page: Zero-indexed page number
        min_points: Minimum points filter (0 disables it)
        numeric_filters: Raw Algolia filter expression, wins over min_points
        by_date: Use the recency-ordered endpoint

    Returns:
        Normalized stories with title, url, author, points, num_comments

    Raises:
        SourceUnavailable: API unreachable or non-success status
        MalformedBackendResponse: Body is not the expected JSON shape

    Example:
        >>> items = await search("rust async", min_points=100)
    """
    params = _build_params(
        query,
        search_type=search_type,
        max_results=max_results,
        page=page,
        min_points=min_points,
        numeric_filters=numeric_filters,
    )
    endpoint = "search_by_date" if by_date else "search"

    try:
        async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
            response = await client.get(f"{API_BASE}/{endpoint}", params=params)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise SourceUnavailable(SOURCE_NAME, f"HTTP {status}", status) from e
    except httpx.HTTPError as e:
        raise SourceUnavailable(SOURCE_NAME, f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        raise MalformedBackendResponse(SOURCE_NAME, "invalid JSON body") from e

    if not isinstance(data, dict) or not isinstance(data.get("hits", []), list):
        raise MalformedBackendResponse(SOURCE_NAME, "missing hits list")

    try:
        items = [_normalize_hit(hit) for hit in data.get("hits", []) if isinstance(hit, dict)]
    except (ValidationError, AttributeError, TypeError) as e:
        raise MalformedBackendResponse(SOURCE_NAME, "unexpected hit fields") from e

    logger.debug(f"HN '{query or ''}' ({endpoint}): {len(items)} hits")
    return items


async def search_by_date(query: Optional[str] = None, **options: Any) -> list[DiscoveryItem]:
    """Most recent stories first. Accepts the same options as ``search``."""
    return await search(query, by_date=True, **options)


def _build_params(
    query: Optional[str],
    *,
    search_type: str,
    max_results: int,
    page: Optional[int],
    min_points: int,
    numeric_filters: Optional[str],
) -> dict[str, Any]:
    params: dict[str, Any] = {"hitsPerPage": max(1, min(max_results, MAX_HITS_PER_PAGE))}

    if query and query.strip():
        params["query"] = query.strip()

    if search_type != "all":
        params["tags"] = search_type

    if page is not None:
        params["page"] = page

    if numeric_filters:
        params["numericFilters"] = numeric_filters
    elif min_points > 0:
        params["numericFilters"] = f"points>{min_points}"

    return params


def _normalize_hit(hit: dict[str, Any]) -> DiscoveryItem:
    title = hit.get("title") or ""
    return DiscoveryItem(
        title=title,
        url=hit.get("url") or ITEM_URL.format(object_id=hit.get("objectID", "")),
        thumbnail=THUMBNAIL_URL,
        content=hit.get("story_text") or title,
        author=hit.get("author"),
        points=hit.get("points"),
        num_comments=hit.get("num_comments"),
    )
