"""
SearXNG Web Search.

Site-restricted news search through a self-hosted SearXNG instance.
Each call is bound to at most one site via a ``site:`` query prefix.

API: https://docs.searxng.org/dev/search_api.html
Rate Limits: Instance dependent
"""

import logging
import os
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from core.errors import MalformedBackendResponse, SourceUnavailable
from models.search import DiscoveryItem

__all__ = ["search", "build_query"]

# ══════════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════════

SOURCE_NAME = "searxng"
DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_ENGINES = ("bing news",)
DEFAULT_LANGUAGE = "en"
API_TIMEOUT = 30.0

logger = logging.getLogger(__name__)


def _get_api_url() -> str:
    """Get SearXNG base URL from environment."""
    return os.getenv("SEARXNG_API_URL", DEFAULT_API_URL).rstrip("/")


def build_query(query: str, site: Optional[str] = None) -> str:
    """Prefix the query with a single ``site:`` restriction."""
    query = " ".join(query.split())
    if site:
        return f"site:{site.strip()} {query}"
    return query


# ══════════════════════════════════════════════════════════════════════════════
# Search Function
# ══════════════════════════════════════════════════════════════════════════════


async def search(
    query: str,
    *,
    site: Optional[str] = None,
    engines: Optional[Sequence[str]] = None,
    pageno: int = 1,
    language: Optional[str] = None,
    max_results: Optional[int] = None,
    base_url: Optional[str] = None,
) -> list[DiscoveryItem]:
    """
    Search SearXNG, optionally restricted to one site.

    Args:
        query: Search terms
        site: Single site scope (e.g. 'techcrunch.com')
        engines: SearXNG engines to query (default: bing news)
        pageno: Result page, 1-indexed
        language: Locale code (default: en)
        max_results: Truncate to this many items
        base_url: Override SEARXNG_API_URL

    Returns:
        Normalized items; empty when the backend has no results

    Raises:
        SourceUnavailable: Instance unreachable or non-success status
        MalformedBackendResponse: Body is not the expected JSON shape

    Example:
        >>> items = await search("machine learning", site="wired.com")
    """
    params = {
        "q": build_query(query, site),
        "format": "json",
        "engines": ",".join(engines or DEFAULT_ENGINES),
        "pageno": pageno,
        "language": language or DEFAULT_LANGUAGE,
    }
    url = f"{(base_url or _get_api_url()).rstrip('/')}/search"

    try:
        async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise SourceUnavailable(SOURCE_NAME, f"HTTP {status}", status) from e
    except httpx.HTTPError as e:
        raise SourceUnavailable(SOURCE_NAME, f"{type(e).__name__}: {e}") from e
    except ValueError as e:
        raise MalformedBackendResponse(SOURCE_NAME, "invalid JSON body") from e

    items = _parse_results(data)
    if max_results is not None:
        items = items[:max_results]

    logger.debug(f"SearXNG '{params['q']}': {len(items)} results")
    return items


def _parse_results(data: Any) -> list[DiscoveryItem]:
    """Normalize a SearXNG JSON body into discovery items."""
    if not isinstance(data, dict) or not isinstance(data.get("results", []), list):
        raise MalformedBackendResponse(SOURCE_NAME, "missing results list")

    items = []
    for result in data.get("results", []):
        if not isinstance(result, dict):
            continue

        try:
            url = (result.get("url") or "").strip()
            if not url:
                continue

            title = result.get("title") or ""
            items.append(
                DiscoveryItem(
                    title=title,
                    url=url,
                    thumbnail=result.get("thumbnail") or result.get("img_src") or None,
                    content=result.get("content") or title,
                    author=result.get("author") or None,
                )
            )
        except (ValidationError, AttributeError, TypeError) as e:
            raise MalformedBackendResponse(SOURCE_NAME, "unexpected result fields") from e

    return items
