"""
Content Discovery source adapters.

Each adapter exposes an async search function that returns normalized
``DiscoveryItem`` lists and raises ``SourceUnavailable`` (or its
``MalformedBackendResponse`` subclass) when the backend call fails:

    async def search(query: str, **options) -> list[DiscoveryItem]

Available Sources:
─────────────────────────────────────────────────────────────────────────────
WEB SEARCH
    searxng          Site-restricted news search via a SearXNG instance

DISCUSSION FORUMS (Free, no API key required)
    hackernews       Hacker News stories (via Algolia)

Configuration:
─────────────────────────────────────────────────────────────────────────────
Set in environment variables or .env file:

    SEARXNG_API_URL       Base URL of the SearXNG instance
                          (default: http://localhost:8080)
"""

from api import hackernews, searxng
from api.hackernews import (
    search as search_hackernews,
    search_by_date as search_hackernews_by_date,
)
from api.searxng import (
    build_query as build_searxng_query,
    search as search_searxng,
)

__all__ = [
    "hackernews",
    "searxng",
    # SearXNG
    "search_searxng",
    "build_searxng_query",
    # Hacker News
    "search_hackernews",
    "search_hackernews_by_date",
]
