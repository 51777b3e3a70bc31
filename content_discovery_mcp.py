#!/usr/bin/env python3
"""
Content Discovery MCP Server

An MCP server that builds a topic discovery feed by fanning out
site-restricted news searches and a Hacker News story search, then
merging, deduplicating and shuffling the results.

Features:
- Curated topics (ai, tech, opensource, security, linux)
- Normal mode: merged, deduplicated, shuffled feed across all sources
- Preview mode: a single sampled site/query search
- Best-effort fan-out: failed sources contribute nothing instead of
  failing the feed
- Uniform failure payload; no internal detail is ever returned
"""

import json
import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from core import CATALOG, format_metrics_report, resolve_topic
from core.aggregator import get_aggregator
from models import DiscoverInput

# Load environment variables from .env file
load_dotenv()

# Set up logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("content_discovery_mcp")

# Constants
STATUS_OK = 200
STATUS_SERVER_ERROR = 500
FAILURE_MESSAGE = "An error has occurred"

# ============================================================================
# Request Boundary
# ============================================================================


async def handle_discover(
    topic: Optional[str] = None, mode: Optional[str] = None
) -> tuple[int, dict[str, Any]]:
    """
    Run one discover request and shape the response.

    Unknown or absent topics use the default topic; absent or unknown
    modes use normal mode. Any failure yields a 500 with the fixed
    generic message.

    Returns:
        (status, payload) where payload is {"blogs": [...]} or {"message": str}
    """
    try:
        params = DiscoverInput(topic=topic, mode=mode)
        aggregator = get_aggregator()
        entry = resolve_topic(params.topic, aggregator.settings.default_topic)
        resolved_mode = params.resolved_mode()
        if params.mode and params.mode.lower() != resolved_mode.value:
            logger.warning(f"Unknown mode {params.mode!r}; using '{resolved_mode.value}'")

        items = await aggregator.aggregate(entry, resolved_mode)
        return STATUS_OK, {"blogs": [item.to_payload() for item in items]}

    except ValidationError as e:
        logger.error(f"Invalid discover parameters: {e.error_count()} errors")
    except Exception:
        logger.exception("An error occurred in discover")

    return STATUS_SERVER_ERROR, {"message": FAILURE_MESSAGE}


# ============================================================================
# MCP Tools
# ============================================================================


@mcp.tool(
    name="discover_content",
    annotations={
        "title": "Discover Topic Content",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": True,
    },
)
async def discover_content(
    topic: Optional[str] = None, mode: Optional[str] = None
) -> str:
    """
    Build a discovery feed for a topic.

    Args:
        topic (Optional[str]): One of 'ai', 'tech', 'opensource', 'security',
            'linux'. Absent or unknown topics use the default topic.
        mode (Optional[str]): 'normal' (default) for the merged, deduplicated,
            shuffled feed, or 'preview' for one sampled site/query search.

    Returns:
        str: JSON object {"blogs": [...]} on success, {"message": "..."} on failure.
            Each blog has url and title plus optional thumbnail, content,
            author, points and num_comments.

    Examples:
        - discover_content("security")
        - discover_content("ai", "preview")
    """
    _, payload = await handle_discover(topic, mode)
    return json.dumps(payload, indent=2)


@mcp.tool(
    name="list_topics",
    annotations={
        "title": "List Discovery Topics",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def list_topics() -> str:
    """
    List the topics discover_content accepts with their queries and sites.

    Returns:
        str: JSON object keyed by topic id
    """
    catalog = {
        topic.value: {
            "queries": list(entry.queries),
            "sites": list(entry.sites),
            "forum_phrase": entry.forum_query,
        }
        for topic, entry in CATALOG.items()
    }
    return json.dumps(catalog, indent=2)


@mcp.tool(
    name="get_discovery_metrics",
    annotations={
        "title": "Discovery Metrics",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
async def get_discovery_metrics() -> str:
    """
    Report per-source call statistics since the server started.

    Returns:
        str: Markdown metrics report
    """
    return format_metrics_report()


def validate_environment():
    """Report the effective backend configuration on startup.

    Logged at WARNING so it shows under the default log level.
    """
    settings = get_aggregator().settings
    logger.warning(
        f"SearXNG: {settings.searxng_url} (engines: {', '.join(settings.searxng_engines)})"
    )
    logger.warning(f"Default topic: {settings.default_topic.value}")
    if settings.aggregate_deadline is None:
        logger.info("No aggregation deadline configured")


# ============================================================================
# Main Entry Point
# ============================================================================


def main():
    validate_environment()
    mcp.run()


if __name__ == "__main__":
    main()
