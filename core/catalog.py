"""
Topic catalog.

Static query terms and site allowlists per topic. Entries are
validated once at import and shared read-only.
"""

import logging
from types import MappingProxyType
from typing import Mapping, Optional, Union

from core.errors import UnknownTopic
from models.config import Topic
from models.search import TopicEntry

__all__ = [
    "CATALOG",
    "DEFAULT_TOPIC",
    "available_topics",
    "lookup",
    "resolve_topic",
]

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = Topic.AI

# ══════════════════════════════════════════════════════════════════════════════
# Catalog Data
# ══════════════════════════════════════════════════════════════════════════════

_ENTRIES = [
    TopicEntry(
        topic=Topic.AI,
        queries=(
            "artificial intelligence",
            "machine learning",
            "ChatGPT",
            "AI research",
            "neural networks",
            "deep learning",
        ),
        sites=(
            "techcrunch.com",
            "wired.com",
            "theverge.com",
            "arstechnica.com",
            "venturebeat.com",
        ),
        forum_phrase="artificial intelligence",
    ),
    TopicEntry(
        topic=Topic.TECH,
        queries=(
            "technology news",
            "latest tech",
            "science and innovation",
            "software development",
        ),
        sites=("techcrunch.com", "wired.com", "theverge.com", "arstechnica.com"),
        forum_phrase="technology",
    ),
    TopicEntry(
        topic=Topic.OPENSOURCE,
        queries=(
            "open source",
            "developer tools",
            "GitHub",
            "software development",
            "programming",
        ),
        sites=("techcrunch.com", "theverge.com", "arstechnica.com", "zdnet.com"),
        forum_phrase="open source",
    ),
    TopicEntry(
        topic=Topic.SECURITY,
        queries=(
            "cybersecurity",
            "security vulnerabilities",
            "data breaches",
            "infosec",
            "hacking",
        ),
        sites=(
            "krebsonsecurity.com",
            "thehackernews.com",
            "bleepingcomputer.com",
            "threatpost.com",
        ),
        forum_phrase="security",
    ),
    TopicEntry(
        topic=Topic.LINUX,
        queries=("Linux", "open source", "Ubuntu", "server", "cloud computing"),
        sites=("arstechnica.com", "zdnet.com", "theregister.com", "techcrunch.com"),
        forum_phrase="linux",
    ),
]

CATALOG: Mapping[Topic, TopicEntry] = MappingProxyType(
    {entry.topic: entry for entry in _ENTRIES}
)

if set(CATALOG) != set(Topic):
    raise RuntimeError("catalog out of sync with Topic enum")

# ══════════════════════════════════════════════════════════════════════════════
# Lookup
# ══════════════════════════════════════════════════════════════════════════════


def lookup(topic_id: Union[str, Topic]) -> TopicEntry:
    """
    Return the catalog entry for a topic id.

    Raises:
        UnknownTopic: id is not one of the catalog topics
    """
    if isinstance(topic_id, Topic):
        return CATALOG[topic_id]

    try:
        topic = Topic(str(topic_id).strip().lower())
    except ValueError:
        raise UnknownTopic(str(topic_id)) from None
    return CATALOG[topic]


def resolve_topic(
    topic_id: Optional[str], default: Optional[Topic] = None
) -> TopicEntry:
    """Look up a topic, substituting the default for absent or unknown ids."""
    fallback = default or DEFAULT_TOPIC
    if topic_id is None or not str(topic_id).strip():
        return CATALOG[fallback]

    try:
        return lookup(topic_id)
    except UnknownTopic as e:
        logger.warning(f"{e}; falling back to '{fallback.value}'")
        return CATALOG[fallback]


def available_topics() -> list[str]:
    return [topic.value for topic in CATALOG]
