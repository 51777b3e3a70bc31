"""
Result deduplication.

Removes repeated items from a concatenated result stream using the
normalized URL as identity. First occurrence wins and the relative
order of survivors is preserved.
"""

import logging
from typing import Iterable

from models.search import DiscoveryItem, normalize_url

__all__ = ["deduplicate_items", "normalize_url"]

logger = logging.getLogger(__name__)


def deduplicate_items(items: Iterable[DiscoveryItem]) -> list[DiscoveryItem]:
    """
    Drop items whose normalized URL was already seen.

    Stable filter: the output is the input with later duplicates removed,
    so for a fixed input order the result is deterministic.

    Args:
        items: Concatenated results in collection order

    Returns:
        Items with distinct normalized URLs, in first-seen order
    """
    seen: set[str] = set()
    unique: list[DiscoveryItem] = []
    original = 0

    for item in items:
        original += 1
        key = item.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)

    removed = original - len(unique)
    if removed > 0:
        pct = removed / original * 100
        logger.info(f"Deduplication: removed {removed} ({pct:.1f}%)")

    return unique
