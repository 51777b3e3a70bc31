"""Result shuffling and preview sampling."""

import random
from typing import Optional, Sequence, TypeVar

from models.search import TopicEntry

__all__ = ["sample_pair", "shuffle_items"]

T = TypeVar("T")

_rng = random.Random()


def shuffle_items(items: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """Return a uniformly random permutation of items as a new list."""
    shuffled = list(items)
    # Fisher-Yates
    (rng or _rng).shuffle(shuffled)
    return shuffled


def sample_pair(
    entry: TopicEntry, rng: Optional[random.Random] = None
) -> tuple[str, str]:
    """
    Pick one site and one query for a preview call.

    The two draws are independent and each is uniform over its own list,
    not over the site x query product.
    """
    rng = rng or _rng
    site = rng.choice(entry.sites)
    query = rng.choice(entry.queries)
    return site, query
