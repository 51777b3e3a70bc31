"""
Data models for the Content Discovery MCP.

Provides Pydantic models for normalized search items, topic
configuration and request validation, plus the mode/topic enums.
"""

from models.config import DiscoverySettings, Mode, Topic, load_settings
from models.search import AggregationRequest, DiscoverInput, DiscoveryItem, TopicEntry

__all__ = [
    # Enums
    "Mode",
    "Topic",
    # Settings
    "DiscoverySettings",
    "load_settings",
    # Models
    "AggregationRequest",
    "DiscoverInput",
    "DiscoveryItem",
    "TopicEntry",
]
