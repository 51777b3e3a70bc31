"""Configuration enums and runtime settings for Content Discovery MCP."""

import logging
import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class Topic(str, Enum):
    """Closed set of discovery topics."""

    AI = "ai"
    TECH = "tech"
    OPENSOURCE = "opensource"
    SECURITY = "security"
    LINUX = "linux"


class Mode(str, Enum):
    """Aggregation modes."""

    NORMAL = "normal"  # Full merged, deduplicated, shuffled feed
    PREVIEW = "preview"  # Single sampled site/query call


# ══════════════════════════════════════════════════════════════════════════════
# Settings
# ══════════════════════════════════════════════════════════════════════════════


class DiscoverySettings(BaseModel):
    """Runtime settings resolved from the environment."""

    model_config = ConfigDict(frozen=True)

    searxng_url: str = Field(default="http://localhost:8080")
    searxng_engines: tuple[str, ...] = Field(default=("bing news",))
    language: str = Field(default="en")
    default_topic: Topic = Field(default=Topic.AI)
    forum_item_limit: int = Field(default=15, ge=1, le=50)
    source_timeout: Optional[float] = Field(default=20.0, gt=0)
    aggregate_deadline: Optional[float] = Field(default=None, gt=0)
    log_level: str = Field(default="WARNING")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    # Zero or negative disables the bound
    return value if value > 0 else None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _env_topic(name: str, default: Topic) -> Topic:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    try:
        return Topic(raw)
    except ValueError:
        logger.warning(f"Ignoring unknown {name}={raw!r}, using {default.value}")
        return default


def load_settings() -> DiscoverySettings:
    """Build settings from environment variables, falling back to defaults."""
    engines = [
        e.strip()
        for e in os.getenv("SEARXNG_ENGINES", "bing news").split(",")
        if e.strip()
    ]
    forum_limit = _env_int("HN_STORY_LIMIT", 15)
    if not 1 <= forum_limit <= 50:
        logger.warning(f"HN_STORY_LIMIT={forum_limit} out of range, using 15")
        forum_limit = 15

    return DiscoverySettings(
        searxng_url=os.getenv("SEARXNG_API_URL", "http://localhost:8080").rstrip("/"),
        searxng_engines=tuple(engines) or ("bing news",),
        language=os.getenv("DISCOVER_LANGUAGE", "en").strip() or "en",
        default_topic=_env_topic("DISCOVER_DEFAULT_TOPIC", Topic.AI),
        forum_item_limit=forum_limit,
        source_timeout=_env_float("SOURCE_TIMEOUT", 20.0),
        aggregate_deadline=_env_float("AGGREGATE_DEADLINE", None),
        log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
    )
