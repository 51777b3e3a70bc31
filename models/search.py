"""Search item and topic models for Content Discovery MCP."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.config import Mode, Topic


def normalize_url(url: str) -> str:
    """Case-fold and trim a URL for identity comparison."""
    return url.strip().lower()


class DiscoveryItem(BaseModel):
    """A normalized search result from any source."""

    url: str = Field(..., min_length=1)
    title: str = ""
    thumbnail: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    points: Optional[int] = None  # forum only
    num_comments: Optional[int] = None  # forum only

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("url must not be blank")
        return v

    @property
    def dedup_key(self) -> str:
        """Case-folded, trimmed URL identifying this item."""
        return normalize_url(self.url)

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class TopicEntry(BaseModel):
    """Static query terms and site restrictions for one topic."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    topic: Topic
    queries: tuple[str, ...] = Field(..., min_length=1)
    sites: tuple[str, ...] = Field(..., min_length=1)
    forum_phrase: Optional[str] = None

    @field_validator("queries", "sites")
    @classmethod
    def validate_terms(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(term.strip() for term in v)
        if any(not term for term in cleaned):
            raise ValueError("terms must not be blank")
        return cleaned

    @property
    def forum_query(self) -> str:
        """Phrase used for the forum call, defaulting to the first query."""
        return self.forum_phrase or self.queries[0]


class AggregationRequest(BaseModel):
    """One aggregation invocation."""

    model_config = ConfigDict(frozen=True)

    entry: TopicEntry
    mode: Mode = Mode.NORMAL


class DiscoverInput(BaseModel):
    """Raw inbound discover parameters before catalog resolution."""

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True, extra="forbid"
    )

    topic: Optional[str] = Field(
        default=None,
        description="Topic id (e.g., 'ai', 'security'). Unknown ids use the default topic.",
    )
    mode: Optional[str] = Field(
        default=None,
        description="'normal' (merged feed, default) or 'preview' (single sampled call)",
    )

    def resolved_mode(self) -> Mode:
        """Map the raw mode string to a Mode, defaulting to normal."""
        if not self.mode:
            return Mode.NORMAL
        try:
            return Mode(self.mode.lower())
        except ValueError:
            return Mode.NORMAL
