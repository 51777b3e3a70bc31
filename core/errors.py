"""
Error taxonomy for content discovery.

    UnknownTopic              Topic id outside the catalog (recoverable)
    SourceUnavailable         One backend call failed
    MalformedBackendResponse  Backend answered but the body is unusable
    AllSourcesUnavailable     Every scheduled call in a fan-out failed
"""

from typing import Optional

__all__ = [
    "DiscoveryError",
    "UnknownTopic",
    "SourceUnavailable",
    "MalformedBackendResponse",
    "AllSourcesUnavailable",
]


class DiscoveryError(Exception):
    """Base class for all discovery failures."""


class UnknownTopic(DiscoveryError):
    def __init__(self, topic_id: str):
        self.topic_id = topic_id
        super().__init__(f"Unknown topic: {topic_id!r}")


class SourceUnavailable(DiscoveryError):
    """A single backend call failed (unreachable or non-success status)."""

    def __init__(self, source: str, reason: str, status_code: Optional[int] = None):
        self.source = source
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{source} unavailable: {reason}")


class MalformedBackendResponse(SourceUnavailable):
    """Backend returned success but content could not be parsed."""


class AllSourcesUnavailable(DiscoveryError):
    def __init__(self, failures: int):
        self.failures = failures
        super().__init__(f"All {failures} source calls failed")
