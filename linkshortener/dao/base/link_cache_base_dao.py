"""Abstract base class for short link cache DAOs.

The link cache is an optional capability: it may only change latency, never
correctness. Every implementation must therefore swallow (and log) its own
failures: get() degrades to a miss, set()/delete() degrade to no-ops.

Entries carry only the destination URL, no lifecycle metadata.
"""

from abc import ABC, abstractmethod

from linkshortener.constants import TTL


class LinkCacheBaseDAO(ABC):
    """Interface for shortcode -> destination cache DAOs.

    Methods:
        get(shortcode: str) -> str | None:
            Return the cached destination, or None on miss/failure.

        set(shortcode: str, destination: str, ttl: int = TTL.ONE_HOUR) -> bool:
            Cache a destination for ttl seconds. Returns False on failure.

        delete(shortcode: str) -> bool:
            Invalidate a cached destination. Returns False on failure.
    """

    @abstractmethod
    def get(self, shortcode: str) -> str | None:
        pass

    @abstractmethod
    def set(self, shortcode: str, destination: str, ttl: int = TTL.ONE_HOUR) -> bool:
        pass

    @abstractmethod
    def delete(self, shortcode: str) -> bool:
        pass


class NullLinkCacheDAO(LinkCacheBaseDAO):
    """No-op cache used when no cache is configured or reachable."""

    def get(self, shortcode: str) -> str | None:
        return None

    def set(self, shortcode: str, destination: str, ttl: int = TTL.ONE_HOUR) -> bool:
        return False

    def delete(self, shortcode: str) -> bool:
        return False
