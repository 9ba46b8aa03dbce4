import threading
import time

from linkshortener.constants import TTL
from linkshortener.dao.base import LinkCacheBaseDAO


class LinkMemoryCacheDAO(LinkCacheBaseDAO):
    """Process-local shortcode -> destination cache with per-entry expiry.

    Expired entries are dropped lazily on read.
    """

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[str, float]] = {}  # shortcode -> (destination, deadline)

    def get(self, shortcode: str) -> str | None:
        with self._lock:
            entry = self._entries.get(shortcode)
            if entry is None:
                return None
            destination, deadline = entry
            if self._clock() >= deadline:
                del self._entries[shortcode]
                return None
            return destination

    def set(self, shortcode: str, destination: str, ttl: int = TTL.ONE_HOUR) -> bool:
        with self._lock:
            self._entries[shortcode] = (destination, self._clock() + ttl)
        return True

    def delete(self, shortcode: str) -> bool:
        with self._lock:
            return self._entries.pop(shortcode, None) is not None
