"""ElastiCache-backed shortcode -> destination cache

Responsibilities:
    - Serve cached destinations on the redirect hot path.
    - Degrade every failure to a miss / no-op so that an unavailable cache
      only costs latency.

Key schema (see CacheKeySchema):
    cache:<app>:<env>:links:<shortcode>  -> destination URL (string, with TTL)

Example:
    >>> cache = LinkCacheDAO(prefix='linkshortener:dev')
    >>> cache.set('abc', 'https://example.com', ttl=60)
    True
    >>> cache.get('abc')
    'https://example.com'
"""

import functools
import logging
from typing import Any
from collections.abc import Callable

import redis
from beartype import beartype

from linkshortener.constants import TTL
from linkshortener.dao.base import LinkCacheBaseDAO
from linkshortener.dao.cache.mixins import ElastiCacheClientMixin


logger = logging.getLogger(__name__)


def fail_open(default: Any) -> Callable:
    """Decorator: log Redis failures at WARNING and return `default` instead"""

    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except redis.exceptions.RedisError:
                logger.warning(
                    'Link cache unavailable. Falling back.',
                    extra={'operation': method.__name__, 'shortcode': args[0] if args else kwargs.get('shortcode')},
                    exc_info=True,
                )
                return default

        return wrapper

    return decorator


class LinkCacheDAO(ElastiCacheClientMixin, LinkCacheBaseDAO):
    """Redis (ElastiCache) implementation of the link cache"""

    @fail_open(default=None)
    @beartype
    def get(self, shortcode: str) -> str | None:
        return self.redis.get(self.keys.link_destination_key(shortcode))

    @fail_open(default=False)
    @beartype
    def set(self, shortcode: str, destination: str, ttl: int = TTL.ONE_HOUR) -> bool:
        if ttl <= 0:
            return False
        return bool(self.redis.set(self.keys.link_destination_key(shortcode), destination, ex=ttl))

    @fail_open(default=False)
    @beartype
    def delete(self, shortcode: str) -> bool:
        return bool(self.redis.delete(self.keys.link_destination_key(shortcode)))
