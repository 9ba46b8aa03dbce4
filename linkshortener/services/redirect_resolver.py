"""Shortcode -> destination resolution (the redirect hot path)

Resolution runs cache-aside:

    CacheLookup --hit--> return destination, dispatch click recording (background)
        |
       miss
        v
    StoreLookup --absent--> NotFoundError
        |        --inactive--> GoneError(reason='inactive')
        |        --expired---> GoneError(reason='expired')
        v
    ResolvedFromStore: populate cache (TTL bounded by the link's lifetime),
                       record the click synchronously, return destination

NOTE: Cache entries hold only the destination, so a cache hit skips the
lifecycle checks. Deactivate and delete invalidate the cache entry before
touching the store, and cached entries never outlive `expires_at`; a link can
still be served from a cache write that raced its deactivation until that
entry's TTL runs out.

Example:
    >>> resolver = RedirectResolver(short_link_dao, link_cache)
    >>> resolver.resolve('abc', ClickEventModel(ip_address='203.0.113.7'))
    'https://example.com'
"""

import logging
from typing import Optional

from linkshortener.constants import TTL
from linkshortener.models import ClickEventModel
from linkshortener.dao.base import ShortLinkBaseDAO, LinkCacheBaseDAO, NullLinkCacheDAO
from linkshortener.exceptions import NotFoundError, GoneError
from linkshortener.services.click_recorder import ClickRecorder
from linkshortener.services.helpers import translate_store_errors, bounded_cache_ttl


logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolve shortcodes to destinations and record the visit

    Args:
        short_link_dao (ShortLinkBaseDAO):
            Durable store of links (source of truth).
        link_cache (Optional[LinkCacheBaseDAO]):
            Ephemeral shortcode -> destination cache. Defaults to no cache.
        click_recorder (Optional[ClickRecorder]):
            Defaults to a recorder writing to short_link_dao.
        cache_ttl (int):
            Upper bound of a cache entry's lifetime in seconds.
    """

    def __init__(
        self,
        short_link_dao: ShortLinkBaseDAO,
        link_cache: Optional[LinkCacheBaseDAO] = None,
        click_recorder: Optional[ClickRecorder] = None,
        cache_ttl: int = TTL.ONE_HOUR,
    ):
        self.short_link_dao = short_link_dao
        self.link_cache = link_cache or NullLinkCacheDAO()
        self.click_recorder = click_recorder or ClickRecorder(short_link_dao)
        self.cache_ttl = cache_ttl

    @translate_store_errors
    def resolve(self, shortcode: str, click: Optional[ClickEventModel] = None) -> str:
        """Return the destination for shortcode

        Raises:
            NotFoundError: If no link uses the shortcode.
            GoneError: If the link is inactive or expired (reason attached).
            InfrastructureError: If the data store is unreachable.
        """
        click = click or ClickEventModel()

        destination = self.link_cache.get(shortcode)
        if destination is not None:
            logger.debug('Resolved shortcode from cache.', extra={'shortcode': shortcode})
            self.click_recorder.dispatch(shortcode, click)
            return destination

        short_link = self.short_link_dao.get(shortcode)
        if short_link is None:
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.")

        reason = short_link.gone_reason()
        if reason is not None:
            logger.info('Refused redirect to gone link.', extra={'shortcode': shortcode, 'reason': reason})
            raise GoneError(shortcode, reason)

        ttl = bounded_cache_ttl(short_link, self.cache_ttl)
        if ttl > 0:
            self.link_cache.set(shortcode, short_link.original_url, ttl=ttl)

        self.click_recorder.record(shortcode, click, short_link=short_link)
        logger.debug('Resolved shortcode from data store.', extra={'shortcode': shortcode})
        return short_link.original_url
