from linkshortener.dao.base.short_link_base_dao import ShortLinkBaseDAO
from linkshortener.dao.base.link_cache_base_dao import LinkCacheBaseDAO, NullLinkCacheDAO


__all__ = [
    'ShortLinkBaseDAO',
    'LinkCacheBaseDAO',
    'NullLinkCacheDAO',
]
