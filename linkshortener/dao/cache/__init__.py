from linkshortener.dao.cache.cache_key_schema import CacheKeySchema
from linkshortener.dao.cache.mixins import ElastiCacheClientMixin
from linkshortener.dao.cache.link_cache_dao import LinkCacheDAO
from linkshortener.dao.cache.factory import build_link_cache


__all__ = [
    'CacheKeySchema',
    'ElastiCacheClientMixin',
    'LinkCacheDAO',
    'build_link_cache',
]
