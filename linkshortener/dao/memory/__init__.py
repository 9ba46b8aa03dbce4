from linkshortener.dao.memory.short_link_memory_dao import ShortLinkMemoryDAO
from linkshortener.dao.memory.link_memory_cache_dao import LinkMemoryCacheDAO


__all__ = [
    'ShortLinkMemoryDAO',
    'LinkMemoryCacheDAO',
]
