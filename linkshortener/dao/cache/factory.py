import logging

from botocore.exceptions import BotoCoreError, ClientError

from linkshortener.dao.base import LinkCacheBaseDAO, NullLinkCacheDAO
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def build_link_cache(prefix: str | None = None, **kwargs) -> LinkCacheBaseDAO:
    """Build the ElastiCache link cache, or a no-op cache if it can't be reached

    A missing or unreachable cache never prevents a lambda from serving
    requests. Keyword arguments are forwarded to LinkCacheDAO.
    """
    from linkshortener.dao.cache.link_cache_dao import LinkCacheDAO

    try:
        return LinkCacheDAO(prefix=prefix, **kwargs)
    except (ConfigurationError, DataStoreError, BotoCoreError, ClientError, ValueError) as e:
        logger.warning('Link cache disabled.', extra={'reason': str(e)})
        return NullLinkCacheDAO()
