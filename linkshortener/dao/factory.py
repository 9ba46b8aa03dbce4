"""Select the short link DAO for a lambda's AppConfig section

Functions:
    build_short_link_dao(app_config, prefix) -> ShortLinkBaseDAO
        Instantiate the DAO for the active backend.

Example:
    >>> app_config = load_config('redirect_url')
    >>> app_config
    {'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}
    >>> build_short_link_dao(app_config, prefix='linkshortener:local')
    <linkshortener.dao.redis.short_link_redis_dao.ShortLinkRedisDAO object at 0x...>
"""

import functools

from linkshortener.constants import Backend
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.exceptions import BadConfigurationError


@functools.cache
def _shared_memory_dao(prefix: str | None) -> ShortLinkBaseDAO:
    from linkshortener.dao.memory import ShortLinkMemoryDAO

    # One store per process and prefix so every handler sees the same links
    return ShortLinkMemoryDAO(prefix=prefix)


def build_short_link_dao(app_config: dict, prefix: str | None = None) -> ShortLinkBaseDAO:
    """Instantiate the short link DAO for the backend named in app_config

    Args:
        app_config (dict):
            `{backend: settings}` as returned by load_config().
        prefix (str | None):
            Namespace prefix for all keys, e.g. 'app:env'.

    Raises:
        BadConfigurationError: If no supported backend is configured.
        DataStoreError: If the Redis healthcheck fails.
    """
    if Backend.REDIS in app_config:
        from linkshortener.dao.redis import ShortLinkRedisDAO

        redis_config = {f'redis_{k}': v for k, v in (app_config[Backend.REDIS] or {}).items()}
        return ShortLinkRedisDAO(**redis_config, prefix=prefix)

    if Backend.MEMORY in app_config:
        return _shared_memory_dao(prefix)

    raise BadConfigurationError(f'Unsupported data store backend(s): {", ".join(app_config) or "none"}.')
