from unittest.mock import MagicMock

import pytest
import redis

from linkshortener.dao.memory import ShortLinkMemoryDAO, LinkMemoryCacheDAO


@pytest.fixture
def app_prefix():
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client():
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.get.return_value = None
    return client


@pytest.fixture
def memory_dao():
    """Fresh process-local link store."""
    return ShortLinkMemoryDAO()


@pytest.fixture
def memory_cache():
    """Fresh process-local link cache."""
    return LinkMemoryCacheDAO()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep tests independent of the developer's shell environment."""
    for name in ('APP_ENV', 'APP_NAME', 'AWS_SAM_LOCAL', 'BASE_URL', 'APPCONFIG_AGENT_URL'):
        monkeypatch.delenv(name, raising=False)
