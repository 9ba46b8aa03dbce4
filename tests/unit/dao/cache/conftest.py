import json
from unittest.mock import MagicMock

import pytest
import redis
from pytest import MonkeyPatch

from linkshortener.constants import ENV


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    """Set required env var names used by the ElastiCache mixin."""
    monkeypatch.setenv(ENV.ElastiCache.HOST_PARAM, '/linkshortener/test/elasticache/host')
    monkeypatch.setenv(ENV.ElastiCache.PORT_PARAM, '/linkshortener/test/elasticache/port')
    monkeypatch.setenv(ENV.ElastiCache.DB_PARAM, '/linkshortener/test/elasticache/db')
    monkeypatch.setenv(ENV.ElastiCache.USER_PARAM, '/linkshortener/test/elasticache/user')
    monkeypatch.setenv(ENV.ElastiCache.SECRET, 'linkshortener/test/elasticache/credentials')


@pytest.fixture
def ssm_client():
    """Mock an SSM client returning host/port/db/user."""
    client = MagicMock(spec=['get_parameter'])

    def _get_parameter(Name):  # noqa: N803
        if Name.endswith('/host'):
            return {'Parameter': {'Value': 'cache.internal'}}
        if Name.endswith('/port'):
            return {'Parameter': {'Value': '6380'}}
        if Name.endswith('/db'):
            return {'Parameter': {'Value': '5'}}
        if Name.endswith('/user'):
            return {'Parameter': {'Value': 'user_from_ssm'}}
        raise KeyError('Unknown parameter')

    client.get_parameter.side_effect = _get_parameter
    return client


@pytest.fixture
def secrets_client():
    """Mock a Secrets Manager client returning username/password."""
    client = MagicMock(spec=['get_secret_value'])
    client.get_secret_value.return_value = {'SecretString': json.dumps({'username': 'user_from_secret', 'password': 'p'})}
    return client


@pytest.fixture
def cache_redis_client():
    """Provide a reusable redis client mock with a successful ping."""
    r = MagicMock(spec=redis.Redis)
    r.ping.return_value = True
    r.connection_pool = MagicMock()
    r.connection_pool.connection_kwargs = {'host': 'cache.internal', 'port': 6380, 'db': 5}
    return r
