import json

import pytest

from linkshortener.lambdas.healthcheck import app


@pytest.fixture
def _appconfig_env(monkeypatch):
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')


@pytest.fixture(autouse=True)
def _no_elasticache_env(monkeypatch):
    for name in ('ELASTICACHE_HOST_PARAM', 'ELASTICACHE_PORT_PARAM', 'ELASTICACHE_DB_PARAM', 'ELASTICACHE_SECRET'):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.usefixtures('_appconfig_env')
def test_lambda_handler(monkeypatch, context):
    monkeypatch.setenv('APP_ENV', 'dev')
    monkeypatch.setenv('BASE_URL', 'https://sho.rt')

    response = app.lambda_handler({}, context)

    assert response['statusCode'] == 200
    assert json.loads(response['body']) == {
        'status': 'ok',
        'env': 'dev',
        'config': {'appconfig': True, 'elasticache': False, 'base_url': True},
    }


def test_lambda_handler_never_echoes_values(monkeypatch, context):
    monkeypatch.setenv('APPCONFIG_APP_ID', 'super-secret-app-id')
    monkeypatch.delenv('APPCONFIG_ENV_ID', raising=False)
    monkeypatch.delenv('APPCONFIG_PROFILE_ID', raising=False)

    response = app.lambda_handler({}, context)
    body = json.loads(response['body'])

    assert 'super-secret-app-id' not in response['body']
    assert body['config']['appconfig'] is False
    assert body['env'] == 'local'
