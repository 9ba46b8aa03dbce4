"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Project root resolution
   - Ensures project_root() correctly reads PROJECT_ROOT from environment variables.

3. Backend selection
   - Ensures select_backend() reduces an AppConfig document to the lambda's
     active backend section and rejects malformed documents.

4. Configuration loading behavior
   - Ensures load_config() correctly returns parsed AppConfig configuration data.
   - Ensures load_config() raises ClientError when AppConfig calls fail.
   - Ensures load_config() refuses to run without AppConfig identifiers.
"""

import os
import json
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import botocore

from linkshortener.utils import config
from linkshortener.exceptions import BadConfigurationError, MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def _env(monkeypatch):
    """Set up environment variables for testing."""
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'configs': {
            'test_lambda': {
                'redis': {
                    'host': 'monkey',
                    'port': 6379,
                    'db': 3
                },
                'memory': {}
            }
        },
    }
    # fmt: on


@pytest.fixture
def appconfig_client(monkeypatch, appconfig_payload):
    """Mock the AppConfig Data client returned by boto3.client()."""
    client = MagicMock()
    client.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    client.get_latest_configuration.return_value = {
        'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8')),
    }
    factory = MagicMock(return_value=client)
    monkeypatch.setattr(config.boto3, 'client', factory)
    client.factory = factory
    return client


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the correct environment value from APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'Test')
    assert config.app_env() == 'test'


def test_app_env_defaults_to_local():
    assert config.app_env() == 'local'


def test_app_name(monkeypatch):
    """Ensure app_name() returns the correct environment value from APP_NAME"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    assert config.app_name() == 'test-app'


def test_app_name_not_set():
    """Ensure app_name() returns None when APP_NAME is not set"""
    assert config.app_name() is None


def test_app_prefix(monkeypatch):
    """Ensure app_prefix() combines APP_NAME and APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    monkeypatch.setitem(os.environ, 'APP_ENV', 'test')
    assert config.app_prefix() == 'test-app:test'


def test_app_prefix_without_app_name():
    assert config.app_prefix() is None


# -------------------------------
# 2. Project root resolution
# -------------------------------


def test_project_root(monkeypatch):
    """Ensure project_root() returns the correct environment value from PROJECT_ROOT"""
    monkeypatch.setitem(os.environ, 'PROJECT_ROOT', '/monkey/path')
    assert config.project_root() == Path('/monkey/path')


# -------------------------------
# 3. Backend selection
# -------------------------------


def test_select_backend(appconfig_payload):
    assert config.select_backend(appconfig_payload, 'test_lambda') == {'redis': {'host': 'monkey', 'port': 6379, 'db': 3}}


def test_select_backend_memory(appconfig_payload):
    appconfig_payload['active_backend'] = 'memory'
    assert config.select_backend(appconfig_payload, 'test_lambda') == {'memory': {}}


@pytest.mark.parametrize(
    'document',
    [
        {},
        {'active_backend': 'redis'},
        {'active_backend': 'redis', 'configs': {}},
        {'active_backend': 'dynamodb', 'configs': {'test_lambda': {'redis': {}}}},
        {'active_backend': 'redis', 'configs': None},
    ],
)
def test_select_backend_rejects_malformed_document(document):
    with pytest.raises(BadConfigurationError, match='test_lambda'):
        config.select_backend(document, 'test_lambda')


# -------------------------------
# 4. Configuration loading behavior
# -------------------------------


@pytest.mark.usefixtures('_env')
def test_load_config(appconfig_client):
    """Ensure load_config() fetches the document and returns the lambda's section."""
    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'monkey', 'port': 6379, 'db': 3}}
    appconfig_client.factory.assert_called_once_with('appconfigdata')
    appconfig_client.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    appconfig_client.get_latest_configuration.assert_called_once_with(ConfigurationToken='monkey_token')


@pytest.mark.usefixtures('_env')
def test_load_config_unknown_lambda(appconfig_client):
    with pytest.raises(BadConfigurationError):
        config.load_config('other_lambda')


@pytest.mark.usefixtures('_env')
def test_load_config_client_error(appconfig_client):
    """Ensure load_config() propagates ClientError when AppConfig calls fail."""
    appconfig_client.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        error_response={'Error': {'Code': 'ResourceNotFoundException', 'Message': 'Not found'}},
        operation_name='StartConfigurationSession',
    )

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config('test_lambda')


def test_load_config_requires_appconfig_identifiers(monkeypatch, appconfig_client):
    for name in ('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID', 'APPCONFIG_PROFILE_ID'):
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(MissingEnvironmentVariableError, match='APPCONFIG_APP_ID'):
        config.load_config('test_lambda')
    appconfig_client.factory.assert_not_called()
