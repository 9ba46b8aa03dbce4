"""Wiring of DAOs for lambda handlers

Functions:
    short_link_dao(lambda_name) -> ShortLinkBaseDAO
        Load the lambda's AppConfig section and build the configured store.
    link_cache() -> LinkCacheBaseDAO
        Return the sandbox's ElastiCache link cache, built on first use (no-op cache if unavailable).
    click_from_event(event) -> ClickEventModel
        Capture request metadata of a redirect.
    path_parameter(event, name) -> str | None
        Read a path parameter, None if absent or empty.
    parse_json_body(event) -> dict
        Decode the request body; raise ValidationError if it is not a JSON object.
"""

import functools
import json
import logging

from botocore.exceptions import BotoCoreError, ClientError

from linkshortener.models import ClickEventModel
from linkshortener.dao import build_short_link_dao
from linkshortener.dao.base import ShortLinkBaseDAO, LinkCacheBaseDAO
from linkshortener.dao.cache import build_link_cache
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import ConfigurationError, InfrastructureError, ValidationError
from linkshortener.types import LambdaEvent
from linkshortener.utils import load_config, app_prefix


logger = logging.getLogger(__name__)


def short_link_dao(lambda_name: str) -> ShortLinkBaseDAO:
    """Build the lambda's short link DAO

    Raises:
        InfrastructureError: If configuration can't be loaded or the store is unreachable.
    """
    try:
        app_config = load_config(lambda_name)
        return build_short_link_dao(app_config, prefix=app_prefix())
    except (ConfigurationError, BotoCoreError, ClientError) as e:
        logger.exception('Failed to load AppConfig.', extra={'lambdaName': lambda_name})
        raise InfrastructureError('Application configuration unavailable.') from e
    except DataStoreError as e:
        logger.exception('Failed to connect to data store.', extra={'lambdaName': lambda_name})
        raise InfrastructureError(str(e)) from e


@functools.cache
def _shared_link_cache(prefix: str | None) -> LinkCacheBaseDAO:
    # One client per sandbox and prefix, so warm invocations skip the SSM and
    # Secrets Manager lookups. A no-op fallback is kept until the sandbox recycles.
    return build_link_cache(prefix=prefix)


def link_cache() -> LinkCacheBaseDAO:
    return _shared_link_cache(app_prefix())


def _header(event: LambdaEvent, name: str) -> str | None:
    # API Gateway preserves client casing for header names
    for key, value in (event.get('headers') or {}).items():
        if key.lower() == name:
            return value
    return None


def click_from_event(event: LambdaEvent) -> ClickEventModel:
    identity = (event.get('requestContext') or {}).get('identity') or {}
    return ClickEventModel(
        ip_address=identity.get('sourceIp'),
        user_agent=_header(event, 'user-agent'),
        referrer=_header(event, 'referer'),
    )


def path_parameter(event: LambdaEvent, name: str) -> str | None:
    return (event.get('pathParameters') or {}).get(name) or None


def parse_json_body(event: LambdaEvent) -> dict:
    try:
        body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError as e:
        raise ValidationError('Request body is not valid JSON.') from e
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object.')
    return body
