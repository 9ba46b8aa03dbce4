import json
from typing import Any, cast

import pytest
from pytest import MonkeyPatch

from linkshortener.types import LambdaEvent, LambdaContext


@pytest.fixture
def context() -> LambdaContext:
    return cast(LambdaContext, {'function_name': 'test_lambda'})


@pytest.fixture
def make_event():
    """Build API Gateway proxy events; user_id sets the Cognito 'sub' claim."""

    def _make(
        path_parameters: dict[str, str] | None = None,
        body: Any = None,
        user_id: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> LambdaEvent:
        request_context: dict[str, Any] = {
            'domainName': 'sho.rt',
            'stage': 'test',
            'identity': {'sourceIp': '203.0.113.7'},
        }
        if user_id is not None:
            request_context['authorizer'] = {'claims': {'sub': user_id}}
        return cast(LambdaEvent, {
            'pathParameters': path_parameters,
            'headers': headers or {},
            'body': body if body is None or isinstance(body, str) else json.dumps(body),
            'requestContext': request_context,
        })

    return _make


@pytest.fixture
def wire(monkeypatch: MonkeyPatch, memory_dao, memory_cache):
    """Point a handler module's DAO bootstrap at the in-memory store and cache."""

    def _wire(app, dao=None) -> None:
        monkeypatch.setattr(app, 'short_link_dao', lambda *a, **kw: dao or memory_dao)
        if hasattr(app, 'link_cache'):
            monkeypatch.setattr(app, 'link_cache', lambda *a, **kw: memory_cache)

    return _wire
