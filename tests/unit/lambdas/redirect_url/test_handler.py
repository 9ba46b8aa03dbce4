import json
from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest

from linkshortener.lambdas.redirect_url import app
from linkshortener.models import ShortLinkModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.exceptions import DataStoreError


class TestRedirectUrlHandler:

    @pytest.fixture(autouse=True)
    def setup(self, wire, memory_dao, make_event, context) -> None:
        wire(app)
        self.dao = memory_dao
        self.make_event = make_event
        self.context = context

    def insert(self, **kwargs) -> ShortLinkModel:
        return self.dao.insert(ShortLinkModel(original_url='https://example.com/blog/post', shortcode='abc123', **kwargs))

    def test_lambda_handler(self) -> None:
        self.insert()
        event = self.make_event(
            {'shortcode': 'abc123'},
            headers={'User-Agent': 'Mozilla/5.0', 'Referer': 'https://news.example.org/'},
        )

        response = app.lambda_handler(event, self.context)

        # Assert Lambda successfully redirects user to original URL
        assert response['statusCode'] == 302
        assert response['body'] == ''
        assert response['headers']['Location'] == 'https://example.com/blog/post'
        assert response['headers']['Cache-Control'] == 'no-store'

        # Assert the click was recorded with request metadata
        stored = self.dao.get('abc123')
        assert stored.click_count == 1
        click = stored.click_history[0]
        assert click.ip_address == '203.0.113.7'
        assert click.user_agent == 'Mozilla/5.0'
        assert click.referrer == 'https://news.example.org/'

    @pytest.mark.parametrize('path_parameters', [None, {}, {'invalid': 'path'}, {'shortcode': ''}])
    def test_lambda_handler_with_invalid_path_parameters(self, path_parameters) -> None:
        response = app.lambda_handler(self.make_event(path_parameters), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'shortcode' in path)"
        assert body['errorCode'] == 'MISSING_SHORTCODE'

    def test_lambda_handler_with_unknown_shortcode(self) -> None:
        response = app.lambda_handler(self.make_event({'shortcode': 'nope'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['errorCode'] == 'SHORT_URL_NOT_FOUND'

    def test_lambda_handler_with_inactive_link(self) -> None:
        self.dao.set_active(self.insert().id, False)

        response = app.lambda_handler(self.make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 410
        assert body['errorCode'] == 'LINK_GONE'
        assert body['reason'] == 'inactive'
        assert self.dao.get('abc123').click_count == 0

    def test_lambda_handler_with_expired_link(self) -> None:
        self.insert(expires_at=datetime(2000, 1, 1, tzinfo=UTC))

        response = app.lambda_handler(self.make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 410
        assert body['reason'] == 'expired'

    def test_lambda_handler_with_data_store_failure(self, wire) -> None:
        dao = MagicMock(spec=ShortLinkBaseDAO)
        dao.get.side_effect = DataStoreError('Connection timed out')
        wire(app, dao)

        response = app.lambda_handler(self.make_event({'shortcode': 'abc123'}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'INFRASTRUCTURE_ERROR'}

    def test_lambda_handler_with_unexpected_error(self, monkeypatch) -> None:
        def explode(*args, **kwargs):
            raise RuntimeError('boom')

        monkeypatch.setattr(app, 'short_link_dao', explode)

        response = app.lambda_handler(self.make_event({'shortcode': 'abc123'}), self.context)

        assert response['statusCode'] == 500
        assert json.loads(response['body'])['error_code'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
