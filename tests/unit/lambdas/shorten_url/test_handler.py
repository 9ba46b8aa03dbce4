import json

import pytest

from linkshortener.lambdas.shorten_url import app
from linkshortener.models import ShortLinkModel


class TestShortenUrlHandler:

    @pytest.fixture(autouse=True)
    def setup(self, wire, memory_dao, memory_cache, make_event, context) -> None:
        wire(app)
        self.dao = memory_dao
        self.cache = memory_cache
        self.make_event = make_event
        self.context = context

    def test_lambda_handler(self) -> None:
        event = self.make_event(body={'original_url': 'https://example.com/a/b'})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert response['headers']['Content-Type'] == 'application/json'
        assert len(body['shortcode']) == 7
        assert body['short_url'] == f'https://sho.rt/{body["shortcode"]}'
        assert body['original_url'] == 'https://example.com/a/b'
        assert body['expires_at'] is None
        assert body['message'] == f'Successfully shortened https://example.com/a/b to {body["short_url"]}'

        stored = self.dao.get(body['shortcode'])
        assert stored.id == body['id']
        assert stored.owner_id is None
        assert self.cache.get(body['shortcode']) == 'https://example.com/a/b'

    def test_lambda_handler_with_custom_code_and_expiry(self) -> None:
        event = self.make_event(
            body={'original_url': 'https://example.com', 'custom_code': 'my-link', 'expires_at': '2030-01-01T02:00:00+02:00'},
            user_id='user-1',
        )

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert body['shortcode'] == 'my-link'
        assert body['short_url'] == 'https://sho.rt/my-link'
        assert body['expires_at'] == '2030-01-01T00:00:00+00:00'
        assert self.dao.get('my-link').owner_id == 'user-1'

    def test_lambda_handler_with_taken_custom_code(self) -> None:
        self.dao.insert(ShortLinkModel(original_url='https://example.org', shortcode='my-link'))
        event = self.make_event(body={'original_url': 'https://example.com', 'custom_code': 'my-link'})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 409
        assert body['errorCode'] == 'SHORTCODE_TAKEN'
        assert self.dao.get('my-link').original_url == 'https://example.org'

    @pytest.mark.parametrize('custom_code', ['', None])
    def test_lambda_handler_with_blank_custom_code(self, custom_code) -> None:
        event = self.make_event(body={'original_url': 'https://example.com', 'custom_code': custom_code})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert len(body['shortcode']) == 7
        assert self.dao.get(body['shortcode']).original_url == 'https://example.com'

    @pytest.mark.parametrize('body', [None, {}, {'original_url': ''}, {'target': 'https://example.com'}])
    def test_lambda_handler_with_missing_original_url(self, body) -> None:
        response = app.lambda_handler(self.make_event(body=body), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'original_url' in JSON body)"
        assert body['errorCode'] == 'MISSING_ORIGINAL_URL'

    @pytest.mark.parametrize(
        'body',
        [
            '{not json',
            '["https://example.com"]',
            {'original_url': 'example.com/a/b'},
            {'original_url': 'ftp://example.com'},
            {'original_url': 'https://example.com', 'custom_code': 'has space'},
            {'original_url': 'https://example.com', 'custom_code': 'x' * 65},
        ],
    )
    def test_lambda_handler_with_invalid_input(self, body) -> None:
        response = app.lambda_handler(self.make_event(body=body), self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'VALIDATION_ERROR'

    @pytest.mark.parametrize('expires_at', ['tomorrow', 1893456000])
    def test_lambda_handler_with_invalid_expiry(self, expires_at) -> None:
        event = self.make_event(body={'original_url': 'https://example.com', 'expires_at': expires_at})

        response = app.lambda_handler(event, self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'INVALID_EXPIRES_AT'
