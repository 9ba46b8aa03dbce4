"""API Gateway (Lambda proxy) response builders shared by all handlers

Error bodies always follow:

    {"message": "<human readable>", "errorCode": "<stable code>"}
"""

import json
import logging
from typing import Any

from linkshortener.exceptions import LinkShortenerError, GoneError
from linkshortener.types import LambdaResponse


logger = logging.getLogger(__name__)


JSON_HEADERS = {
    'Content-Type': 'application/json',
    # TODO: narrow CORS to the frontend origin once it has a stable domain
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
}


def response_json(status: int, body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': status,
        'headers': dict(JSON_HEADERS),
        'body': json.dumps(body),
    }


def response_error(status: int, message: str, error_code: str | None = None, **fields: Any) -> LambdaResponse:
    body = {'message': message}
    if error_code:
        body['errorCode'] = error_code
    body.update(fields)
    return response_json(status, body)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    return response_error(400, base if not message else f'{base} ({message})', error_code)


def response_401(error_code: str | None = None) -> LambdaResponse:
    return response_error(401, "Unauthorized: missing 'sub' in JWT claims", error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    return response_error(500, base if not message else f'{base} ({message})', error_code)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Cache-Control': 'no-store',  # every visit must reach us to be counted
        },
        'body': '',
    }


def response_domain_error(error: LinkShortenerError) -> LambdaResponse:
    """Render a domain exception with its own status hint and error code"""
    logger.info(
        'Request failed. Responding with %s.',
        error.status,
        extra={'errorCode': error.error_code, 'reason': str(error)},
    )
    if isinstance(error, GoneError):
        return response_error(error.status, str(error), error.error_code, reason=error.reason)
    if error.status >= 500:
        # Never leak infrastructure details to clients
        return response_500(error_code=error.error_code)
    return response_error(error.status, str(error), error.error_code)
