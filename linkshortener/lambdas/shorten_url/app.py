import logging

from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import ShortenService
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import get_user_id, get_short_url, parse_timestamp
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.bootstrap import short_link_dao, link_cache, parse_json_body
from linkshortener.lambdas.responses import response_json, response_400, response_domain_error
from linkshortener.lambdas.shorten_url.constants import MISSING_ORIGINAL_URL, INVALID_EXPIRES_AT, LINK_CREATED


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract optional Amazon Cognito user id from Lambda event
    - Step 2: Extract original URL, custom shortcode and expiry from request body
    - Step 3: Create the short link (via ShortenService)
    - Step 4: Respond to user with 201 created

    Request body:
        {"original_url": "https://...", "custom_code": "my-code", "expires_at": "2030-01-01T00:00:00Z"}
        Only original_url is required.

    HTTP responses:
        201: Link created
            short_url, shortcode, original_url, id, expires_at
        400: Invalid JSON, missing/invalid original_url, invalid custom_code or expires_at
        409: Custom shortcode already taken
        500: Internal server error

    Example:
        >>> event = {'body': '{"original_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['short_url']
        'https://sho.rt/q2Xf-9a'
    """
    # 1- Extract user id from Cognito (anonymous links are allowed)
    owner_id = get_user_id(event)

    try:
        # 2- Extract link parameters from request body
        body = parse_json_body(event)
        original_url = body.get('original_url')
        if not original_url:
            logger.info('Missing "original_url" in body. Responding with 400.', extra={'event': MISSING_ORIGINAL_URL})
            return response_400(message="missing 'original_url' in JSON body", error_code=MISSING_ORIGINAL_URL)

        try:
            expires_at = parse_timestamp(body.get('expires_at'))
        except ValueError:
            logger.info('Invalid "expires_at" in body. Responding with 400.', extra={'event': INVALID_EXPIRES_AT})
            return response_400(message="'expires_at' must be an ISO-8601 timestamp", error_code=INVALID_EXPIRES_AT)

        # 3- Create the short link
        service = ShortenService(short_link_dao('shorten_url'), link_cache())
        short_link = service.shorten(
            original_url,
            custom_code=body.get('custom_code') or None,
            expires_at=expires_at,
            owner_id=owner_id,
        )
    except LinkShortenerError as e:
        return response_domain_error(e)

    # 4- Return successful response to user
    short_url = get_short_url(short_link.shortcode, event)
    logger.info('Created short URL. Responding with 201.', extra={'shortcode': short_link.shortcode, 'event': LINK_CREATED})
    return response_json(
        201,
        {
            'message': f'Successfully shortened {original_url} to {short_url}',
            'id': short_link.id,
            'short_url': short_url,
            'shortcode': short_link.shortcode,
            'original_url': short_link.original_url,
            'expires_at': short_link.to_dict(include_history=False)['expires_at'],
        },
    )
