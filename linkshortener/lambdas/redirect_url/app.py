import logging

from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import RedirectResolver
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.bootstrap import short_link_dao, link_cache, click_from_event, path_parameter
from linkshortener.lambdas.responses import response_302, response_400, response_domain_error
from linkshortener.lambdas.redirect_url.constants import MISSING_SHORTCODE, REDIRECT_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode (cache first, then data store) and record the click
    - Step 3: Redirect client to the destination

    HTTP responses:
        302: Successful redirect
            headers:
                Location: destination URL
        400: Missing shortcode in path parameters
        404: No short link with this shortcode
        410: Link deactivated or expired (body carries 'reason')
        500: Internal server error (data store or configuration unavailable)

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71TCN'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract shortcode from request's path
    shortcode = path_parameter(event, 'shortcode')
    if shortcode is None:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 2- Resolve shortcode and record the click
    try:
        resolver = RedirectResolver(short_link_dao('redirect_url'), link_cache())
        destination = resolver.resolve(shortcode, click_from_event(event))
    except LinkShortenerError as e:
        return response_domain_error(e)

    # 3- Redirect client to destination
    logger.info(
        'Redirecting client to destination. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=destination)
