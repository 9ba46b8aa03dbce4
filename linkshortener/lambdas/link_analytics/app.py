import logging

from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import AnalyticsService
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import get_user_id
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.bootstrap import short_link_dao, path_parameter
from linkshortener.lambdas.responses import response_json, response_400, response_domain_error
from linkshortener.lambdas.link_analytics.constants import MISSING_SHORTCODE


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Return usage analytics for a short link

    HTTP responses:
        200: original_url, shortcode, total_clicks, created_at, click_history, clicks_by_date
        400: Missing shortcode in path parameters
        403: Link owned by another user
        404: No short link with this shortcode
        500: Internal server error
    """
    shortcode = path_parameter(event, 'shortcode')
    if shortcode is None:
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    try:
        analytics = AnalyticsService(short_link_dao('link_analytics')).analytics(shortcode, requester_id=get_user_id(event))
    except LinkShortenerError as e:
        return response_domain_error(e)

    return response_json(200, analytics.to_dict())
