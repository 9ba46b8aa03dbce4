import logging

from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import ShortenService
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import get_user_id
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.bootstrap import short_link_dao, link_cache, path_parameter
from linkshortener.lambdas.responses import response_json, response_400, response_domain_error
from linkshortener.lambdas.deactivate_link.constants import MISSING_LINK_ID, LINK_DEACTIVATED


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Deactivate a short link; its shortcode then answers 410 Gone

    HTTP responses:
        200: The updated link (without click history)
        400: Missing link id in path parameters
        403: Link owned by another user
        404: No short link with this id
        500: Internal server error
    """
    link_id = path_parameter(event, 'link_id')
    if link_id is None:
        return response_400(message="missing 'link_id' in path", error_code=MISSING_LINK_ID)

    try:
        service = ShortenService(short_link_dao('deactivate_link'), link_cache())
        short_link = service.deactivate(link_id, requester_id=get_user_id(event))
    except LinkShortenerError as e:
        return response_domain_error(e)

    logger.info('Deactivated short link. Responding with 200.', extra={'linkId': link_id, 'event': LINK_DEACTIVATED})
    return response_json(200, short_link.to_dict(include_history=False))
