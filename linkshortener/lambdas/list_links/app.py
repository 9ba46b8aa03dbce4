import logging

from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import ShortenService
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import get_user_id, get_short_url
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.bootstrap import short_link_dao
from linkshortener.lambdas.responses import response_json, response_401, response_domain_error
from linkshortener.lambdas.list_links.constants import MISSING_USER_ID


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """List the caller's short links, newest first

    HTTP responses:
        200: {"count": <int>, "links": [<link without click history>, ...]}
        401: No authenticated caller
        500: Internal server error
    """
    owner_id = get_user_id(event)
    if owner_id is None:
        logger.info('Missing user id in JWT claims. Responding with 401.', extra={'event': MISSING_USER_ID})
        return response_401(error_code=MISSING_USER_ID)

    try:
        links = ShortenService(short_link_dao('list_links')).links(owner_id)
    except LinkShortenerError as e:
        return response_domain_error(e)

    body = []
    for short_link in links:
        data = short_link.to_dict(include_history=False)
        data['short_url'] = get_short_url(short_link.shortcode, event)
        body.append(data)

    logger.debug('Listed short links.', extra={'count': len(body)})
    return response_json(200, {'count': len(body), 'links': body})
