import os

from linkshortener.constants import ENV
from linkshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from linkshortener.utils import app_env
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.responses import response_json


# Reported by presence only, values are never echoed
CHECKED_ENVIRONMENT = {
    'appconfig': (ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID),
    'elasticache': (ENV.ElastiCache.HOST_PARAM, ENV.ElastiCache.PORT_PARAM, ENV.ElastiCache.DB_PARAM, ENV.ElastiCache.SECRET),
    'base_url': (ENV.App.BASE_URL,),
}


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Liveness probe reporting which configuration groups are present

    Example:
        >>> json.loads(lambda_handler({}, None)['body'])
        {'status': 'ok', 'env': 'dev', 'config': {'appconfig': True, 'elasticache': False, 'base_url': True}}
    """
    config = {group: all(os.environ.get(name) for name in names) for group, names in CHECKED_ENVIRONMENT.items()}
    return response_json(200, {'status': 'ok', 'env': app_env(), 'config': config})
