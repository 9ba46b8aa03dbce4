from linkshortener.utils.shortener import generate_shortcode, validate_shortcode
from linkshortener.utils.config import app_env, app_name, app_prefix, load_config
from linkshortener.utils.helpers import (
    base_url,
    get_short_url,
    is_absolute_url,
    parse_timestamp,
    require_environment,
    guarantee_500_response,
)
from linkshortener.utils.runtime import running_locally, get_user_id


__all__ = [
    'generate_shortcode',
    'validate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'is_absolute_url',
    'parse_timestamp',
    'require_environment',
    'guarantee_500_response',
    'running_locally',
    'get_user_id',
]
