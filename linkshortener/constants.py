from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Link cache entry lifetime (refreshed on every store-path resolution)
    ONE_HOUR = 3_600  # 60 * 60


class Timeout:
    """Socket timeouts in seconds."""

    # Cache calls sit on the redirect path and must fail open quickly
    CACHE_SOCKET = 0.25
    # Store calls are required for correctness but still bounded per request
    STORE_SOCKET = 2.0
    # SSM and Secrets Manager lookups made while building the cache client
    AWS_CONNECT = 1
    AWS_READ = 1


class Shortcode:
    """Shortcode generation defaults."""

    LENGTH = 7
    MAX_CUSTOM_LENGTH = 64
    MAX_ATTEMPTS = 5  # Collision retries before giving up


class ClickRecording:
    """Fire-and-forget click recorder settings."""

    MAX_WORKERS = 4
    THREAD_NAME_PREFIX = 'click-recorder'


class GoneReason(StrEnum):
    INACTIVE = 'inactive'
    EXPIRED = 'expired'


class Backend(StrEnum):
    REDIS = 'redis'
    MEMORY = 'memory'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'

    class ElastiCache(StrEnum):
        # SSM parameter paths for ElastiCache connection details
        HOST_PARAM = 'ELASTICACHE_HOST_PARAM'
        PORT_PARAM = 'ELASTICACHE_PORT_PARAM'
        DB_PARAM = 'ELASTICACHE_DB_PARAM'
        USER_PARAM = 'ELASTICACHE_USER_PARAM'
        # Secrets Manager name holding credentials JSON: {"username": "...", "password": "..."}
        SECRET = 'ELASTICACHE_SECRET'  # noqa: S105

    class LocalStack(StrEnum):
        ENDPOINT = 'LOCALSTACK_ENDPOINT'  # usually http://localstack:4566


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
