"""Application (domain) exceptions surfaced to callers of the link services.

Every class carries a stable `error_code` and an HTTP `status` hint so the
transport layer can render distinct responses (404 vs 410 vs 409, ...)
without inspecting messages.

Classes:
    LinkShortenerError:
        Base exception for all application-specific errors.
    ValidationError:
        Malformed input (e.g. not an absolute URL, illegal custom shortcode).
    ConflictError:
        Custom shortcode already taken.
    NotFoundError:
        Shortcode or link id does not exist.
    GoneError:
        Link exists but is inactive or expired. Carries `reason`.
    AuthorizationError:
        Requester does not own the link.
    InfrastructureError:
        Durable store unreachable or failed.
    ShortCodeExhaustedError:
        Collision retries exhausted while generating a shortcode.
    ConfigurationError:
        Base exception for configuration problems.

Example:
    >>> from linkshortener.exceptions import GoneError
    >>> error = GoneError('abc123', reason='expired')
    >>> error.status, error.error_code, error.reason
    (410, 'LINK_GONE', 'expired')
"""


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'LINK_SHORTENER_ERROR'
    status = 500


class ValidationError(LinkShortenerError):
    """Raised when caller input is malformed."""

    error_code = 'VALIDATION_ERROR'
    status = 400


class ConflictError(LinkShortenerError):
    """Raised when a custom shortcode is already taken."""

    error_code = 'SHORTCODE_TAKEN'
    status = 409


class NotFoundError(LinkShortenerError):
    """Raised when a shortcode or link id does not exist."""

    error_code = 'SHORT_URL_NOT_FOUND'
    status = 404


class GoneError(LinkShortenerError):
    """Raised when a link exists but is inactive or expired."""

    error_code = 'LINK_GONE'
    status = 410

    def __init__(self, shortcode: str, reason: str):
        super().__init__(f"Short URL with code '{shortcode}' is {reason}.")
        self.shortcode = shortcode
        self.reason = reason


class AuthorizationError(LinkShortenerError):
    """Raised when the requester is not the owner of the link."""

    error_code = 'NOT_AUTHORIZED'
    status = 403


class InfrastructureError(LinkShortenerError):
    """Raised when the durable store is unreachable or failed."""

    error_code = 'INFRASTRUCTURE_ERROR'
    status = 500


class ShortCodeExhaustedError(InfrastructureError):
    """Raised when no free shortcode was found within the retry budget."""

    error_code = 'SHORTCODE_GENERATION_EXHAUSTED'


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'CONFIGURATION_ERROR'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'MISSING_ENVIRONMENT_VARIABLE'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'BAD_CONFIGURATION'
