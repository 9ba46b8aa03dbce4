"""Helpers shared by the link services.

Functions:
    translate_store_errors(method) -> Callable
        Decorator: surface DataStoreError as InfrastructureError
    bounded_cache_ttl(short_link, ttl, now=None) -> int
        Cache lifetime for a link, never outliving the link itself
    ensure_owner(short_link, requester_id) -> None
        Ownership rule for analytics, deactivate and delete
"""

import functools
import logging
import math
from datetime import datetime
from typing import Optional

from linkshortener.models import ShortLinkModel, utc_now
from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import AuthorizationError, InfrastructureError


logger = logging.getLogger(__name__)


def translate_store_errors[F](method: F) -> F:
    """Wrap service methods so data store failures surface as InfrastructureError

    Example:
        >>> @translate_store_errors
        ... def links(self, owner_id):
        ...     return self.short_link_dao.list_by_owner(owner_id)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except DataStoreError as e:
            logger.error('Data store failure.', extra={'operation': method.__name__, 'reason': str(e)})
            raise InfrastructureError(str(e)) from e

    return wrapper


def bounded_cache_ttl(short_link: ShortLinkModel, ttl: int, now: Optional[datetime] = None) -> int:
    """Return min(ttl, seconds until the link expires), 0 if it must not be cached

    Example:
        >>> link = ShortLinkModel(original_url='https://example.com', shortcode='abc')
        >>> bounded_cache_ttl(link, 3600)
        3600
    """
    if short_link.expires_at is None:
        return ttl
    remaining = (short_link.expires_at - (now or utc_now())).total_seconds()
    return max(0, min(ttl, math.floor(remaining)))


def ensure_owner(short_link: ShortLinkModel, requester_id: Optional[str]) -> None:
    """Raise AuthorizationError if the link has an owner other than the requester

    Anonymous links (owner_id is None) are accessible to everyone.
    """
    if short_link.owner_id is not None and short_link.owner_id != requester_id:
        logger.info('Refused access to link owned by another identity.', extra={'linkId': short_link.id, 'shortcode': short_link.shortcode})
        raise AuthorizationError(f"Not authorized to manage short URL with code '{short_link.shortcode}'.")
