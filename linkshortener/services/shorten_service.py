"""Link creation and lifecycle management

Responsibilities:
    - Create short links (custom or generated shortcodes).
    - List an owner's links, newest first.
    - Deactivate and delete links, invalidating the cache first.

Example:
    >>> service = ShortenService(short_link_dao, link_cache)
    >>> link = service.shorten('https://example.com/article/123', owner_id='user-1')
    >>> link.shortcode
    'q2Xf-9a'
    >>> service.deactivate(link.id, requester_id='user-1').is_active
    False
"""

import logging
from datetime import datetime
from typing import Optional

from linkshortener.constants import TTL, Shortcode
from linkshortener.models import ShortLinkModel
from linkshortener.dao.base import ShortLinkBaseDAO, LinkCacheBaseDAO, NullLinkCacheDAO
from linkshortener.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError
from linkshortener.exceptions import ValidationError, ConflictError, NotFoundError, ShortCodeExhaustedError
from linkshortener.utils.helpers import is_absolute_url
from linkshortener.utils.shortener import generate_shortcode, validate_shortcode
from linkshortener.services.helpers import translate_store_errors, bounded_cache_ttl, ensure_owner


logger = logging.getLogger(__name__)


class ShortenService:
    """Create and manage short links

    Args:
        short_link_dao (ShortLinkBaseDAO):
            Durable store of links; its insert is the only uniqueness gate.
        link_cache (Optional[LinkCacheBaseDAO]):
            Ephemeral shortcode -> destination cache. Defaults to no cache.
        cache_ttl (int):
            Upper bound of a cache entry's lifetime in seconds.
        shortcode_length (int):
            Length of generated shortcodes.
        max_attempts (int):
            Generated-shortcode collisions tolerated before giving up.
    """

    def __init__(
        self,
        short_link_dao: ShortLinkBaseDAO,
        link_cache: Optional[LinkCacheBaseDAO] = None,
        cache_ttl: int = TTL.ONE_HOUR,
        shortcode_length: int = Shortcode.LENGTH,
        max_attempts: int = Shortcode.MAX_ATTEMPTS,
    ):
        self.short_link_dao = short_link_dao
        self.link_cache = link_cache or NullLinkCacheDAO()
        self.cache_ttl = cache_ttl
        self.shortcode_length = shortcode_length
        self.max_attempts = max_attempts

    @translate_store_errors
    def shorten(
        self,
        original_url: str,
        custom_code: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        owner_id: Optional[str] = None,
    ) -> ShortLinkModel:
        """Create a short link for original_url

        Raises:
            ValidationError: If original_url or custom_code is malformed.
            ConflictError: If custom_code is already taken.
            ShortCodeExhaustedError: If every generated shortcode collided.
            InfrastructureError: If the data store is unreachable.
        """
        if not is_absolute_url(original_url):
            raise ValidationError('Please provide a valid absolute http(s) URL.')
        if expires_at is not None and not isinstance(expires_at, datetime):
            raise ValidationError('Expiry must be a datetime.')

        if custom_code is not None:
            shortcode = validate_shortcode(custom_code)
            try:
                short_link = self._insert(original_url, shortcode, expires_at, owner_id)
            except ShortLinkAlreadyExistsError as e:
                logger.info('Custom shortcode already taken.', extra={'shortcode': shortcode})
                raise ConflictError(f"Short code '{shortcode}' is already in use.") from e
        else:
            short_link = self._insert_generated(original_url, expires_at, owner_id)

        ttl = bounded_cache_ttl(short_link, self.cache_ttl)
        if ttl > 0:
            self.link_cache.set(short_link.shortcode, short_link.original_url, ttl=ttl)

        logger.info('Created short link.', extra={'shortcode': short_link.shortcode, 'linkId': short_link.id})
        return short_link

    @translate_store_errors
    def links(self, owner_id: str) -> list[ShortLinkModel]:
        """Return every link created by owner_id, newest first"""
        return self.short_link_dao.list_by_owner(owner_id)

    @translate_store_errors
    def deactivate(self, link_id: str, requester_id: Optional[str] = None) -> ShortLinkModel:
        """Mark a link inactive so it stops redirecting (410 Gone)

        Raises:
            NotFoundError: If no link has this id.
            AuthorizationError: If the link is owned by someone other than requester_id.
        """
        short_link = self._owned_link(link_id, requester_id)
        self.link_cache.delete(short_link.shortcode)
        try:
            short_link = self.short_link_dao.set_active(link_id, False)
        except ShortLinkNotFoundError as e:
            raise NotFoundError(f"Short link '{link_id}' not found.") from e

        logger.info('Deactivated short link.', extra={'shortcode': short_link.shortcode, 'linkId': link_id})
        return short_link

    @translate_store_errors
    def delete(self, link_id: str, requester_id: Optional[str] = None) -> None:
        """Delete a link and free its shortcode

        Raises:
            NotFoundError: If no link has this id.
            AuthorizationError: If the link is owned by someone other than requester_id.
        """
        short_link = self._owned_link(link_id, requester_id)
        self.link_cache.delete(short_link.shortcode)
        try:
            self.short_link_dao.delete(link_id)
        except ShortLinkNotFoundError as e:
            raise NotFoundError(f"Short link '{link_id}' not found.") from e

        logger.info('Deleted short link.', extra={'shortcode': short_link.shortcode, 'linkId': link_id})

    def _owned_link(self, link_id: str, requester_id: Optional[str]) -> ShortLinkModel:
        short_link = self.short_link_dao.get_by_id(link_id)
        if short_link is None:
            raise NotFoundError(f"Short link '{link_id}' not found.")
        ensure_owner(short_link, requester_id)
        return short_link

    def _insert_generated(self, original_url: str, expires_at: Optional[datetime], owner_id: Optional[str]) -> ShortLinkModel:
        for attempt in range(1, self.max_attempts + 1):
            shortcode = generate_shortcode(self.shortcode_length)
            try:
                return self._insert(original_url, shortcode, expires_at, owner_id)
            except ShortLinkAlreadyExistsError:
                logger.warning('Generated shortcode collided. Retrying.', extra={'shortcode': shortcode, 'attempt': attempt})

        raise ShortCodeExhaustedError(f'Could not generate a free shortcode in {self.max_attempts} attempts.')

    def _insert(self, original_url: str, shortcode: str, expires_at: Optional[datetime], owner_id: Optional[str]) -> ShortLinkModel:
        # fmt: off
        short_link = ShortLinkModel(original_url=original_url,
                                    shortcode=shortcode,
                                    expires_at=expires_at,
                                    owner_id=owner_id)
        # fmt: on
        return self.short_link_dao.insert(short_link)
