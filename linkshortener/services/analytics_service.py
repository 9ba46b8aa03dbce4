import logging
from typing import Optional

from linkshortener.models import LinkAnalyticsModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.exceptions import NotFoundError
from linkshortener.services.helpers import translate_store_errors, ensure_owner


logger = logging.getLogger(__name__)


class AnalyticsService:
    """Build usage reports for short links

    Inactive and expired links still have analytics; only the ownership rule applies.
    """

    def __init__(self, short_link_dao: ShortLinkBaseDAO):
        self.short_link_dao = short_link_dao

    @translate_store_errors
    def analytics(self, shortcode: str, requester_id: Optional[str] = None) -> LinkAnalyticsModel:
        """Return the usage report for shortcode

        Raises:
            NotFoundError: If no link uses the shortcode.
            AuthorizationError: If the link is owned by someone other than requester_id.
            InfrastructureError: If the data store is unreachable.
        """
        short_link = self.short_link_dao.get(shortcode)
        if short_link is None:
            raise NotFoundError(f"Short URL with code '{shortcode}' not found.")
        ensure_owner(short_link, requester_id)
        return LinkAnalyticsModel.from_short_link(short_link)
