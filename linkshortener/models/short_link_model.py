from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any, Optional

from linkshortener.constants import GoneReason


def utc_now() -> datetime:
    return datetime.now(UTC)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive datetimes are treated as UTC
    if value is None:
        return None
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return None if value is None else _as_utc(value).isoformat()


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return None if not value else _as_utc(datetime.fromisoformat(value))


@dataclass(frozen=True)
class ClickEventModel:
    """Represent one recorded visit to a short link.

    Request metadata is captured verbatim and is never validated or normalized.

    Attributes:
        timestamp (datetime):
            Event time in UTC. Defaults to the moment the event is built.
        ip_address (Optional[str]):
            Client IP address as seen by the transport layer.
        user_agent (Optional[str]):
            Raw 'User-Agent' request header.
        referrer (Optional[str]):
            Raw 'Referer' request header.

    Example:
        >>> click = ClickEventModel(ip_address='203.0.113.7', user_agent='curl/8.4.0')
        >>> click.referrer is None
        True
        >>> ClickEventModel.from_dict(click.to_dict()) == click
        True
    """

    timestamp: datetime = field(default_factory=utc_now)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    referrer: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'timestamp', _as_utc(self.timestamp))

    def to_dict(self) -> dict[str, Any]:
        return {
            'timestamp': _isoformat(self.timestamp),
            'ip_address': self.ip_address,
            'user_agent': self.user_agent,
            'referrer': self.referrer,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'ClickEventModel':
        return cls(
            timestamp=_parse_datetime(data.get('timestamp')) or utc_now(),
            ip_address=data.get('ip_address'),
            user_agent=data.get('user_agent'),
            referrer=data.get('referrer'),
        )


@dataclass
class ShortLinkModel:
    """Represent a shortened URL mapping and its usage history.

    Attributes:
        original_url (str):
            Absolute destination address the shortcode redirects to.
        shortcode (str):
            Unique, URL-safe identifier of the short link.
        id (Optional[str]):
            Opaque durable identifier. Assigned by the data store on insert.
        owner_id (Optional[str]):
            Identity which created the link. None for anonymous links.
        click_count (int):
            Number of recorded clicks. Always equals len(click_history) in the store.
        click_history (list[ClickEventModel]):
            Append-only, chronologically ordered click events.
        expires_at (Optional[datetime]):
            After this moment the link is logically gone.
        is_active (bool):
            False makes the link logically gone regardless of expires_at.
        created_at (Optional[datetime]), updated_at (Optional[datetime]):
            Store-managed timestamps.

    Example:
        >>> from datetime import timedelta
        >>> link = ShortLinkModel(
        ...     original_url='https://example.com/article/123',
        ...     shortcode='abc123',
        ...     expires_at=utc_now() - timedelta(days=1),
        ... )
        >>> link.gone_reason()
        'expired'
        >>> link.is_active = False
        >>> link.gone_reason()
        'inactive'
    """

    original_url: str
    shortcode: str
    id: Optional[str] = None
    owner_id: Optional[str] = None
    click_count: int = 0
    click_history: list[ClickEventModel] = field(default_factory=list)
    expires_at: Optional[datetime] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.expires_at = _as_utc(self.expires_at)
        self.created_at = _as_utc(self.created_at)
        self.updated_at = _as_utc(self.updated_at)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return (_as_utc(now) or utc_now()) > self.expires_at

    def gone_reason(self, now: Optional[datetime] = None) -> Optional[str]:
        """Return why the link is logically gone, or None if it is still valid.

        Deactivation takes precedence over expiry.
        """
        if not self.is_active:
            return GoneReason.INACTIVE.value
        if self.is_expired(now):
            return GoneReason.EXPIRED.value
        return None

    def to_dict(self, include_history: bool = True) -> dict[str, Any]:
        data = {
            'id': self.id,
            'original_url': self.original_url,
            'shortcode': self.shortcode,
            'owner_id': self.owner_id,
            'click_count': self.click_count,
            'expires_at': _isoformat(self.expires_at),
            'is_active': self.is_active,
            'created_at': _isoformat(self.created_at),
            'updated_at': _isoformat(self.updated_at),
        }
        if include_history:
            data['click_history'] = [click.to_dict() for click in self.click_history]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any], click_history: Optional[list[ClickEventModel]] = None) -> 'ShortLinkModel':
        """Build a model from its serialized form.

        Accepts both `to_dict()` output and flat string mappings (e.g. a Redis hash),
        where booleans are stored as '1'/'0' and empty strings mean None.
        """
        is_active = data.get('is_active', True)
        if isinstance(is_active, str):
            is_active = is_active not in {'0', 'false', 'False', ''}

        if click_history is None:
            click_history = [ClickEventModel.from_dict(click) for click in data.get('click_history') or []]

        return cls(
            id=data.get('id') or None,
            original_url=data['original_url'],
            shortcode=data['shortcode'],
            owner_id=data.get('owner_id') or None,
            click_count=int(data.get('click_count') or 0),
            click_history=click_history,
            expires_at=_parse_datetime(data.get('expires_at')),
            is_active=bool(is_active),
            created_at=_parse_datetime(data.get('created_at')),
            updated_at=_parse_datetime(data.get('updated_at')),
        )
