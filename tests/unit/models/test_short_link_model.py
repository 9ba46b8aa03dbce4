"""Unit tests for ShortLinkModel and ClickEventModel

Test coverage includes:

1. Lifecycle helpers
   - Ensures is_expired() and gone_reason() follow expires_at and is_active.
   - Confirms deactivation takes precedence over expiry.

2. Serialization
   - Ensures naive datetimes are normalized to UTC.
   - Ensures to_dict()/from_dict() handle Redis hash strings.
"""

from datetime import datetime, timedelta, timezone, UTC

import pytest
from freezegun import freeze_time

from linkshortener.models import ShortLinkModel, ClickEventModel


def _link(**kwargs):
    return ShortLinkModel(original_url='https://example.com', shortcode='abc', **kwargs)


# -------------------------------
# 1. Lifecycle helpers
# -------------------------------


@freeze_time('2025-10-15T12:00:00Z')
@pytest.mark.parametrize(
    'kwargs, expected',
    [
        ({}, None),
        ({'expires_at': datetime(2025, 10, 16, tzinfo=UTC)}, None),
        ({'expires_at': datetime(2025, 10, 15, 11, 59, tzinfo=UTC)}, 'expired'),
        ({'is_active': False}, 'inactive'),
        ({'is_active': False, 'expires_at': datetime(2025, 1, 1, tzinfo=UTC)}, 'inactive'),
    ],
)
def test_gone_reason(kwargs, expected):
    assert _link(**kwargs).gone_reason() == expected


def test_is_expired_with_explicit_now():
    link = _link(expires_at=datetime(2025, 10, 15, 12, 0, tzinfo=UTC))

    assert link.is_expired(now=datetime(2025, 10, 15, 12, 0, tzinfo=UTC)) is False
    assert link.is_expired(now=datetime(2025, 10, 15, 12, 0, 1, tzinfo=UTC)) is True


def test_naive_datetimes_are_utc():
    link = _link(expires_at=datetime(2030, 1, 1))
    click = ClickEventModel(timestamp=datetime(2030, 1, 1))

    assert link.expires_at.tzinfo is UTC
    assert click.timestamp.tzinfo is UTC


def test_aware_datetimes_are_converted_to_utc():
    link = _link(expires_at=datetime(2030, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2))))

    assert link.expires_at == datetime(2030, 1, 1, 0, 0, tzinfo=UTC)
    assert link.expires_at.tzinfo is UTC


# -------------------------------
# 2. Serialization
# -------------------------------


def test_to_dict():
    click = ClickEventModel(timestamp=datetime(2024, 1, 1, tzinfo=UTC), referrer='https://news.example')
    link = _link(id='id1', click_count=1, click_history=[click], expires_at=datetime(2030, 1, 1, tzinfo=UTC))

    data = link.to_dict()

    assert data['expires_at'] == '2030-01-01T00:00:00+00:00'
    assert data['click_history'] == [
        {'timestamp': '2024-01-01T00:00:00+00:00', 'ip_address': None, 'user_agent': None, 'referrer': 'https://news.example'}
    ]
    assert 'click_history' not in link.to_dict(include_history=False)


def test_from_dict_with_redis_strings():
    """Ensure flat string mappings (Redis hashes) are parsed."""
    link = ShortLinkModel.from_dict(
        {
            'id': 'id1',
            'original_url': 'https://example.com',
            'shortcode': 'abc',
            'owner_id': '',
            'click_count': '7',
            'expires_at': '',
            'is_active': '0',
            'created_at': '2025-10-15T00:00:00+00:00',
            'updated_at': '2025-10-15T00:00:00+00:00',
        }
    )

    assert link.owner_id is None
    assert link.click_count == 7
    assert link.expires_at is None
    assert link.is_active is False
    assert link.created_at == datetime(2025, 10, 15, tzinfo=UTC)


def test_to_dict_from_dict_preserves_link():
    link = _link(id='id1', owner_id='user-1', click_count=1, click_history=[ClickEventModel(ip_address='203.0.113.7')])

    assert ShortLinkModel.from_dict(link.to_dict()) == link
