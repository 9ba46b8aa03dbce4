from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Any

from linkshortener.models.short_link_model import ClickEventModel, ShortLinkModel


def clicks_by_date(click_history: list[ClickEventModel]) -> dict[str, int]:
    """Group click events by UTC calendar day ('YYYY-MM-DD').

    Example:
        >>> from datetime import datetime, UTC
        >>> clicks = [
        ...     ClickEventModel(timestamp=datetime(2024, 1, 1, 23, 59, 59, tzinfo=UTC)),
        ...     ClickEventModel(timestamp=datetime(2024, 1, 2, 0, 0, 1, tzinfo=UTC)),
        ... ]
        >>> clicks_by_date(clicks)
        {'2024-01-01': 1, '2024-01-02': 1}
    """
    days = Counter(click.timestamp.astimezone(UTC).date().isoformat() for click in click_history)
    return dict(sorted(days.items()))


@dataclass(frozen=True)
class LinkAnalyticsModel:
    """Usage report for a single short link."""

    original_url: str
    shortcode: str
    total_clicks: int
    created_at: datetime | None
    click_history: list[ClickEventModel] = field(default_factory=list)
    clicks_by_date: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_short_link(cls, short_link: ShortLinkModel) -> 'LinkAnalyticsModel':
        return cls(
            original_url=short_link.original_url,
            shortcode=short_link.shortcode,
            total_clicks=short_link.click_count,
            created_at=short_link.created_at,
            click_history=list(short_link.click_history),
            clicks_by_date=clicks_by_date(short_link.click_history),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'original_url': self.original_url,
            'shortcode': self.shortcode,
            'total_clicks': self.total_clicks,
            'created_at': None if self.created_at is None else self.created_at.isoformat(),
            'click_history': [click.to_dict() for click in self.click_history],
            'clicks_by_date': dict(self.clicks_by_date),
        }
