from linkshortener.models.short_link_model import ShortLinkModel, ClickEventModel, utc_now
from linkshortener.models.link_analytics_model import LinkAnalyticsModel, clicks_by_date


__all__ = [
    'ShortLinkModel',
    'ClickEventModel',
    'LinkAnalyticsModel',
    'clicks_by_date',
    'utc_now',
]
