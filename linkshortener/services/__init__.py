from linkshortener.services.click_recorder import ClickRecorder
from linkshortener.services.redirect_resolver import RedirectResolver
from linkshortener.services.shorten_service import ShortenService
from linkshortener.services.analytics_service import AnalyticsService


__all__ = [
    'ClickRecorder',
    'RedirectResolver',
    'ShortenService',
    'AnalyticsService',
]
