from concurrent.futures import ThreadPoolExecutor

import pytest

from linkshortener.services import ClickRecorder, RedirectResolver, ShortenService, AnalyticsService


@pytest.fixture
def executor():
    """Dedicated pool for background click recording (drained on teardown)."""
    pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix='test-click-recorder')
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def click_recorder(memory_dao, executor):
    return ClickRecorder(memory_dao, executor=executor)


@pytest.fixture
def resolver(memory_dao, memory_cache, click_recorder):
    return RedirectResolver(memory_dao, memory_cache, click_recorder=click_recorder)


@pytest.fixture
def shorten_service(memory_dao, memory_cache):
    return ShortenService(memory_dao, memory_cache)


@pytest.fixture
def analytics_service(memory_dao):
    return AnalyticsService(memory_dao)
