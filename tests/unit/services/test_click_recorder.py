"""Unit tests for ClickRecorder

Test coverage includes:
    1. Synchronous recording
       - Uses record_click() for loaded links and hit() otherwise.
       - Logs and swallows DAO failures.
    2. Background recording
       - dispatch() returns a future and records off the calling thread.
       - Failures end up in the error sink (logged) and never reach the caller.
"""

import threading
from unittest.mock import MagicMock

import pytest

from linkshortener.models import ShortLinkModel, ClickEventModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from linkshortener.services import ClickRecorder


@pytest.fixture
def dao():
    return MagicMock(spec=ShortLinkBaseDAO)


# -------------------------------
# 1. Synchronous recording
# -------------------------------


def test_record_by_shortcode(dao, executor):
    click = ClickEventModel()

    ClickRecorder(dao, executor=executor).record('abc', click)

    dao.hit.assert_called_once_with('abc', click)
    dao.record_click.assert_not_called()


def test_record_against_loaded_link(dao, executor):
    click = ClickEventModel()
    short_link = ShortLinkModel(original_url='https://example.com', shortcode='abc', id='id1')

    ClickRecorder(dao, executor=executor).record('abc', click, short_link=short_link)

    dao.record_click.assert_called_once_with(short_link, click)
    dao.hit.assert_not_called()


@pytest.mark.parametrize('error', [DataStoreError('timed out'), ShortLinkNotFoundError('gone')])
def test_record_failures_are_logged(dao, executor, error, caplog):
    dao.hit.side_effect = error

    ClickRecorder(dao, executor=executor).record('abc', ClickEventModel())

    assert caplog.records[-1].levelname == 'ERROR'
    assert caplog.records[-1].shortcode == 'abc'


# -------------------------------
# 2. Background recording
# -------------------------------


def test_dispatch_records_in_background(dao, executor):
    threads = []
    dao.hit.side_effect = lambda shortcode, click: threads.append(threading.current_thread().name) or 1
    click = ClickEventModel()

    future = ClickRecorder(dao, executor=executor).dispatch('abc', click)
    future.result(timeout=5)

    dao.hit.assert_called_once_with('abc', click)
    assert threads[0].startswith('test-click-recorder')


def test_dispatch_failures_go_to_error_sink(dao, executor, caplog):
    dao.hit.side_effect = DataStoreError('timed out')

    future = ClickRecorder(dao, executor=executor).dispatch('abc', ClickEventModel())
    executor.shutdown(wait=True)

    assert isinstance(future.exception(), DataStoreError)
    errors = [r for r in caplog.records if r.message == 'Failed to record click in background.']
    assert len(errors) == 1
    assert errors[0].exc_info[0] is DataStoreError


def test_default_executor_is_shared(dao):
    assert ClickRecorder(dao).executor is ClickRecorder(dao).executor
