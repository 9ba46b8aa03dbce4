"""Click recording for resolved short links

Responsibilities:
    - Persist one click event per successful redirect.
    - Synchronous recording for the store path (against the loaded record).
    - Fire-and-forget recording for the cache path, on an isolated thread pool.

Delivery is at-most-once and best-effort: failures are logged and never reach
the redirecting client, and clicks dispatched right before the process exits
(or the Lambda sandbox freezes) may be lost.

Example:
    >>> recorder = ClickRecorder(short_link_dao)
    >>> recorder.record('abc', ClickEventModel(ip_address='203.0.113.7'))
    >>> future = recorder.dispatch('abc', ClickEventModel())
    >>> future.done()
    False
"""

import functools
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from linkshortener.constants import ClickRecording
from linkshortener.models import ShortLinkModel, ClickEventModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.exceptions import DAOError


logger = logging.getLogger(__name__)


@functools.cache
def _shared_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(
        max_workers=ClickRecording.MAX_WORKERS,
        thread_name_prefix=ClickRecording.THREAD_NAME_PREFIX,
    )


class ClickRecorder:
    """Record click events through a short link DAO

    Args:
        short_link_dao (ShortLinkBaseDAO):
            Durable store receiving the click events.
        executor (Optional[ThreadPoolExecutor]):
            Pool used by dispatch(). Defaults to a process-wide pool.
    """

    def __init__(self, short_link_dao: ShortLinkBaseDAO, executor: Optional[ThreadPoolExecutor] = None):
        self.short_link_dao = short_link_dao
        self.executor = executor or _shared_executor()

    def record(self, shortcode: str, click: ClickEventModel, short_link: Optional[ShortLinkModel] = None) -> None:
        """Persist a click synchronously; log failures instead of raising

        With a loaded record the click is written against its id and the
        record's counters are refreshed in place. Without one the click is
        appended by shortcode.
        """
        try:
            self._record(shortcode, click, short_link)
        except DAOError:
            logger.error('Failed to record click.', extra={'shortcode': shortcode}, exc_info=True)

    def dispatch(self, shortcode: str, click: ClickEventModel) -> Future:
        """Record a click on the background pool without waiting for it

        Returns:
            Future: completes with None; a failure is logged by the error sink
            and is only visible to whoever inspects the future.
        """
        future = self.executor.submit(self._record, shortcode, click)
        future.add_done_callback(functools.partial(self._error_sink, shortcode))
        return future

    def _record(self, shortcode: str, click: ClickEventModel, short_link: Optional[ShortLinkModel] = None) -> None:
        if short_link is not None:
            self.short_link_dao.record_click(short_link, click)
        else:
            self.short_link_dao.hit(shortcode, click)
        logger.debug('Recorded click.', extra={'shortcode': shortcode})

    @staticmethod
    def _error_sink(shortcode: str, future: Future) -> None:
        if future.cancelled():
            logger.warning('Click recording was cancelled.', extra={'shortcode': shortcode})
            return
        error = future.exception()
        if error is not None:
            logger.error(
                'Failed to record click in background.',
                extra={'shortcode': shortcode},
                exc_info=(type(error), error, error.__traceback__),
            )
