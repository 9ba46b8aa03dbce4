"""Process-local implementation of ShortLinkBaseDAO

Selected with `"active_backend": "memory"` for local runs (SAM, scripts) and used
by the behavioural test-suite. Every mutation happens under a single lock, which
gives the same guarantees the Redis DAO gets from SET NX and MULTI/EXEC:
exactly-one-winner inserts and lost-update-free click recording.

Data does not survive the process and is not shared between Lambda instances.
"""

import copy
import threading
import uuid
from dataclasses import replace

from beartype import beartype

from linkshortener.models import ShortLinkModel, ClickEventModel, utc_now
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError


class ShortLinkMemoryDAO(ShortLinkBaseDAO):
    """Thread-safe in-memory DAO for short links.

    Returned models are deep copies; mutating them never changes stored state.
    """

    def __init__(self, **kwargs):
        self._lock = threading.Lock()
        self._links: dict[str, ShortLinkModel] = {}  # id -> link
        self._codes: dict[str, str] = {}  # shortcode -> id

    @beartype
    def insert(self, short_link: ShortLinkModel, **kwargs) -> ShortLinkModel:
        now = utc_now()
        # fmt: off
        stored = replace(short_link,
                         id=uuid.uuid4().hex,
                         click_count=0,
                         click_history=[],
                         created_at=now,
                         updated_at=now)
        # fmt: on
        with self._lock:
            if stored.shortcode in self._codes:
                raise ShortLinkAlreadyExistsError(f"Short URL with code '{stored.shortcode}' already exists.")
            self._codes[stored.shortcode] = stored.id
            self._links[stored.id] = stored
            return copy.deepcopy(stored)

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel | None:
        with self._lock:
            link_id = self._codes.get(shortcode)
            return None if link_id is None else copy.deepcopy(self._links[link_id])

    @beartype
    def get_by_id(self, link_id: str, **kwargs) -> ShortLinkModel | None:
        with self._lock:
            short_link = self._links.get(link_id)
            return None if short_link is None else copy.deepcopy(short_link)

    @beartype
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortLinkModel]:
        with self._lock:
            owned = [copy.deepcopy(link) for link in self._links.values() if link.owner_id == owner_id]
        return sorted(owned, key=lambda link: link.created_at, reverse=True)

    @beartype
    def hit(self, shortcode: str, click: ClickEventModel, **kwargs) -> int:
        with self._lock:
            link_id = self._codes.get(shortcode)
            if link_id is None:
                raise ShortLinkNotFoundError(f"Short URL with code '{shortcode}' not found.")
            return self._append_click(self._links[link_id], click)

    @beartype
    def record_click(self, short_link: ShortLinkModel, click: ClickEventModel, **kwargs) -> ShortLinkModel:
        with self._lock:
            stored = self._links.get(short_link.id)
            if stored is None:
                raise ShortLinkNotFoundError(f"Short URL with code '{short_link.shortcode}' not found.")
            short_link.click_count = self._append_click(stored, click)
        short_link.click_history.append(click)
        short_link.updated_at = stored.updated_at
        return short_link

    @beartype
    def set_active(self, link_id: str, active: bool, **kwargs) -> ShortLinkModel:
        with self._lock:
            stored = self._links.get(link_id)
            if stored is None:
                raise ShortLinkNotFoundError(f"Short URL with id '{link_id}' not found.")
            stored.is_active = active
            stored.updated_at = utc_now()
            return copy.deepcopy(stored)

    @beartype
    def delete(self, link_id: str, **kwargs) -> None:
        with self._lock:
            stored = self._links.pop(link_id, None)
            if stored is None:
                raise ShortLinkNotFoundError(f"Short URL with id '{link_id}' not found.")
            del self._codes[stored.shortcode]

    @staticmethod
    def _append_click(stored: ShortLinkModel, click: ClickEventModel) -> int:
        # Caller holds the lock
        stored.click_count += 1
        stored.click_history.append(click)
        stored.updated_at = utc_now()
        return stored.click_count
