"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO for CRUD-like
operations with ShortLinkModel instances.

Responsibilities:
    - Insert short links behind an atomic shortcode reservation (SET NX);
    - Retrieve links by shortcode, id or owner;
    - Record clicks as one atomic increment + append (MULTI/EXEC);
    - Deactivate and delete links;
    - Translate Redis failures into DataStoreError.

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving ShortLinkModel in a Redis datastore.

Example:
    >>> from linkshortener.models import ShortLinkModel, ClickEventModel
    >>> from linkshortener.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix="app:dev")

    >>> short_link = dao.insert(ShortLinkModel(
    ...     original_url="https://example.com/page",
    ...     shortcode="abc123"
    ... ))
    >>> short_link.id
    '5f0c...'

    >>> dao.hit("abc123", ClickEventModel(user_agent="curl/8.4.0"))
    1
    >>> dao.get("abc123").click_count
    1
"""

import json
import uuid
from dataclasses import replace
from datetime import datetime

import redis
from beartype import beartype

from linkshortener.models import ShortLinkModel, ClickEventModel, utc_now
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import ShortLinkAlreadyExistsError, ShortLinkNotFoundError


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short links

    This class implements the ShortLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_link: ShortLinkModel, **kwargs) -> ShortLinkModel:
            Store a new link. Raises ShortLinkAlreadyExistsError when the shortcode is taken.

        get(shortcode: str, **kwargs) -> ShortLinkModel | None:
            Retrieve a link and its click history by shortcode.

        get_by_id(link_id: str, **kwargs) -> ShortLinkModel | None:
            Retrieve a link and its click history by id.

        list_by_owner(owner_id: str, **kwargs) -> list[ShortLinkModel]:
            Retrieve an owner's links, newest first.

        hit(shortcode: str, click: ClickEventModel, **kwargs) -> int:
            Atomically increment the click counter and append the click.

        record_click(short_link: ShortLinkModel, click: ClickEventModel, **kwargs) -> ShortLinkModel:
            Same as hit(), keyed by an already loaded link.

        set_active(link_id: str, active: bool, **kwargs) -> ShortLinkModel:
            Flip the active flag.

        delete(link_id: str, **kwargs) -> None:
            Remove the link and release its shortcode.

    All methods raise DataStoreError when Redis fails.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, short_link: ShortLinkModel, **kwargs) -> ShortLinkModel:
        """Insert a short link into Redis

        The shortcode is reserved first with SET NX, so when two callers race for
        the same shortcode exactly one of them wins and the loser writes nothing.
        The winner then writes the link hash and the owner index entry in one
        transaction. If that write fails the reservation is released again.

        Args:
            short_link (ShortLinkModel):
                Link to insert. Its id, counters and timestamps are assigned here.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkModel: the stored link.

        Raises:
            ShortLinkAlreadyExistsError:
                If a short link with the same shortcode already exists.
            DataStoreError:
                If Redis fails while reserving or writing the link.

        Example:
            >>> dao.insert(ShortLinkModel(original_url='https://example.com', shortcode='abc123'))
            ShortLinkModel(original_url='https://example.com', shortcode='abc123', id='...', ...)
        """
        now = utc_now()
        # fmt: off
        stored = replace(short_link,
                         id=uuid.uuid4().hex,
                         click_count=0,
                         click_history=[],
                         created_at=now,
                         updated_at=now)
        # fmt: on
        link_key = self.keys.link_key(stored.id)
        shortcode_key = self.keys.shortcode_key(stored.shortcode)
        if not self.redis.set(shortcode_key, stored.id, nx=True):
            raise ShortLinkAlreadyExistsError(f"Short URL with code '{stored.shortcode}' already exists.")

        try:
            with self.redis.pipeline(transaction=True) as pipe:
                pipe.hset(link_key, mapping=self._to_hash(stored))
                if stored.owner_id is not None:
                    pipe.zadd(self.keys.owner_links_key(stored.owner_id), {stored.id: now.timestamp()})
                pipe.execute()
        except redis.exceptions.RedisError:
            # Release the reservation, nothing else references this id.
            self.redis.delete(shortcode_key)
            raise

        return stored

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel | None:
        link_id = self.redis.get(self.keys.shortcode_key(shortcode))
        if link_id is None:
            return None
        return self._load(link_id)

    @handle_redis_connection_error
    @beartype
    def get_by_id(self, link_id: str, **kwargs) -> ShortLinkModel | None:
        return self._load(link_id)

    @handle_redis_connection_error
    @beartype
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortLinkModel]:
        """Retrieve all links of an owner, ordered by creation time (newest first)

        Ids are read from the owner's sorted set in descending score order and
        loaded in a single pipeline. Ids whose hash vanished in between (deleted
        concurrently) are skipped.
        """
        link_ids = self.redis.zrevrange(self.keys.owner_links_key(owner_id), 0, -1)
        if not link_ids:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for link_id in link_ids:
                pipe.hgetall(self.keys.link_key(link_id))
                pipe.lrange(self.keys.link_clicks_key(link_id), 0, -1)
            results = pipe.execute()

        links = []
        for fields, clicks in zip(results[::2], results[1::2]):
            if fields:
                links.append(self._from_redis(fields, clicks))
        return links

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, click: ClickEventModel, **kwargs) -> int:
        """Atomically increment a link's click counter and append the click event

        Args:
            shortcode (str):
                The shortcode of the clicked link.
            click (ClickEventModel):
                The click to record.
            **kwargs:
                Additional keyword arguments, used by data store.

        Return:
            int:
                Click count after this click.

        Raises:
            ShortLinkNotFoundError:
                If no short link with the given shortcode exists.
            DataStoreError:
                If Redis fails.

        Example:
            >>> dao.hit('abc123', ClickEventModel())
            42
        """
        return self._append_click(shortcode, click)

    @handle_redis_connection_error
    @beartype
    def record_click(self, short_link: ShortLinkModel, click: ClickEventModel, **kwargs) -> ShortLinkModel:
        click_count = self._append_click(short_link.shortcode, click, expected_id=short_link.id)
        short_link.click_count = click_count
        short_link.click_history.append(click)
        short_link.updated_at = utc_now()
        return short_link

    @handle_redis_connection_error
    @beartype
    def set_active(self, link_id: str, active: bool, **kwargs) -> ShortLinkModel:
        link_key = self.keys.link_key(link_id)

        # NOTE: WATCH the hash so a concurrent delete() aborts this transaction
        #       instead of leaving a partial hash with only 'is_active' behind.
        with self.redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    pipe.watch(link_key)
                    if not pipe.exists(link_key):
                        raise ShortLinkNotFoundError(f"Short URL with id '{link_id}' not found.")
                    pipe.multi()
                    pipe.hset(link_key, mapping={'is_active': int(active), 'updated_at': utc_now().isoformat()})
                    pipe.execute()
                    break
                except redis.WatchError:
                    continue

        short_link = self._load(link_id)
        if short_link is None:  # pragma: no cover
            raise ShortLinkNotFoundError(f"Short URL with id '{link_id}' not found.")
        return short_link

    @handle_redis_connection_error
    @beartype
    def delete(self, link_id: str, **kwargs) -> None:
        """Remove a link, its click history and its owner index entry

        The shortcode reservation is only released while it still points at this
        link. It is WATCHed, so a concurrent re-reservation of the shortcode
        aborts the transaction and the check runs again.
        """
        link_key = self.keys.link_key(link_id)
        fields = self.redis.hgetall(link_key)
        if not fields:
            raise ShortLinkNotFoundError(f"Short URL with id '{link_id}' not found.")
        shortcode_key = self.keys.shortcode_key(fields['shortcode'])

        with self.redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    pipe.watch(shortcode_key)
                    keys = [link_key, self.keys.link_clicks_key(link_id)]
                    if pipe.get(shortcode_key) == link_id:
                        keys.append(shortcode_key)
                    pipe.multi()
                    pipe.delete(*keys)
                    if fields.get('owner_id'):
                        pipe.zrem(self.keys.owner_links_key(fields['owner_id']), link_id)
                    pipe.execute()
                    break
                except redis.WatchError:
                    continue

    def _append_click(self, shortcode: str, click: ClickEventModel, expected_id: str | None = None) -> int:
        """Run HINCRBY + RPUSH as one MULTI/EXEC transaction

        NOTE: The shortcode reservation is WATCHed. delete() removes it (while it still
              points at the link) in the same transaction as the hash, so a click racing a delete is retried and then
              observes the link as missing, instead of HINCRBY resurrecting a hash
              that only holds 'click_count':

              (lambda 1): ShortLinkRedisDAO.hit():
                          -> GET <app>:codes:<shortcode>   => <id>
                          ... interruption
              (lambda 2): ShortLinkRedisDAO.delete():
                          -> DEL <app>:links:<id> <app>:links:<id>:clicks <app>:codes:<shortcode>
              (lambda 1): ShortLinkRedisDAO.hit() continued...:
                          -> EXEC => aborted (watched key changed), retry => ShortLinkNotFoundError

              Concurrent clicks never touch the watched key, so they don't retry each other.
        """
        shortcode_key = self.keys.shortcode_key(shortcode)
        payload = json.dumps(click.to_dict())

        with self.redis.pipeline(transaction=True) as pipe:
            while True:
                try:
                    pipe.watch(shortcode_key)
                    link_id = pipe.get(shortcode_key)
                    if link_id is None or (expected_id is not None and link_id != expected_id):
                        raise ShortLinkNotFoundError(f"Short URL with code '{shortcode}' not found.")

                    link_key = self.keys.link_key(link_id)
                    pipe.multi()
                    pipe.hincrby(link_key, 'click_count', 1)
                    pipe.rpush(self.keys.link_clicks_key(link_id), payload)
                    pipe.hset(link_key, 'updated_at', utc_now().isoformat())
                    click_count, _, _ = pipe.execute()
                    return int(click_count)
                except redis.WatchError:
                    continue

    def _load(self, link_id: str) -> ShortLinkModel | None:
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.hgetall(self.keys.link_key(link_id))
            pipe.lrange(self.keys.link_clicks_key(link_id), 0, -1)
            fields, clicks = pipe.execute()

        if not fields:
            return None
        return self._from_redis(fields, clicks)

    @staticmethod
    def _from_redis(fields: dict, clicks: list) -> ShortLinkModel:
        history = [ClickEventModel.from_dict(json.loads(click)) for click in clicks]
        return ShortLinkModel.from_dict(fields, click_history=history)

    @staticmethod
    def _to_hash(short_link: ShortLinkModel) -> dict[str, str | int]:
        def _dt(value: datetime | None) -> str:
            return '' if value is None else value.isoformat()

        # fmt: off
        return {
            'id':           short_link.id,
            'original_url': short_link.original_url,
            'shortcode':    short_link.shortcode,
            'owner_id':     short_link.owner_id or '',
            'click_count':  short_link.click_count,
            'expires_at':   _dt(short_link.expires_at),
            'is_active':    int(short_link.is_active),
            'created_at':   _dt(short_link.created_at),
            'updated_at':   _dt(short_link.updated_at),
        }
        # fmt: on
