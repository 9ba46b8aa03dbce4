import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing short links.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "linkshortener:prod" or "linkshortener:dev".

    Layout:
        links:<id>              -> hash with the link's scalar fields
        links:<id>:clicks       -> list of JSON-encoded click events
        codes:<shortcode>       -> link id (SET NX reservation, uniqueness gate)
        owners:<owner>:links    -> sorted set of link ids scored by creation time
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, link_id: str) -> str:
        return f'links:{link_id}'

    @prefix_key
    def link_clicks_key(self, link_id: str) -> str:
        return f'links:{link_id}:clicks'

    @prefix_key
    def shortcode_key(self, shortcode: str) -> str:
        return f'codes:{shortcode}'

    @prefix_key
    def owner_links_key(self, owner_id: str) -> str:
        return f'owners:{owner_id}:links'
