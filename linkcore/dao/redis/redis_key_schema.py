import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> bytes:
        key = func(self, *args, **kwargs)
        return self.prefix.encode('utf-8') + b':' + key if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for the key-value datastore.

    Keys are raw bytes since datastore keys (e.g. 8-byte little-endian IDs)
    aren't necessarily valid UTF-8.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "linkcore:prod" or "linkcore:dev".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def entry_key(self, key: bytes) -> bytes:
        return b'kv:' + key

    @prefix_key
    def counter_key(self, key: bytes) -> bytes:
        return b'counters:' + key
