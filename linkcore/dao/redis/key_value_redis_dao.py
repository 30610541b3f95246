"""Data Access Object (DAO) implementation for a Redis key-value store

This module provides a Redis-based implementation of KeyValueBaseDAO.

Responsibilities:
    - Store and retrieve raw key-value pairs in Redis;
    - Lease windows of the ID sequence counter with INCRBY;
    - Give unconsumed counter values back with an optimistic (WATCH) transaction;
    - Provide defensive error handling and raise appropriate DAO exceptions.

Classes:
    KeyValueRedisDAO:
        DAO for storing and retrieving raw key-value pairs in a Redis datastore.

Example:
    >>> from linkcore.dao.redis import KeyValueRedisDAO

    >>> dao = KeyValueRedisDAO(prefix="linkcore:dev")
    >>> dao.set(b'\\x01\\x00\\x00\\x00\\x00\\x00\\x00\\x00', b'https://example.com/page')
    <KeyValueRedisDAO>
    >>> dao.get(b'\\x01\\x00\\x00\\x00\\x00\\x00\\x00\\x00')
    b'https://example.com/page'
    >>> dao.lease(b'seq', 100)
    (0, 100)

NOTE:
    Redis integers are signed 64-bit, so the counter (and thus the ID space)
    is exhausted at 2^63-1 with this backend. INCRBY past that point fails and
    is reported as PersistenceError.
"""

import logging

import redis
from beartype import beartype

from linkcore.dao.base import KeyValueBaseDAO
from linkcore.dao.redis.mixins import RedisClientMixin
from linkcore.dao.redis.helpers import handle_redis_error
from linkcore.dao.exceptions import KeyNotFoundError, PersistenceError


logger = logging.getLogger(__name__)


class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
    """Redis-based Data Access Object (DAO) for raw key-value pairs

    This class implements the KeyValueBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get(key: bytes, **kwargs) -> bytes:
            Raises KeyNotFoundError when the key doesn't exist.
        set(key: bytes, value: bytes, **kwargs) -> KeyValueRedisDAO
        lease(key: bytes, bandwidth: int, **kwargs) -> tuple[int, int]
        give_back(key: bytes, expected: int, value: int, **kwargs) -> bool
        close() -> None

        Every method raises PersistenceError on Redis failures.
    """

    @handle_redis_error
    @beartype
    def get(self, key: bytes, **kwargs) -> bytes:
        """Retrieve the value stored under key

        Raises:
            KeyNotFoundError:
                If no value is stored under key.
            PersistenceError:
                If Redis connectivity issues occur.
        """
        value = self.redis.get(self.keys.entry_key(key))
        if value is None:
            raise KeyNotFoundError(f'Key {key!r} not found.')
        return value

    @handle_redis_error
    @beartype
    def set(self, key: bytes, value: bytes, **kwargs) -> 'KeyValueRedisDAO':
        """Store value under key (SET is atomic)

        Returns:
            KeyValueRedisDAO: self (for method chaining)
        """
        self.redis.set(self.keys.entry_key(key), value)
        return self

    @handle_redis_error
    @beartype
    def lease(self, key: bytes, bandwidth: int, **kwargs) -> tuple[int, int]:
        """Atomically advance the counter under key by bandwidth

        INCRBY initializes a missing counter to 0 before incrementing it.

        Returns:
            tuple[int, int]: the leased window (start, limit).

        Example:
            >>> dao.lease(b'seq', 100)
            (0, 100)
            >>> dao.lease(b'seq', 100)
            (100, 200)
        """
        if bandwidth < 1:
            raise ValueError(f'Bandwidth must be a positive integer (given value: {bandwidth}).')

        limit = int(self.redis.incrby(self.keys.counter_key(key), bandwidth))
        return limit - bandwidth, limit

    @handle_redis_error
    @beartype
    def give_back(self, key: bytes, expected: int, value: int, **kwargs) -> bool:
        """Set the counter under key to value if it still holds expected

        NOTE: the check and the write are executed as an optimistic transaction:
              if another client touches the counter between WATCH and EXEC, the
              transaction is aborted and the counter is left as is. Leaving it
              as is only burns values, it never hands them out twice:

              (process 1): WATCH <counter>; GET <counter>  => 200
              (process 2): INCRBY <counter> 100            => 300
              (process 1): MULTI; SET <counter> 142; EXEC  => aborted (WatchError)

        Returns:
            bool: True if the counter was written, False otherwise.
        """
        counter_key = self.keys.counter_key(key)
        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(counter_key)
                current = pipe.get(counter_key)
                if current is None:
                    return False
                try:
                    current = int(current)
                except ValueError as e:
                    raise PersistenceError(f'Counter {counter_key!r} is corrupted.') from e
                if current != expected:
                    return False
                pipe.multi()
                pipe.set(counter_key, value)
                pipe.execute()
            except redis.exceptions.WatchError:
                logger.warning('Sequence counter changed concurrently; keeping it.', extra={'counterKey': counter_key.decode('utf-8', 'replace')})
                return False
        return True

    @handle_redis_error
    def close(self) -> None:
        """Close the Redis client and release its connection pool."""
        self.redis.close()
