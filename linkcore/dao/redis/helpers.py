import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from linkcore.dao.exceptions import PersistenceError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_error(method: F) -> F:
    """Re-raise Redis errors of a DAO method as PersistenceError

    Connection failures name the Redis location (see RedisClientMixin.location).
    Failed commands, e.g. INCRBY overflowing the signed 64-bit range, carry the
    Redis error message.

    Example:
        >>> @handle_redis_error
        ... def get_value(self, key):
        ...     return self.redis.get(key)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise PersistenceError(f"Can't connect to Redis at {self.location}.") from e
        except redis.exceptions.RedisError as e:
            raise PersistenceError(f'Redis command failed: {e}') from e

    return wrapper
