"""Redis client setup shared by Redis-backed DAOs

RedisClientMixin builds (or adopts) a client that never decodes responses,
since datastore keys and values are raw bytes, and PINGs it once on startup.
"""

import redis

from linkcore.dao.redis.redis_key_schema import RedisKeySchema
from linkcore.dao.exceptions import PersistenceError


class RedisClientMixin:
    """Own a bytes-only Redis client and the key schema of a DAO

    Attributes:
        redis (redis.Redis):
            Client used by subclasses. Responses are raw bytes.
        keys (RedisKeySchema):
            Namespaced key builder.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int = 6379,
        redis_db: int = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Adopt redis_client, or connect with the given parameters

        Raises:
            PersistenceError:
                If Redis doesn't answer the startup PING.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=False,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    @property
    def location(self) -> str:
        """Connection target as host:port/db, for error messages."""
        info = self.redis.connection_pool.connection_kwargs
        return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"

    def _healthcheck(self, raise_error: bool = True) -> bool:
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            if raise_error:
                raise PersistenceError(f"Can't connect to Redis at {self.location}. Check the provided configuration parameters.") from e
            return False
        return True
