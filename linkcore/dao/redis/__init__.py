from linkcore.dao.redis.redis_key_schema import RedisKeySchema
from linkcore.dao.redis.key_value_redis_dao import KeyValueRedisDAO
from linkcore.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'KeyValueRedisDAO',
    'RedisClientMixin',
]
