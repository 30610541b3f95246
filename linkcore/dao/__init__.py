from linkcore.dao.base import KeyValueBaseDAO
from linkcore.dao.sqlite import KeyValueSqliteDAO
from linkcore.dao.redis import KeyValueRedisDAO


__all__ = [
    'KeyValueBaseDAO',
    'KeyValueSqliteDAO',
    'KeyValueRedisDAO',
]
