from linkcore.dao.sqlite.key_value_sqlite_dao import KeyValueSqliteDAO


__all__ = [
    'KeyValueSqliteDAO',
]
