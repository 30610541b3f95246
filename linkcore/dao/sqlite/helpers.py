import functools
import sqlite3
from typing import TypeVar, Any
from collections.abc import Callable

from linkcore.dao.exceptions import PersistenceError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_sqlite_error(method: F) -> F:
    """Wrap SQLite-interacting DAO methods to handle database errors

    Args:
        method (Callable[..., Any]):
            DAO method performing SQLite operations which may raise sqlite3.Error.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises PersistenceError on any SQLite failure
            (I/O errors, locked or corrupted database, closed connection).

    Example:
        >>> @handle_sqlite_error
        ... def get_value(self, key):
        ...     return self._conn.execute('SELECT value FROM kv WHERE key = ?', (key,)).fetchone()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except sqlite3.Error as e:
            raise PersistenceError(f'SQLite operation failed on {self.database}: {e}') from e

    return wrapper
