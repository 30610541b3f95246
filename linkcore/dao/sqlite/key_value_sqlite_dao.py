"""Data Access Object (DAO) implementation for an embedded, on-disk SQLite key-value store

This module provides a SQLite-based implementation of KeyValueBaseDAO. The whole
dataset lives in a single directory holding the SQLite database file and its
write-ahead log.

Responsibilities:
    - Open (and create if missing) the dataset directory and database;
    - Point lookups and atomic single-key writes of raw bytes;
    - Atomically lease windows of the ID sequence counter;
    - Hold the database exclusively, so only one process owns a dataset;
    - Raise appropriate DAO exceptions on storage failures.

Classes:
    KeyValueSqliteDAO:
        DAO for storing and retrieving raw key-value pairs in a SQLite database.

Example:
    >>> from linkcore.dao.sqlite import KeyValueSqliteDAO
    >>> dao = KeyValueSqliteDAO('/var/lib/linkcore')
    >>> dao.set(b'\\x01\\x00\\x00\\x00\\x00\\x00\\x00\\x00', b'https://example.com')
    <KeyValueSqliteDAO>
    >>> dao.get(b'\\x01\\x00\\x00\\x00\\x00\\x00\\x00\\x00')
    b'https://example.com'
    >>> dao.lease(b'seq', 100)
    (0, 100)
    >>> dao.close()
"""

import logging
import sqlite3
import struct
import threading
from contextlib import contextmanager
from pathlib import Path

from beartype import beartype

from linkcore.dao.base import KeyValueBaseDAO
from linkcore.dao.sqlite.helpers import handle_sqlite_error
from linkcore.dao.exceptions import KeyNotFoundError, PersistenceError
from linkcore.utils.constants import MAX_UINT64, SQLITE_DATABASE_FILENAME


logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key BLOB PRIMARY KEY,
    value BLOB NOT NULL
) WITHOUT ROWID;
"""

# Counters are stored as 8-byte big-endian unsigned integers
_COUNTER = struct.Struct('>Q')


class KeyValueSqliteDAO(KeyValueBaseDAO):
    """SQLite-based Data Access Object (DAO) for raw key-value pairs

    The connection is opened in EXCLUSIVE locking mode with a WAL journal and
    FULL synchronous writes: every committed write is durable, and a second
    process can't write to the same dataset while this one holds it.

    The connection is shared between threads; a lock serializes access to it.

    Attributes:
        path (Path):
            Dataset directory.
        database (Path):
            SQLite database file inside the dataset directory.

    Methods:
        get(key: bytes, **kwargs) -> bytes:
            Raises KeyNotFoundError when the key doesn't exist.
        set(key: bytes, value: bytes, **kwargs) -> KeyValueSqliteDAO
        lease(key: bytes, bandwidth: int, **kwargs) -> tuple[int, int]
        give_back(key: bytes, expected: int, value: int, **kwargs) -> bool
        close() -> None

        Every method raises PersistenceError on SQLite failures.
    """

    def __init__(self, path: str | Path, filename: str = SQLITE_DATABASE_FILENAME, timeout: float = 5.0):
        """Open (or create) the dataset at path

        Args:
            path (str | Path):
                Dataset directory. Created with its parents if missing.

            filename (str):
                Database file name inside the dataset directory.

            timeout (float):
                Seconds to wait for a lock held by another connection.

        Raises:
            PersistenceError:
                If the directory or database can't be created, opened or initialized.
        """
        self.path = Path(path)
        self.database = self.path / filename
        self._lock = threading.Lock()
        self._closed = False

        try:
            self.path.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: transactions are managed explicitly (see _transaction())
            self._conn = sqlite3.connect(self.database, timeout=timeout, isolation_level=None, check_same_thread=False)
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Can't open SQLite database at {self.database}.") from e

        try:
            self._conn.execute('PRAGMA locking_mode=EXCLUSIVE')
            self._conn.execute('PRAGMA journal_mode=WAL')
            self._conn.execute('PRAGMA synchronous=FULL')
            self._conn.execute(SCHEMA_SQL)
            # Take the exclusive lock right away instead of on first write
            self._conn.execute('BEGIN EXCLUSIVE')
            self._conn.execute('COMMIT')
        except sqlite3.Error as e:
            self._conn.close()
            raise PersistenceError(f"Can't initialize SQLite database at {self.database}.") from e

        logger.debug('Opened SQLite datastore.', extra={'database': str(self.database)})

    @contextmanager
    def _transaction(self):
        """Run the enclosed statements in one write transaction (caller holds the lock)."""
        self._conn.execute('BEGIN IMMEDIATE')
        try:
            yield self._conn
        except BaseException:
            self._conn.execute('ROLLBACK')
            raise

        try:
            self._conn.execute('COMMIT')
        except sqlite3.Error:
            # A failed COMMIT may leave the transaction open
            if self._conn.in_transaction:
                try:
                    self._conn.execute('ROLLBACK')
                except sqlite3.Error as e:
                    logger.warning('Failed to roll back after failed commit.', extra={'database': str(self.database), 'error': str(e)})
            raise

    def _read_counter(self, key: bytes) -> int | None:
        row = self._conn.execute('SELECT value FROM kv WHERE key = ?', (key,)).fetchone()
        if row is None:
            return None
        if len(row[0]) != _COUNTER.size:
            raise PersistenceError(f'Counter {key!r} in {self.database} is corrupted.')
        return _COUNTER.unpack(row[0])[0]

    @handle_sqlite_error
    @beartype
    def get(self, key: bytes, **kwargs) -> bytes:
        """Retrieve the value stored under key

        Raises:
            KeyNotFoundError:
                If no value is stored under key.
            PersistenceError:
                If the database can't be read.
        """
        with self._lock:
            row = self._conn.execute('SELECT value FROM kv WHERE key = ?', (key,)).fetchone()

        if row is None:
            raise KeyNotFoundError(f'Key {key!r} not found.')
        return bytes(row[0])

    @handle_sqlite_error
    @beartype
    def set(self, key: bytes, value: bytes, **kwargs) -> 'KeyValueSqliteDAO':
        """Atomically store value under key

        A single statement in autocommit mode is its own transaction.

        Returns:
            KeyValueSqliteDAO: self (for method chaining)

        Raises:
            PersistenceError:
                If the database can't be written.
        """
        with self._lock:
            self._conn.execute('INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)', (key, value))
        return self

    @handle_sqlite_error
    @beartype
    def lease(self, key: bytes, bandwidth: int, **kwargs) -> tuple[int, int]:
        """Atomically advance the counter under key by bandwidth

        NOTE: the window is clamped to 2^64-1 since the counter is stored as an
              unsigned 64-bit integer. An exhausted counter returns an empty
              window (start == limit).

        Returns:
            tuple[int, int]: the leased window (start, limit).

        Raises:
            PersistenceError:
                If the counter can't be read or written.

        Example:
            >>> dao.lease(b'seq', 100)
            (0, 100)
            >>> dao.lease(b'seq', 100)
            (100, 200)
        """
        if bandwidth < 1:
            raise ValueError(f'Bandwidth must be a positive integer (given value: {bandwidth}).')

        with self._lock, self._transaction() as conn:
            start = self._read_counter(key) or 0
            limit = min(start + bandwidth, MAX_UINT64)
            conn.execute('INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)', (key, _COUNTER.pack(limit)))
        return start, limit

    @handle_sqlite_error
    @beartype
    def give_back(self, key: bytes, expected: int, value: int, **kwargs) -> bool:
        """Set the counter under key to value if it still holds expected

        Returns:
            bool: True if the counter was written, False otherwise.

        Raises:
            PersistenceError:
                If the counter can't be read or written.
        """
        with self._lock, self._transaction() as conn:
            if self._read_counter(key) != expected:
                return False
            conn.execute('INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)', (key, _COUNTER.pack(value)))
        return True

    @handle_sqlite_error
    def close(self) -> None:
        """Close the database connection. Closing twice is a no-op.

        Raises:
            PersistenceError:
                If the connection can't be closed.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._conn.close()

        logger.debug('Closed SQLite datastore.', extra={'database': str(self.database)})
