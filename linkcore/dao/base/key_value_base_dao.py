"""Abstract base class for key-value data access objects (DAOs).

This class establishes a consistent contract for all key-value DAO implementations,
regardless of the underlying storage engine (e.g., SQLite, Redis).

Responsibilities:
    - Provide exact-match point lookups and atomic single-key writes of raw bytes.
    - Provide an atomic counter lease used to back the ID sequence.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkcore.models import URLRecord
        >>> from linkcore.dao.sqlite import KeyValueSqliteDAO

        >>> dao = KeyValueSqliteDAO('/tmp/linkcore')

        >>> record = URLRecord(id=42, target='https://example.com/blog/article-123')
        >>> dao.set(record.key, record.value)

        >>> dao.get(record.key)
        b'https://example.com/blog/article-123'

        >>> dao.lease(b'seq', 100)
        (0, 100)

        >>> dao.close()
"""

from abc import ABC, abstractmethod


class KeyValueBaseDAO(ABC):
    """Interface for key-value data access objects (DAOs).

    Keys and values are raw bytes. Keys are compared by exact match.

    Methods:
        get(key: bytes, **kwargs) -> bytes:
            Retrieve the value stored under key.
            Raises KeyNotFoundError if the key does not exist.
            Raises PersistenceError on read failure.

        set(key: bytes, value: bytes, **kwargs) -> KeyValueBaseDAO:
            Atomically store value under key.
            Raises PersistenceError on write failure.

        lease(key: bytes, bandwidth: int, **kwargs) -> tuple[int, int]:
            Atomically advance the counter stored under key by bandwidth.
            Raises PersistenceError on read or write failure.

        give_back(key: bytes, expected: int, value: int, **kwargs) -> bool:
            Compare-and-set the counter stored under key.
            Raises PersistenceError on read or write failure.

        close() -> None:
            Release the underlying storage handle.
            Raises PersistenceError on close failure.

    Subclassing:
        Datastore-specific implementations (e.g., KeyValueSqliteDAO or
        KeyValueRedisDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - Records are write-once. The DAO does not provide an interface
          to delete entries.
    """

    @abstractmethod
    def get(self, key: bytes, **kwargs) -> bytes:
        """Retrieve the value stored under key.

        Args:
            key (bytes):
                Exact key to look up.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bytes: The stored value.

        Raises:
            KeyNotFoundError:
                If no value is stored under key.

            PersistenceError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set(self, key: bytes, value: bytes, **kwargs) -> 'KeyValueBaseDAO':
        """Atomically store value under key.

        Args:
            key (bytes):
                Key to write.

            value (bytes):
                Value to write.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            KeyValueBaseDAO: self (for method chaining)

        Raises:
            PersistenceError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def lease(self, key: bytes, bandwidth: int, **kwargs) -> tuple[int, int]:
        """Atomically reserve the next `bandwidth` values of the counter under key.

        A missing counter starts at 0. The durable counter is advanced in a
        single write, so a crash right after the lease never hands out the
        same values twice.

        Args:
            key (bytes):
                Counter key.

            bandwidth (int):
                Number of values to reserve.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            tuple[int, int]: the reserved window as (start, limit), limit exclusive.

        Raises:
            PersistenceError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def give_back(self, key: bytes, expected: int, value: int, **kwargs) -> bool:
        """Set the counter under key to value, only if it still holds expected.

        Args:
            key (bytes):
                Counter key.

            expected (int):
                Value the counter must currently hold (the leased limit).

            value (int):
                New counter value (the first unconsumed value).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the counter was written, False if it moved on in the meantime.

        Raises:
            PersistenceError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying storage handle.

        Raises:
            PersistenceError:
                If there is an error in the data store.
        """
        pass
