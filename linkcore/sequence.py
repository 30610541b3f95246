"""Monotonic ID sequence backed by a durable counter

IDs are handed out from an in-memory window [next, limit) leased from the
datastore in a single atomic write. Durable writes are therefore bounded to
one per `bandwidth` allocations.

On a clean shutdown release() gives the unconsumed part of the window back.
After an unclean shutdown (crash, failed release) the durable counter still
points past the last leased window, so the unconsumed IDs are burned. That
leaves a gap in the ID space but never hands out the same ID twice.

Classes:
    SequenceAllocator:
        Thread-safe allocator of unique, strictly increasing IDs.

Example:
    >>> from linkcore.dao.sqlite import KeyValueSqliteDAO
    >>> from linkcore.sequence import SequenceAllocator
    >>> allocator = SequenceAllocator(KeyValueSqliteDAO('/tmp/linkcore'), bandwidth=100)
    >>> allocator.next()
    0
    >>> allocator.next()
    1
    >>> allocator.release()
"""

import logging
import threading

from linkcore.dao.base import KeyValueBaseDAO
from linkcore.dao.exceptions import PersistenceError
from linkcore.exceptions import AllocationError
from linkcore.utils.constants import DEFAULT_SEQUENCE_BANDWIDTH, DEFAULT_SEQUENCE_KEY


logger = logging.getLogger(__name__)


class SequenceAllocator:
    """Allocate unique, strictly increasing IDs in leased windows

    Attributes:
        dao (KeyValueBaseDAO):
            Datastore holding the durable counter.
        key (bytes):
            Key of the durable counter.
        bandwidth (int):
            Number of IDs leased per durable write.

    Methods:
        next() -> int:
            Return a fresh ID, leasing a new window when the current one is exhausted.
            Raises AllocationError if the counter can't be advanced or the allocator is released.
        release() -> None:
            Give back the unconsumed part of the window and stop allocating.
            Raises AllocationError if the counter can't be written.
    """

    def __init__(self, dao: KeyValueBaseDAO, key: bytes = DEFAULT_SEQUENCE_KEY, bandwidth: int = DEFAULT_SEQUENCE_BANDWIDTH):
        """Bind the allocator to a counter and lease the first window

        Raises:
            ValueError: If bandwidth is not a positive integer.
            AllocationError: If the first window can't be leased.
        """
        if bandwidth < 1:
            raise ValueError(f'Bandwidth must be a positive integer (given value: {bandwidth}).')

        self.dao = dao
        self.key = key
        self.bandwidth = bandwidth
        self._lock = threading.Lock()
        self._released = False
        self._next = 0
        self._limit = 0

        self._lease()

    @property
    def released(self) -> bool:
        return self._released

    @property
    def window(self) -> tuple[int, int]:
        """Current in-memory window as (next, limit)."""
        return self._next, self._limit

    def _lease(self) -> None:
        # Caller holds the lock (or is the constructor)
        try:
            start, limit = self.dao.lease(self.key, self.bandwidth)
        except PersistenceError as e:
            logger.error('Failed to lease sequence window.', extra={'sequenceKey': self.key.decode('utf-8', 'replace'), 'error': str(e)})
            raise AllocationError(f'Failed to lease a window of {self.bandwidth} IDs.') from e

        self._next, self._limit = start, limit
        logger.debug('Leased sequence window.', extra={'windowStart': start, 'windowLimit': limit})

    def next(self) -> int:
        """Return a fresh unique ID

        Returns:
            int: an ID strictly greater than every ID returned before.

        Raises:
            AllocationError:
                If the allocator has been released, the counter can't be advanced
                or the ID space is exhausted.
        """
        with self._lock:
            if self._released:
                raise AllocationError('Sequence has already been released.')

            if self._next >= self._limit:
                self._lease()
                if self._next >= self._limit:
                    raise AllocationError('Sequence is exhausted.')

            id = self._next
            self._next += 1
            return id

    def release(self) -> None:
        """Give the unconsumed part of the window back to the durable counter

        The counter is only rewritten when it still holds this allocator's
        limit. Releasing twice is a no-op.

        Raises:
            AllocationError:
                If the durable counter can't be read or written. The allocator
                is released anyway and the unconsumed IDs are burned.
        """
        with self._lock:
            if self._released:
                return
            self._released = True

            try:
                returned = self.dao.give_back(self.key, self._limit, self._next)
            except PersistenceError as e:
                logger.error('Failed to release sequence.', extra={'sequenceKey': self.key.decode('utf-8', 'replace'), 'error': str(e)})
                raise AllocationError('Failed to release sequence.') from e

        logger.debug('Released sequence.', extra={'windowStart': self._next, 'windowLimit': self._limit, 'returned': returned})
