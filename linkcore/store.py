"""Shortener store: save URLs under short codes and resolve them back

This module composes the ID sequence, the shortcode codec and a key-value
datastore into the two operations of the shortener core.

    save(url):     allocate ID -> encode ID -> write (ID, url) -> return code
    resolve(code): decode code -> read ID -> return url

Lifecycle:
    UNINITIALIZED -> OPEN -> CLOSED (terminal)

Classes:
    StoreState:
        Lifecycle states of a ShortenerStore.
    ShortenerStore:
        Owner of the datastore handle, the allocator and the codec.

Example:
    >>> from linkcore.store import ShortenerStore
    >>> with ShortenerStore.open('/var/lib/linkcore') as store:
    ...     code = store.save('https://example.com/blog/article-123')
    ...     store.resolve(code)
    'https://example.com/blog/article-123'
"""

import logging
from enum import StrEnum
from pathlib import Path
from collections.abc import Callable

from linkcore.models import URLRecord, id_to_key
from linkcore.sequence import SequenceAllocator
from linkcore.utils.codec import CodeCodec
from linkcore.dao.base import KeyValueBaseDAO
from linkcore.dao.sqlite import KeyValueSqliteDAO
from linkcore.dao.redis import KeyValueRedisDAO
from linkcore.dao.exceptions import KeyNotFoundError
from linkcore.exceptions import AllocationError, NotFoundError, StoreClosedError, StoreOpenError
from linkcore.utils.constants import (
    DEFAULT_CODE_MIN_LENGTH,
    DEFAULT_CODEC_SALT,
    DEFAULT_SEQUENCE_BANDWIDTH,
    DEFAULT_SEQUENCE_KEY,
    REDIS_BACKEND,
)


logger = logging.getLogger(__name__)


class StoreState(StrEnum):
    UNINITIALIZED = 'uninitialized'
    OPEN = 'open'
    CLOSED = 'closed'


class ShortenerStore:
    """Save URLs under short codes and resolve them back

    A single instance owns the datastore handle and the allocator for the
    lifetime of the process. save() and resolve() may be called concurrently
    from many threads; close() must only be called once they have completed.

    Attributes:
        dao (KeyValueBaseDAO):
            Datastore holding URL records and the sequence counter.
        allocator (SequenceAllocator):
            Source of unique IDs.
        codec (CodeCodec):
            ID <-> shortcode mapping.

    Methods:
        open(path, **kwargs) -> ShortenerStore:
            Open a store on an on-disk dataset. Raises StoreOpenError.
        from_config(config) -> ShortenerStore:
            Open a store from the dictionary returned by load_config().
        save(url: str, **kwargs) -> str:
            Store url and return its shortcode.
        resolve(code: str, **kwargs) -> str:
            Return the url stored under code.
        close() -> None:
            Release the allocator, then close the datastore.
    """

    def __init__(self, dao: KeyValueBaseDAO | None = None, allocator: SequenceAllocator | None = None, codec: CodeCodec | None = None):
        """Wrap already acquired components

        A store built without all three components stays UNINITIALIZED and
        rejects every operation. Use open() or from_config() to acquire them.
        """
        self.dao = dao
        self.allocator = allocator
        self.codec = codec
        if dao is not None and allocator is not None and codec is not None:
            self._state = StoreState.OPEN
        else:
            self._state = StoreState.UNINITIALIZED

    @property
    def state(self) -> StoreState:
        return self._state

    def __enter__(self) -> 'ShortenerStore':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    # -------------------------------
    # Lifecycle
    # -------------------------------

    @classmethod
    def open(
        cls,
        path: str | Path,
        *,
        salt: str = DEFAULT_CODEC_SALT,
        min_length: int = DEFAULT_CODE_MIN_LENGTH,
        bandwidth: int = DEFAULT_SEQUENCE_BANDWIDTH,
        sequence_key: bytes = DEFAULT_SEQUENCE_KEY,
        dao_factory: Callable[[str | Path], KeyValueBaseDAO] = KeyValueSqliteDAO,
        allocator_factory: Callable[..., SequenceAllocator] = SequenceAllocator,
        codec_factory: Callable[..., CodeCodec] = CodeCodec,
    ) -> 'ShortenerStore':
        """Open the datastore, bind an allocator to it and build the codec

        If any step fails, whatever was already acquired is released
        (best effort) before StoreOpenError is raised. Cleanup failures are
        logged and never replace the original error.

        Args:
            path (str | Path):
                Dataset location handed to dao_factory.
            salt (str), min_length (int):
                Codec parameters. Must match between the processes sharing a dataset.
            bandwidth (int):
                Number of IDs leased per durable counter write.
            sequence_key (bytes):
                Key of the durable counter.
            dao_factory, allocator_factory, codec_factory:
                Constructors of the three components (injection points for
                alternative backends and tests).

        Returns:
            ShortenerStore: an OPEN store.

        Raises:
            StoreOpenError:
                Chained to the error of the step that failed.
        """
        logger.info('Opening shortener store.', extra={'path': str(path)})

        try:
            dao = dao_factory(path)
        except Exception as e:
            logger.error('Failed to open datastore.', extra={'path': str(path), 'error': str(e)})
            raise StoreOpenError(f"Can't open datastore at {path}.") from e

        try:
            allocator = allocator_factory(dao, key=sequence_key, bandwidth=bandwidth)
        except Exception as e:
            logger.error('Failed to acquire ID sequence.', extra={'path': str(path), 'error': str(e)})
            cls._cleanup(dao=dao)
            raise StoreOpenError(f"Can't acquire ID sequence at {path}.") from e

        try:
            codec = codec_factory(salt=salt, min_length=min_length)
        except Exception as e:
            logger.error('Failed to build shortcode codec.', extra={'error': str(e)})
            cls._cleanup(dao=dao, allocator=allocator)
            raise StoreOpenError("Can't build shortcode codec.") from e

        logger.info('Opened shortener store.', extra={'path': str(path)})
        return cls(dao=dao, allocator=allocator, codec=codec)

    @classmethod
    def from_config(cls, config: dict, **kwargs) -> 'ShortenerStore':
        """Open a store from the dictionary returned by load_config()

        Example:
            >>> from linkcore.utils import load_config
            >>> store = ShortenerStore.from_config(load_config())
        """
        backend = config['backend']
        options = {
            'salt': config['codec']['salt'],
            'min_length': config['codec']['min_length'],
            'bandwidth': config['sequence']['bandwidth'],
        }
        options.update(kwargs)

        if backend == REDIS_BACKEND:
            redis_config = {f'redis_{k}': v for k, v in config['redis'].items() if k != 'prefix'}
            prefix = config['redis'].get('prefix')
            options.setdefault('dao_factory', lambda _: KeyValueRedisDAO(**redis_config, prefix=prefix))
            location = f"redis://{config['redis']['host']}:{config['redis']['port']}/{config['redis']['db']}"
            return cls.open(location, **options)

        return cls.open(config['sqlite']['path'], **options)

    @staticmethod
    def _cleanup(dao: KeyValueBaseDAO, allocator: SequenceAllocator | None = None) -> None:
        # Best effort: every step is attempted, failures are only logged
        if allocator is not None:
            try:
                allocator.release()
            except Exception as e:
                logger.warning('Failed to release ID sequence during cleanup.', extra={'error': str(e)})
        try:
            dao.close()
        except Exception as e:
            logger.warning('Failed to close datastore during cleanup.', extra={'error': str(e)})

    def close(self) -> None:
        """Release the allocator, then close the datastore

        Both steps are attempted even if the first one fails. Closing an
        already closed store is a no-op.

        Raises:
            AllocationError:
                If the allocator couldn't be released (takes precedence).
                Any other release failure is re-raised the same way.
            PersistenceError:
                If the datastore couldn't be closed.
        """
        if self._state is StoreState.CLOSED:
            logger.debug('Shortener store already closed.')
            return
        if self._state is StoreState.UNINITIALIZED:
            self._state = StoreState.CLOSED
            return

        logger.info('Closing shortener store.')
        self._state = StoreState.CLOSED

        release_error = None
        try:
            self.allocator.release()
        except Exception as e:
            logger.error('Failed to release ID sequence; closing datastore anyway.', extra={'error': str(e)})
            release_error = e

        try:
            self.dao.close()
        except Exception as e:
            logger.error('Failed to close datastore.', extra={'error': str(e)})
            if release_error is None:
                raise

        if release_error is not None:
            raise release_error

        logger.info('Shortener store closed.')

    def _ensure_open(self) -> None:
        if self._state is not StoreState.OPEN:
            raise StoreClosedError(f'Shortener store is {self._state}.')

    # -------------------------------
    # Operations
    # -------------------------------

    def save(self, url: str, **kwargs) -> str:
        """Store url and return its shortcode

        ID allocation and the record write are not transactional with each
        other: if the write fails, the allocated ID is burned.

        Args:
            url (str):
                Non-empty URL to store. Stored as is (UTF-8 bytes).
            **kwargs:
                request_id: optional request identifier attached to log records.

        Returns:
            str: shortcode resolving to url.

        Raises:
            TypeError: If url is not a string.
            ValueError: If url is empty or can't be encoded as UTF-8.
            StoreClosedError: If the store isn't open.
            AllocationError: If no ID could be allocated.
            PersistenceError: If the record couldn't be written.
        """
        self._ensure_open()
        if not isinstance(url, str):
            raise TypeError(f'URL must be of type string (given type: {type(url)}).')
        if not url:
            raise ValueError('URL must be a non-empty string.')
        # Checked before allocation so a rejected URL never burns an ID
        try:
            url.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ValueError('URL must be encodable as UTF-8.') from e

        extra = {'requestId': kwargs.get('request_id')}

        try:
            id = self.allocator.next()
        except AllocationError as e:
            logger.error('Failed to allocate ID for URL.', extra={**extra, 'error': str(e)})
            raise

        code = self.codec.encode(id)
        record = URLRecord(id=id, target=url)
        try:
            self.dao.set(record.key, record.value)
        except Exception as e:
            logger.error('Failed to store URL record.', extra={**extra, 'id': id, 'error': str(e)})
            raise

        logger.debug('Saved URL.', extra={**extra, 'id': id, 'shortcode': code})
        return code

    def resolve(self, code: str, **kwargs) -> str:
        """Return the URL stored under code

        Args:
            code (str):
                Shortcode returned by save().
            **kwargs:
                request_id: optional request identifier attached to log records.

        Returns:
            str: the stored URL, byte-for-byte.

        Raises:
            StoreClosedError: If the store isn't open.
            InvalidCodeError: If code can't be decoded with the codec parameters.
            NotFoundError: If code is valid but nothing is stored under its ID.
            PersistenceError: If the record couldn't be read.
        """
        self._ensure_open()
        extra = {'requestId': kwargs.get('request_id')}

        id = self.codec.decode(code)
        key = id_to_key(id)
        try:
            value = self.dao.get(key)
        except KeyNotFoundError as e:
            raise NotFoundError(f"Short URL with code '{code}' not found.") from e
        except Exception as e:
            logger.error('Failed to retrieve URL record.', extra={**extra, 'id': id, 'error': str(e)})
            raise

        return URLRecord.from_entry(key, value).target
