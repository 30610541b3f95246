"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    PersistenceError:
        Raised when there is an error in the data store (e.g. I/O failure on
        open, read, write or close; connection issues; locked database).

    KeyNotFoundError:
        Raised when a point lookup finds no value for the requested key.

Example:
    >>> from linkcore.dao.exceptions import KeyNotFoundError
    >>> raise KeyNotFoundError("Key b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00' not found.")
    Traceback (most recent call last):
        ...
    linkcore.dao.exceptions.KeyNotFoundError: Key b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class PersistenceError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. I/O failures, connection issues, timeouts, locked databases, etc.
    """

    error_code = 'dao:persistence_error'


class KeyNotFoundError(DAOError):
    """Exception raised when a key is not found in the data store."""

    error_code = 'dao:key_not_found_error'
