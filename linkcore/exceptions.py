"""Application-level exceptions raised by the shortener core.

Every exception carries an `error_code` so that the (external) HTTP layer can
map failures to responses without matching on class names:

    InvalidCodeError, NotFoundError  -> not found
    AllocationError, PersistenceError -> internal error

Storage-level exceptions (PersistenceError, KeyNotFoundError) live in
`linkcore.dao.exceptions`.
"""


class LinkCoreError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkcore_error'


class AllocationError(LinkCoreError):
    """Raised when the durable ID sequence cannot be read, advanced or released."""

    error_code = 'sequence:allocation_error'


class InvalidCodeError(LinkCoreError):
    """Raised when a shortcode can't be decoded with the current codec parameters."""

    error_code = 'codec:invalid_code_error'


class NotFoundError(LinkCoreError):
    """Raised when a shortcode is valid but no URL is stored under its ID."""

    error_code = 'store:not_found_error'


class StoreOpenError(LinkCoreError):
    """Raised when the shortener store can't be opened."""

    error_code = 'store:open_error'


class StoreClosedError(LinkCoreError):
    """Raised when an operation is attempted on a store that isn't open."""

    error_code = 'store:closed_error'


class ConfigurationError(LinkCoreError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
