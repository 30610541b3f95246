"""Utility functions for application configuration management.

Configuration is read from environment variables (names live in
`linkcore.utils.constants`). `load_config()` assembles them into a single
dictionary consumed by `ShortenerStore.from_config()`:

    {
        "backend": "sqlite",
        "sqlite": {"path": "/data/db"},
        "redis": {"host": "localhost", "port": 6379, "db": 0, "username": None, "password": None, "prefix": "linkcore:local"},
        "codec": {"salt": "", "min_length": 7},
        "sequence": {"bandwidth": 100}
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config() -> dict
        Load the shortener core configuration from the environment.

Example:
    >>> from linkcore.utils.config import load_config
    >>> os.environ['LINKCORE_BACKEND'] = 'sqlite'
    >>> os.environ['LINKCORE_DATA_DIR'] = '/var/lib/linkcore'
    >>> load_config()['sqlite']['path']
    '/var/lib/linkcore'
"""

import os
import logging

from linkcore.exceptions import BadConfigurationError
from linkcore.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    BACKEND_ENV,
    BACKENDS,
    CODE_MIN_LENGTH_ENV,
    CODEC_SALT_ENV,
    DATA_DIR_ENV,
    DEFAULT_CODE_MIN_LENGTH,
    DEFAULT_CODEC_SALT,
    DEFAULT_DATA_DIR,
    DEFAULT_SEQUENCE_BANDWIDTH,
    REDIS_DB_ENV,
    REDIS_HOST_ENV,
    REDIS_PASSWORD_ENV,
    REDIS_PORT_ENV,
    REDIS_USERNAME_ENV,
    SEQUENCE_BANDWIDTH_ENV,
    SQLITE_BACKEND,
)


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkcore'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkcore:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"Environment variable '{name}' must be an integer (given value: {raw!r}).") from e
    if value < minimum:
        raise BadConfigurationError(f"Environment variable '{name}' must be at least {minimum} (given value: {value}).")
    return value


def load_config() -> dict:
    """Load the shortener core configuration from environment variables

    Returns:
        dict: configuration with 'backend', 'sqlite', 'redis', 'codec' and 'sequence' sections.

    Raises:
        BadConfigurationError:
            If the backend is unknown or a numeric variable is malformed.

    Example:
        >>> config = load_config()
        >>> config['backend']
        'sqlite'
        >>> config['codec']
        {'salt': '', 'min_length': 7}
    """
    backend = os.environ.get(BACKEND_ENV, SQLITE_BACKEND).lower()
    if backend not in BACKENDS:
        raise BadConfigurationError(f"Unknown backend '{backend}' (expected one of: {', '.join(sorted(BACKENDS))}).")

    config = {
        'backend': backend,
        'sqlite': {
            'path': os.environ.get(DATA_DIR_ENV, DEFAULT_DATA_DIR),
        },
        'redis': {
            'host': os.environ.get(REDIS_HOST_ENV, 'localhost'),
            'port': _int_env(REDIS_PORT_ENV, 6379, minimum=1),
            'db': _int_env(REDIS_DB_ENV, 0),
            'username': os.environ.get(REDIS_USERNAME_ENV) or None,
            'password': os.environ.get(REDIS_PASSWORD_ENV) or None,
            'prefix': app_prefix(),
        },
        'codec': {
            'salt': os.environ.get(CODEC_SALT_ENV, DEFAULT_CODEC_SALT),
            'min_length': _int_env(CODE_MIN_LENGTH_ENV, DEFAULT_CODE_MIN_LENGTH),
        },
        'sequence': {
            'bandwidth': _int_env(SEQUENCE_BANDWIDTH_ENV, DEFAULT_SEQUENCE_BANDWIDTH, minimum=1),
        },
    }
    logger.debug('Loaded configuration from environment.', extra={'backend': backend, 'appEnv': app_env()})
    return config
