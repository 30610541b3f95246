# Shortcode generation
DEFAULT_CODE_MIN_LENGTH = 7
DEFAULT_CODEC_SALT = ''
DEFAULT_ALPHABET = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890'  # hashids default

# ID space (IDs are unsigned 64-bit integers)
MAX_UINT64 = 2**64 - 1
MAX_INT64 = 2**63 - 1
ID_KEY_SIZE = 8  # bytes, little-endian

# ID sequence
DEFAULT_SEQUENCE_KEY = b'seq'
DEFAULT_SEQUENCE_BANDWIDTH = 100

# Embedded (SQLite) datastore
DEFAULT_DATA_DIR = '/data/db'
SQLITE_DATABASE_FILENAME = 'linkcore.sqlite3'

# Supported datastore backends
SQLITE_BACKEND = 'sqlite'
REDIS_BACKEND = 'redis'
BACKENDS = frozenset({SQLITE_BACKEND, REDIS_BACKEND})

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# Shortener core environment variables
BACKEND_ENV = 'LINKCORE_BACKEND'
DATA_DIR_ENV = 'LINKCORE_DATA_DIR'
CODEC_SALT_ENV = 'LINKCORE_CODEC_SALT'  # noqa: S105
CODE_MIN_LENGTH_ENV = 'LINKCORE_CODE_MIN_LENGTH'
SEQUENCE_BANDWIDTH_ENV = 'LINKCORE_SEQUENCE_BANDWIDTH'

# Redis connection environment variables
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'
REDIS_USERNAME_ENV = 'REDIS_USERNAME'
REDIS_PASSWORD_ENV = 'REDIS_PASSWORD'  # noqa: S105
