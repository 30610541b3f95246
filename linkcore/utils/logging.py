"""JSON logging for linkcore processes

Every record is emitted on stdout as one JSON object. Fields passed through
`extra={...}` (camelCase, e.g. `requestId`, `windowStart`) are merged into it,
and a traceback is attached under `exception` when the record carries one:

    {"timestamp": "2025-12-26T12:00:00.000Z", "level": "ERROR", "logger": "linkcore.store",
     "message": "Failed to store URL record.", "requestId": "req-123", "id": 42,
     "error": "...", "exception": "Traceback ..."}

Library code only calls `logging.getLogger(__name__)`. The embedding process
calls `initialize_logging()` once at startup.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from linkcore.utils.constants import LOG_LEVEL_ENV


# Attributes every LogRecord has; anything else came in through `extra`
_RECORD_ATTRS = frozenset(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None).__dict__) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord and its extras as a single JSON line"""

    @staticmethod
    def _timestamp(record: logging.LogRecord) -> str:
        # ISO 8601 in UTC with millisecond precision and a 'Z' suffix
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return created.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        log = {
            'timestamp': self._timestamp(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in record.__dict__.items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # bytes keys and other non-JSON values are logged by their repr
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging through JsonFormatter on stdout

    Args:
        level (str | None):
            Root log level. Defaults to `LOG_LEVEL`, then 'INFO'.
    """
    level = (level or os.getenv(LOG_LEVEL_ENV, 'INFO')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {'level': level, 'handlers': ['stdout']},
        }
    )
