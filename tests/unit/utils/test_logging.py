"""Unit tests for logging initialization and the JSON formatter in logging.py"""

import json
import logging
import sys

from freezegun import freeze_time

from linkcore.utils.logging import JsonFormatter, initialize_logging


def _record(msg='Saved URL.', level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord('linkcore.store', level, __file__, 1, msg, None, exc_info)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@freeze_time('2025-12-26T12:00:00Z')
def test_format_standard_fields():
    log = json.loads(JsonFormatter().format(_record()))

    assert log == {
        'timestamp': '2025-12-26T12:00:00.000Z',
        'level': 'INFO',
        'logger': 'linkcore.store',
        'message': 'Saved URL.',
    }


def test_format_includes_extra_fields():
    log = json.loads(JsonFormatter().format(_record(requestId='req-123', id=42)))

    assert log['requestId'] == 'req-123'
    assert log['id'] == 42


def test_format_serializes_unknown_types():
    log = json.loads(JsonFormatter().format(_record(key=b'\x01\x00')))
    assert log['key'] == "b'\\x01\\x00'"


def test_format_includes_exception():
    try:
        raise ValueError('boom')
    except ValueError:
        record = _record(level=logging.ERROR, exc_info=sys.exc_info())

    log = json.loads(JsonFormatter().format(record))

    assert log['level'] == 'ERROR'
    assert 'ValueError: boom' in log['exception']


def test_initialize_logging(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    try:
        initialize_logging()
        assert root.level == logging.DEBUG
        assert any(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_initialize_logging_with_explicit_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level

    try:
        initialize_logging('warning')
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
