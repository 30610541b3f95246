"""Unit tests for the handle_redis_error decorator.

Test coverage includes:
    1. Return values pass through untouched.
    2. Connection errors are re-raised as PersistenceError with connection details.
    3. Other Redis errors are re-raised as PersistenceError.
    4. Non-Redis errors propagate unchanged.
"""

import pytest
import redis

from linkcore.dao.exceptions import PersistenceError
from linkcore.dao.redis.helpers import handle_redis_error


class FakeDAO:
    def __init__(self, error=None):
        self.location = '203.0.113.1:18000/5'
        self.error = error

    @handle_redis_error
    def run(self):
        if self.error is not None:
            raise self.error
        return 'ok'


def test_passes_through_return_value():
    assert FakeDAO().run() == 'ok'


def test_connection_error():
    dao = FakeDAO(redis.exceptions.ConnectionError('Connection error'))

    with pytest.raises(PersistenceError, match="Can't connect to Redis at 203.0.113.1:18000/5.") as exc_info:
        dao.run()
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)


def test_response_error():
    dao = FakeDAO(redis.exceptions.ResponseError('WRONGTYPE Operation against a key holding the wrong kind of value'))

    with pytest.raises(PersistenceError, match='WRONGTYPE'):
        dao.run()


def test_other_errors_propagate():
    dao = FakeDAO(ValueError('not a redis error'))

    with pytest.raises(ValueError):
        dao.run()
