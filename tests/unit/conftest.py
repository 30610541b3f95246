from unittest.mock import MagicMock

import pytest
import redis

from linkcore.dao.sqlite import KeyValueSqliteDAO


@pytest.fixture
def dataset_dir(tmp_path):
    """Provide an empty dataset directory for an on-disk datastore."""
    return tmp_path / 'db'


@pytest.fixture
def sqlite_dao(dataset_dir):
    """Provide an open SQLite datastore, closed after the test."""
    dao = KeyValueSqliteDAO(dataset_dir)
    yield dao
    dao.close()


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    client.get.return_value = None
    return client
