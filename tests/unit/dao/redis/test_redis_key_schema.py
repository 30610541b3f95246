"""Unit tests for RedisKeySchema.

Test coverage includes:
    1. Prefix validation
    2. Namespaced raw-bytes keys for entries and counters
"""

import pytest

from linkcore.dao.redis import RedisKeySchema


KEY = b'\xff\x00\x00\x00\x00\x00\x00\x00'


@pytest.mark.parametrize('prefix', [1, b'testapp', ['testapp']])
def test_invalid_prefix_type(prefix):
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)


def test_entry_key_with_prefix():
    keys = RedisKeySchema(prefix='testapp:test')
    assert keys.entry_key(KEY) == b'testapp:test:kv:' + KEY


def test_entry_key_without_prefix():
    keys = RedisKeySchema()
    assert keys.entry_key(KEY) == b'kv:' + KEY


def test_counter_key_with_prefix():
    keys = RedisKeySchema(prefix='testapp:test')
    assert keys.counter_key(b'seq') == b'testapp:test:counters:seq'


def test_counter_key_without_prefix():
    keys = RedisKeySchema()
    assert keys.counter_key(b'seq') == b'counters:seq'


def test_entry_and_counter_keys_never_collide():
    keys = RedisKeySchema(prefix='testapp:test')
    assert keys.entry_key(b'seq') != keys.counter_key(b'seq')
