"""Unit tests for the URLRecord dataclass and key helpers in url_record_model.py.

Test coverage includes:

1. Key encoding
   - IDs are encoded as fixed-width 8-byte little-endian keys and back.
   - Out-of-range IDs and malformed keys are rejected.

2. Record creation and datastore entry conversion
   - key/value properties match the datastore layout.
   - from_entry() restores the record byte-for-byte.

3. Immutability and equality
"""

from dataclasses import FrozenInstanceError

import pytest

from linkcore.models import URLRecord, id_to_key, key_to_id
from linkcore.utils.constants import MAX_UINT64


# -------------------------------
# 1. Key encoding
# -------------------------------


@pytest.mark.parametrize(
    'id, key',
    [
        (0, b'\x00\x00\x00\x00\x00\x00\x00\x00'),
        (1, b'\x01\x00\x00\x00\x00\x00\x00\x00'),
        (256, b'\x00\x01\x00\x00\x00\x00\x00\x00'),
        (MAX_UINT64, b'\xff\xff\xff\xff\xff\xff\xff\xff'),
    ],
)
def test_id_to_key_is_little_endian(id, key):
    assert id_to_key(id) == key
    assert key_to_id(key) == id


@pytest.mark.parametrize('id', [-1, MAX_UINT64 + 1])
def test_id_to_key_out_of_range(id):
    with pytest.raises(ValueError):
        id_to_key(id)


@pytest.mark.parametrize('key', [b'', b'\x00' * 7, b'\x00' * 9, b'seq'])
def test_key_to_id_wrong_size(key):
    with pytest.raises(ValueError):
        key_to_id(key)


# -------------------------------
# 2. Record creation and entry conversion
# -------------------------------


def test_record_entry():
    """Ensure records map to the 8-byte ID key and the UTF-8 URL value."""
    record = URLRecord(id=42, target='https://example.com/article/123')

    assert record.key == b'\x2a\x00\x00\x00\x00\x00\x00\x00'
    assert len(record.key) == 8
    assert record.value == b'https://example.com/article/123'


@pytest.mark.parametrize(
    'target',
    [
        'https://example.com/article/123',
        'https://example.com/search?q=caf%C3%A9&lang=fr#top',
        'https://例え.jp/パス?クエリ=値',
        'x' * 10_000,
    ],
)
def test_record_from_entry_round_trip(target):
    record = URLRecord(id=7, target=target)
    restored = URLRecord.from_entry(record.key, record.value)

    assert restored == record
    assert restored.target == target


# -------------------------------
# 3. Immutability and equality
# -------------------------------


def test_record_is_frozen():
    record = URLRecord(id=1, target='https://example.com')
    with pytest.raises(FrozenInstanceError):
        record.target = 'https://changed.example.com'


def test_record_equality():
    assert URLRecord(id=1, target='https://example.com') == URLRecord(id=1, target='https://example.com')
    assert URLRecord(id=1, target='https://example.com') != URLRecord(id=2, target='https://example.com')
