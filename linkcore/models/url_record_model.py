import struct
from dataclasses import dataclass

from linkcore.utils.constants import ID_KEY_SIZE, MAX_UINT64


_ID_KEY = struct.Struct('<Q')  # unsigned 64-bit, little-endian


def id_to_key(id: int) -> bytes:
    """Encode an ID as a fixed-width 8-byte little-endian key."""
    if not 0 <= id <= MAX_UINT64:
        raise ValueError(f'ID must be within [0, {MAX_UINT64}] (given value: {id}).')
    return _ID_KEY.pack(id)


def key_to_id(key: bytes) -> int:
    """Decode an 8-byte little-endian key back into its ID."""
    if len(key) != ID_KEY_SIZE:
        raise ValueError(f'Key must be exactly {ID_KEY_SIZE} bytes long (given length: {len(key)}).')
    return _ID_KEY.unpack(key)[0]


@dataclass(frozen=True)
class URLRecord:
    """Represent a stored URL mapping.

    Attributes:
        id (int):
            Unique unsigned 64-bit ID allocated from the ID sequence.
        target (str):
            The original long URL that the shortcode resolves to.

    Properties:
        key (bytes):
            8-byte little-endian encoding of `id`, used as datastore key.
        value (bytes):
            UTF-8 encoded `target`, used as datastore value.

    Example:
        >>> record = URLRecord(id=1, target='https://example.com/article/123')
        >>> record.key
        b'\\x01\\x00\\x00\\x00\\x00\\x00\\x00\\x00'
        >>> record.value
        b'https://example.com/article/123'
        >>> URLRecord.from_entry(record.key, record.value) == record
        True
    """

    id: int
    target: str

    @property
    def key(self) -> bytes:
        return id_to_key(self.id)

    @property
    def value(self) -> bytes:
        return self.target.encode('utf-8')

    @classmethod
    def from_entry(cls, key: bytes, value: bytes) -> 'URLRecord':
        return cls(id=key_to_id(key), target=value.decode('utf-8'))
