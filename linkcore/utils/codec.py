"""Shortcode encoding utility

This module provides a reversible mapping between unsigned 64-bit IDs and
short, salted, printable codes built on the hashids algorithm.

hashids only encodes non-negative integers and most of its implementations
work on signed 64-bit values, so an ID above the signed range is split into
an ordered list of parts which sum back to the original value:

    ID                          parts
    0 .. 2^63-1                 [ID]
    2^63 .. 2^64-2              [2^63-1, ID - (2^63-1)]
    2^64-1                      [2^63-1, 2^63-1, 1]

Every part stays within the signed 64-bit range and the sum never exceeds
2^64-1, which keeps the codes compatible with any hashids port.

Classes:
    CodeCodec(salt='', min_length=7, alphabet=DEFAULT_ALPHABET):
        Encode IDs into shortcodes and decode them back.

Functions:
    split_uint64(u) -> list[int]:
        Decompose an unsigned 64-bit integer into signed 64-bit parts.
    join_int64_parts(parts) -> int:
        Sum parts produced by split_uint64() back into the original integer.

Example:
    >>> from linkcore.utils.codec import CodeCodec
    >>> codec = CodeCodec(salt='my_secret')
    >>> code = codec.encode(12345)
    >>> len(code) >= 7
    True
    >>> codec.decode(code)
    12345
"""

from hashids import Hashids

from linkcore.exceptions import InvalidCodeError
from linkcore.utils.constants import DEFAULT_ALPHABET, DEFAULT_CODE_MIN_LENGTH, DEFAULT_CODEC_SALT, MAX_INT64, MAX_UINT64


def split_uint64(u: int) -> list[int]:
    """Decompose an unsigned 64-bit integer into non-negative signed 64-bit parts

    Args:
        u (int):
            Integer in the range [0, 2^64-1].

    Returns:
        list[int]: 1 to 3 parts, each in [0, 2^63-1], summing up to `u`.

    Raises:
        ValueError: If `u` is outside of the unsigned 64-bit range.

    Example:
        >>> split_uint64(2**64 - 1)
        [9223372036854775807, 9223372036854775807, 1]
    """
    if u < 0 or u > MAX_UINT64:
        raise ValueError(f'Value must be within [0, {MAX_UINT64}] (given value: {u}).')

    if u == MAX_UINT64:
        return [MAX_INT64, MAX_INT64, 1]
    if u > MAX_INT64:
        return [MAX_INT64, u - MAX_INT64]
    return [u]


def join_int64_parts(parts: list[int] | tuple[int, ...]) -> int:
    """Sum parts produced by split_uint64() back into an unsigned 64-bit integer

    Raises:
        ValueError: If parts are empty, out of the signed 64-bit range or overflow 2^64-1.
    """
    if not parts:
        raise ValueError('At least one part is required.')

    total = 0
    for part in parts:
        if part < 0 or part > MAX_INT64:
            raise ValueError(f'Part must be within [0, {MAX_INT64}] (given value: {part}).')
        total += part
        if total > MAX_UINT64:
            raise ValueError(f'Sum of parts overflows {MAX_UINT64}.')
    return total


class CodeCodec:
    """Bidirectional mapping between IDs and shortcodes

    The mapping is deterministic and salted: the same salt, minimum length and
    alphabet must be used on both ends. Codes are obfuscated, not encrypted.

    Attributes:
        salt (str):
            Salt shuffling the alphabet. Defaults to '' (hashids default).
        min_length (int):
            Minimum length of produced codes. Defaults to 7.
        alphabet (str):
            Characters codes are built from. Defaults to the hashids alphabet.

    Methods:
        encode(id: int) -> str:
            Encode an ID from [0, 2^64-1] into a shortcode. Never fails for valid IDs.
        decode(code: str) -> int:
            Decode a shortcode back into its ID.
            Raises InvalidCodeError for anything not produced by this codec.
    """

    def __init__(self, salt: str = DEFAULT_CODEC_SALT, min_length: int = DEFAULT_CODE_MIN_LENGTH, alphabet: str = DEFAULT_ALPHABET):
        if not isinstance(salt, str):
            raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
        if not isinstance(min_length, int) or isinstance(min_length, bool):
            raise TypeError(f'Minimum length must be of type integer (given type: {type(min_length)}).')
        if min_length < 0:
            raise ValueError(f'Minimum length must be a non-negative integer (given value: {min_length}).')

        self.salt = salt
        self.min_length = min_length
        self.alphabet = alphabet
        # hashids raises ValueError for alphabets that are too short or contain spaces
        self._hashids = Hashids(salt=salt, min_length=min_length, alphabet=alphabet)

    def encode(self, id: int) -> str:
        """Encode an ID into a shortcode

        Args:
            id (int):
                Unsigned 64-bit integer ID.

        Returns:
            str: shortcode of at least `min_length` characters.

        Raises:
            TypeError: If `id` is not an integer.
            ValueError: If `id` is outside of [0, 2^64-1].

        Example:
            >>> codec = CodeCodec()
            >>> codec.decode(codec.encode(0))
            0
        """
        if not isinstance(id, int) or isinstance(id, bool):
            raise TypeError(f'ID must be of type integer (given type: {type(id)}).')

        return self._hashids.encode(*split_uint64(id))

    def decode(self, code: str) -> int:
        """Decode a shortcode back into its ID

        hashids re-encodes the decoded numbers and compares them with the input,
        so codes with a foreign salt, a different minimum length or corrupted
        characters decode to nothing. On top of that the parts must be exactly
        the decomposition encode() produces for their sum.

        Args:
            code (str):
                Shortcode previously produced by encode().

        Returns:
            int: the decoded ID.

        Raises:
            InvalidCodeError: If the code can't be decoded with this codec's parameters.
        """
        if not isinstance(code, str) or not code:
            raise InvalidCodeError(f'Shortcode must be a non-empty string (given value: {code!r}).')

        parts = self._hashids.decode(code)
        if not parts:
            raise InvalidCodeError(f"Shortcode '{code}' is invalid.")

        try:
            id = join_int64_parts(parts)
        except ValueError as e:
            raise InvalidCodeError(f"Shortcode '{code}' is invalid.") from e

        if list(parts) != split_uint64(id):
            raise InvalidCodeError(f"Shortcode '{code}' is invalid.")
        return id
