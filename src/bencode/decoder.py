"""
Bencode decoder for KRPC datagrams and other untrusted BitTorrent data.

Only canonical bencode is accepted: integers and string lengths without
leading zeros, dictionary keys strictly increasing in byte order.
"""
import logging
from typing import Tuple

from .structure import INT_MAX, INT_MIN, BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

logger = logging.getLogger(__name__)

# Maximum number of nested lists/dicts accepted before giving up
MAX_DEPTH = 64

_DIGITS = b"0123456789"
_INT_DIGITS = len(str(2 ** 63))  # 19


class BencodeDecodeError(Exception):
    """Custom exception for Bencode decoding errors."""
    def __init__(self, message: str, position: int = None):
        if position is not None:
            message = f"{message} (at index {position})"
        super().__init__(message)
        self.position = position


class MalformedInteger(BencodeDecodeError):
    pass


class MalformedLength(BencodeDecodeError):
    pass


class InvalidToken(BencodeDecodeError):
    pass


class TruncatedInput(BencodeDecodeError):
    pass


class UnterminatedContainer(BencodeDecodeError):
    pass


class KeysNotSorted(BencodeDecodeError):
    pass


class DuplicateKey(BencodeDecodeError):
    pass


class TrailingData(BencodeDecodeError):
    pass


class DepthExceeded(BencodeDecodeError):
    pass


class BencodeDecoder:
    """
    Decodes Bencoded byte strings into Bencode value trees.
    """
    def __init__(self, data: bytes, max_depth: int = MAX_DEPTH):
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data to decode must be bytes")
        self.data = bytes(data)
        self.i = 0  # cursor index
        self.max_depth = max_depth

    def decode(self, exact: bool = True) -> BencodeType:
        """
        Main decode entry point. Decodes one value starting at the cursor.

        With exact=True the value must span the rest of the buffer.
        """
        if not self.data:
            raise TruncatedInput("Empty input", 0)
        result = self._parse_value(0)
        if exact and self.i != len(self.data):
            raise TrailingData(f"{len(self.data) - self.i} trailing bytes after value", self.i)
        return result

    # --------------------------
    # Low-level utilities
    # --------------------------

    def _peek(self):
        if self.i >= len(self.data):
            return b""
        return self.data[self.i:self.i+1]

    def _consume(self, n=1):
        """Moves cursor forward by n bytes and returns the consumed chunk."""
        chunk = self.data[self.i:self.i+n]
        self.i += n
        return chunk

    def _read_digits(self, start: int, end: int, error, max_digits: int, overflow=None) -> int:
        """
        Parses data[start:end] as a canonical non-negative decimal of at most
        max_digits digits. Longer runs raise `overflow` (default: `error`).
        """
        digits = self.data[start:end]
        if not digits or any(c not in _DIGITS for c in digits):
            raise error(f"Invalid digits {digits[:20]!r}", start)
        if len(digits) > 1 and digits[0:1] == b"0":
            raise error(f"Leading zero in {digits[:20]!r}", start)
        if len(digits) > max_digits:
            raise (overflow or error)(f"{len(digits)}-digit number is too large", start)

        try:
            return int(digits)
        except ValueError as exc:
            raise error(f"Invalid digits {digits[:20]!r}", start) from exc

    # --------------------------
    # Parsing functions
    # --------------------------

    def _parse_value(self, depth: int):
        ch = self._peek()

        if ch == b"":
            raise TruncatedInput("Unexpected end of input", self.i)

        if ch == b'i':
            return self._parse_int()

        if ch.isdigit(): # Bencode strings start with length, which is a digit
            return self._parse_string()

        if ch == b'l':
            return self._parse_list(depth + 1)

        if ch == b'd':
            return self._parse_dict(depth + 1)

        raise InvalidToken(f"Invalid token {ch!r}", self.i)

    def _parse_int(self):
        """Parses an integer from the Bencoded data."""
        start = self.i
        self._consume(1)  # skip 'i'

        end_pos = self.data.find(b'e', self.i)
        if end_pos == -1:
            raise MalformedInteger("Integer missing terminating 'e'", start)

        negative = self._peek() == b'-'
        digits_start = self.i + 1 if negative else self.i
        num = self._read_digits(digits_start, end_pos, MalformedInteger, _INT_DIGITS)
        if negative:
            if num == 0:
                raise MalformedInteger("Negative zero is not allowed", start)
            num = -num
        if not INT_MIN <= num <= INT_MAX:
            raise MalformedInteger("Integer out of 64-bit range", start)

        self.i = end_pos + 1  # skip 'e'
        return BencodeInt(num)

    def _parse_string(self):
        """Parses a byte string from the Bencoded data."""
        start = self.i
        # read length until ':'
        colon = self.data.find(b':', self.i)
        if colon == -1:
            raise MalformedLength("String length missing ':'", start)
        # a length with more digits than the buffer size cannot fit
        length = self._read_digits(self.i, colon, MalformedLength, len(str(len(self.data))), TruncatedInput)

        self.i = colon + 1
        if length > len(self.data) - self.i:
            raise TruncatedInput(
                f"String declares {length} bytes, only {len(self.data) - self.i} remain", start)
        string_bytes = self._consume(length)

        return BencodeString(string_bytes)

    def _parse_list(self, depth: int):
        """Parses a list from the Bencoded data."""
        start = self.i
        if depth > self.max_depth:
            raise DepthExceeded(f"Nesting deeper than {self.max_depth}", start)
        self._consume(1)  # skip 'l'
        items = []

        while self._peek() != b'e':
            if self._peek() == b"":
                raise UnterminatedContainer("List missing terminating 'e'", start)
            items.append(self._parse_value(depth))

        self._consume(1)  # skip 'e'
        return BencodeList(items)

    def _parse_dict(self, depth: int):
        """Parses a dictionary from the Bencoded data."""
        start = self.i
        if depth > self.max_depth:
            raise DepthExceeded(f"Nesting deeper than {self.max_depth}", start)
        self._consume(1)  # skip 'd'
        obj = {}
        last_key = None

        while self._peek() != b'e':
            if self._peek() == b"":
                raise UnterminatedContainer("Dictionary missing terminating 'e'", start)

            # keys MUST be strings
            key_pos = self.i
            if not self._peek().isdigit():
                raise InvalidToken("Dictionary key must be a byte string", key_pos)
            key = self._parse_string().value
            if last_key is not None:
                if key == last_key:
                    raise DuplicateKey(f"Duplicate key {key!r}", key_pos)
                if key < last_key:
                    raise KeysNotSorted(f"Key {key!r} follows {last_key!r}", key_pos)
            last_key = key

            if self._peek() in (b"", b"e"):
                raise UnterminatedContainer(f"Key {key!r} has no value", key_pos)
            obj[key] = self._parse_value(depth)

        self._consume(1)  # skip 'e'
        return BencodeDict(obj)


def decode(data: bytes, exact: bool = True, max_depth: int = MAX_DEPTH) -> BencodeType:
    """
    Convenience function to decode Bencoded data.
    """
    try:
        return BencodeDecoder(data, max_depth).decode(exact)
    except BencodeDecodeError as exc:
        logger.debug("[Bencode] rejected %d-byte input: %s", len(data), exc)
        raise


def decode_prefix(data: bytes, max_depth: int = MAX_DEPTH) -> Tuple[BencodeType, int]:
    """Decodes the first value in data and returns it with the number of bytes consumed."""
    decoder = BencodeDecoder(data, max_depth)
    value = decoder.decode(exact=False)
    return value, decoder.i
