"""
Data structures for representing Bencoded types.
"""
from types import MappingProxyType

__all__ = [
    "BencodeType",
    "BencodeInt",
    "BencodeString",
    "BencodeList",
    "BencodeDict",
    "to_python",
]

INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


class BencodeType:
    """Base class for all Bencode data types."""

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    __hash__ = None


class BencodeInt(BencodeType):
    """Represents a Bencoded integer (signed 64-bit)."""
    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("BencodeInt requires an integer.")
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"BencodeInt out of 64-bit range: {value}")
        self.value = value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"BencodeInt({self.value})"


class BencodeString(BencodeType):
    """Represents a Bencoded byte string."""
    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError("BencodeString requires bytes.")
        self.value = bytes(value)

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"BencodeString({self.value!r})"


class BencodeList(BencodeType):
    """Represents a Bencoded list."""
    def __init__(self, value: list):
        if not isinstance(value, (list, tuple)):
            raise TypeError("BencodeList requires a list.")
        for item in value:
            if not isinstance(item, BencodeType):
                raise TypeError(f"BencodeList items must be Bencode types, got {type(item).__name__}")
        self.value = list(value)

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def __getitem__(self, index):
        return self.value[index]

    def __repr__(self):
        return f"BencodeList({self.value!r})"


class BencodeDict(BencodeType):
    """
    Represents a Bencoded dictionary.

    Entries are stored sorted by raw key bytes, so iteration order is the
    canonical wire order and the encoder never has to sort again.
    """
    def __init__(self, value: dict):
        if not isinstance(value, dict):
            raise TypeError("BencodeDict requires a dict.")
        entries = {}
        for k, v in value.items():
            # keys must be bytes (bencode requirement); str is accepted as UTF-8
            if isinstance(k, str):
                k = k.encode()
            if not isinstance(k, (bytes, bytearray)):
                raise TypeError("BencodeDict keys must be bytes.")
            if not isinstance(v, BencodeType):
                raise TypeError(f"BencodeDict values must be Bencode types, got {type(v).__name__}")
            k = bytes(k)
            if k in entries:
                raise ValueError(f"BencodeDict has duplicate key {k!r}")
            entries[k] = v
        # read-only view so the sorted order cannot be disturbed after construction
        self.value = MappingProxyType({k: entries[k] for k in sorted(entries)})

    def __eq__(self, other):
        if not isinstance(other, BencodeDict):
            return NotImplemented
        return dict(self.value) == dict(other.value)

    def __contains__(self, key):
        return key in self.value

    def __getitem__(self, key):
        return self.value[key]

    def __len__(self):
        return len(self.value)

    def get(self, key, default=None):
        return self.value.get(key, default)

    def keys(self):
        return self.value.keys()

    def items(self):
        return self.value.items()

    def __repr__(self):
        return f"BencodeDict({dict(self.value)!r})"


def to_python(obj):
    """Unwraps a Bencode value tree into plain int / bytes / list / dict."""
    if isinstance(obj, (BencodeInt, BencodeString)):
        return obj.value
    if isinstance(obj, BencodeList):
        return [to_python(x) for x in obj.value]
    if isinstance(obj, BencodeDict):
        return {k: to_python(v) for k, v in obj.value.items()}
    raise TypeError(f"Not a Bencode type: {type(obj)}")
