"""
Bencode encoder producing canonical output (sorted keys, minimal integers).
"""
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def encode(obj) -> bytes:
    """Encodes a Python object or BencodeType into bencoded bytes."""

    if isinstance(obj, BencodeInt):
        return encode_int(obj.value)

    if isinstance(obj, BencodeString):
        return encode_bytes(obj.value)

    if isinstance(obj, BencodeList):
        return encode_list(obj.value)

    if isinstance(obj, BencodeDict):
        # already held in key order
        return b"d" + b"".join(encode_bytes(k) + encode(v) for k, v in obj.value.items()) + b"e"

    if isinstance(obj, bool):
        return encode_int(int(obj))

    if isinstance(obj, int):
        return encode_int(obj)

    if isinstance(obj, str):
        return encode_str(obj)

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return encode_bytes(bytes(obj))

    if isinstance(obj, (list, tuple)):
        return encode_list(obj)

    if isinstance(obj, dict):
        return encode_dict(obj)

    raise TypeError(f"Cannot bencode object of type {type(obj)}")


# ------------------------------------------------------------
#   Encoding primitives
# ------------------------------------------------------------

def encode_int(n: int) -> bytes:
    """Encodes an integer to bencoded bytes (e.g., i123e)."""
    return f"i{n}e".encode()


def encode_bytes(b: bytes) -> bytes:
    """Encodes bytes to bencoded bytes (e.g., 4:spam)."""
    return str(len(b)).encode() + b":" + b


def encode_str(s: str) -> bytes:
    """Encodes a string to bencoded bytes (e.g., 4:spam)."""
    b = s.encode()
    return encode_bytes(b)


def encode_list(lst: list) -> bytes:
    """Encodes a list to bencoded bytes (e.g., l4:spame)."""
    encoded_items = b''.join(encode(x) for x in lst)
    return b"l" + encoded_items + b"e"


def encode_dict(d: dict) -> bytes:
    """Encodes a dictionary to bencoded bytes (e.g., d3:cow3:moo4:spam4:eggse)."""
    result = [b"d"]

    def key_to_bytes(k):
        if isinstance(k, str):
            return k.encode()
        if isinstance(k, (bytes, bytearray)):
            return bytes(k)
        raise TypeError(f"Dictionary keys must be bytes or str, not {type(k)}")

    for key in sorted(d.keys(), key=key_to_bytes):
        key_bytes = key_to_bytes(key)
        result.append(encode_bytes(key_bytes))
        result.append(encode(d[key]))

    result.append(b"e")
    return b"".join(result)
