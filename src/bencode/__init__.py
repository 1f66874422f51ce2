"""
Bencode package for encoding and decoding BitTorrent data.
"""
from .decoder import (
    MAX_DEPTH,
    BencodeDecodeError,
    BencodeDecoder,
    DepthExceeded,
    DuplicateKey,
    InvalidToken,
    KeysNotSorted,
    MalformedInteger,
    MalformedLength,
    TrailingData,
    TruncatedInput,
    UnterminatedContainer,
    decode,
    decode_prefix,
)
from .encoder import encode
from .structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType, to_python

__all__ = [
    'decode', 'decode_prefix', 'encode', 'to_python', 'MAX_DEPTH', 'BencodeDecoder',
    'BencodeType', 'BencodeInt', 'BencodeString', 'BencodeList', 'BencodeDict',
    'BencodeDecodeError', 'MalformedInteger', 'MalformedLength', 'InvalidToken', 'TruncatedInput',
    'UnterminatedContainer', 'KeysNotSorted', 'DuplicateKey', 'TrailingData', 'DepthExceeded',
]
