"""
Typed KRPC messages.

Each class validates its fields on construction, so any instance can be
encoded without further checks. Decoding lives in krpc.protocol.
"""
import os
from dataclasses import dataclass, field, fields
from typing import ClassVar, Dict, Iterable, Optional, Tuple

from bencode import encode as bencode
from bencode.structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

from .compact import CompactNodeInfo, CompactPeerInfo, check_port, pack_nodes, pack_peers
from .errors import InvalidField, InvalidLength
from .message_types import NODE_ID_LEN, TRANSACTION_ID_LEN, MessageType, QueryMethod


def new_transaction_id(length: int = TRANSACTION_ID_LEN) -> bytes:
    return os.urandom(length)


def new_node_id() -> bytes:
    return os.urandom(NODE_ID_LEN)


def _check_bytes(name: str, value, optional: bool = False):
    if value is None and optional:
        return None
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"{name} must be bytes, not {type(value).__name__}")
    return bytes(value)


def _check_hash(name: str, value) -> bytes:
    value = _check_bytes(name, value)
    if len(value) != NODE_ID_LEN:
        raise InvalidLength(name, str(NODE_ID_LEN), len(value))
    return value


@dataclass(frozen=True, repr=False)
class Message:
    transaction_id: bytes
    version: Optional[bytes] = field(default=None, kw_only=True)

    message_type: ClassVar[MessageType]

    def __post_init__(self):
        object.__setattr__(self, "transaction_id", _check_bytes("transaction_id", self.transaction_id))
        object.__setattr__(self, "version", _check_bytes("version", self.version, optional=True))

    def __repr__(self):
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            # ids and hashes read better as hex
            if isinstance(value, bytes) and len(value) == NODE_ID_LEN:
                parts.append(f"{f.name}={value.hex()}")
            else:
                parts.append(f"{f.name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def _body(self) -> Dict[bytes, BencodeType]:
        return {}

    def to_bencode(self) -> BencodeDict:
        root = {
            b"t": BencodeString(self.transaction_id),
            b"y": BencodeString(self.message_type.value),
        }
        root.update(self._body())
        if self.version is not None:
            root[b"v"] = BencodeString(self.version)
        return BencodeDict(root)

    def encode(self) -> bytes:
        return bencode(self.to_bencode())


# ---- Queries ----

@dataclass(frozen=True, repr=False)
class Query(Message):
    sender_id: bytes

    message_type = MessageType.QUERY
    method: ClassVar[QueryMethod]

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "sender_id", _check_hash("id", self.sender_id))

    def arguments(self) -> Dict[bytes, BencodeType]:
        return {b"id": BencodeString(self.sender_id)}

    def _body(self):
        return {
            b"q": BencodeString(self.method.value),
            b"a": BencodeDict(self.arguments()),
        }


@dataclass(frozen=True, repr=False)
class Ping(Query):
    method = QueryMethod.PING


@dataclass(frozen=True, repr=False)
class FindNode(Query):
    target: bytes
    method = QueryMethod.FIND_NODE

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "target", _check_hash("target", self.target))

    def arguments(self):
        args = super().arguments()
        args[b"target"] = BencodeString(self.target)
        return args


@dataclass(frozen=True, repr=False)
class GetPeers(Query):
    info_hash: bytes
    method = QueryMethod.GET_PEERS

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "info_hash", _check_hash("info_hash", self.info_hash))

    def arguments(self):
        args = super().arguments()
        args[b"info_hash"] = BencodeString(self.info_hash)
        return args


@dataclass(frozen=True, repr=False)
class AnnouncePeer(Query):
    info_hash: bytes
    port: int
    token: bytes
    implied_port: Optional[bool] = None  # None leaves the key out
    method = QueryMethod.ANNOUNCE_PEER

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "info_hash", _check_hash("info_hash", self.info_hash))
        check_port(self.port)
        object.__setattr__(self, "token", _check_bytes("token", self.token))
        if self.implied_port is not None:
            if not isinstance(self.implied_port, int) or self.implied_port not in (0, 1):
                raise TypeError(f"implied_port must be None, a bool, 0 or 1, not {self.implied_port!r}")
            object.__setattr__(self, "implied_port", bool(self.implied_port))

    def arguments(self):
        args = super().arguments()
        args[b"info_hash"] = BencodeString(self.info_hash)
        args[b"port"] = BencodeInt(self.port)
        args[b"token"] = BencodeString(self.token)
        if self.implied_port is not None:
            args[b"implied_port"] = BencodeInt(1 if self.implied_port else 0)
        return args


# ---- Responses and errors ----

@dataclass(frozen=True, repr=False)
class Response(Message):
    """
    Reply to any query. nodes/values/token are None when the key is absent,
    which is how ping and announce_peer acks look on the wire.
    """
    sender_id: bytes
    nodes: Optional[Tuple[CompactNodeInfo, ...]] = None
    values: Optional[Tuple[CompactPeerInfo, ...]] = None
    token: Optional[bytes] = None

    message_type = MessageType.RESPONSE

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "sender_id", _check_hash("id", self.sender_id))
        if self.nodes is not None:
            nodes = tuple(self.nodes)
            if not all(isinstance(n, CompactNodeInfo) for n in nodes):
                raise TypeError("nodes must be CompactNodeInfo records")
            object.__setattr__(self, "nodes", nodes)
        if self.values is not None:
            values = tuple(self.values)
            if not all(isinstance(v, CompactPeerInfo) for v in values):
                raise TypeError("values must be CompactPeerInfo records")
            object.__setattr__(self, "values", values)
        object.__setattr__(self, "token", _check_bytes("token", self.token, optional=True))

    def _body(self):
        results = {b"id": BencodeString(self.sender_id)}
        if self.nodes is not None:
            results[b"nodes"] = BencodeString(pack_nodes(self.nodes))
        if self.values is not None:
            results[b"values"] = BencodeList([BencodeString(v) for v in pack_peers(self.values)])
        if self.token is not None:
            results[b"token"] = BencodeString(self.token)
        return {b"r": BencodeDict(results)}


@dataclass(frozen=True, repr=False)
class ErrorMessage(Message):
    code: int
    message: str

    message_type = MessageType.ERROR

    def __post_init__(self):
        super().__post_init__()
        if not isinstance(self.code, int) or isinstance(self.code, bool):
            raise TypeError("code must be an integer")
        # range-checks the code against the bencode integer limits
        BencodeInt(int(self.code))
        if not isinstance(self.message, str):
            raise TypeError("message must be str")
        try:
            self.message.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidField("message", "not encodable as UTF-8") from exc

    def _body(self):
        return {b"e": BencodeList([BencodeInt(int(self.code)), BencodeString(self.message.encode())])}


# ---- Constructors ----

def ping(transaction_id: bytes, sender_id: bytes, version: bytes = None) -> Ping:
    return Ping(transaction_id, sender_id, version=version)


def find_node(transaction_id: bytes, sender_id: bytes, target: bytes, version: bytes = None) -> FindNode:
    return FindNode(transaction_id, sender_id, target, version=version)


def get_peers(transaction_id: bytes, sender_id: bytes, info_hash: bytes, version: bytes = None) -> GetPeers:
    return GetPeers(transaction_id, sender_id, info_hash, version=version)


def announce_peer(transaction_id: bytes, sender_id: bytes, info_hash: bytes, port: int, token: bytes,
                  implied_port: Optional[bool] = None, version: bytes = None) -> AnnouncePeer:
    return AnnouncePeer(transaction_id, sender_id, info_hash, port, token, implied_port, version=version)


def response(transaction_id: bytes, sender_id: bytes, nodes: Iterable[CompactNodeInfo] = None,
             values: Iterable[CompactPeerInfo] = None, token: bytes = None, version: bytes = None) -> Response:
    return Response(transaction_id, sender_id, nodes, values, token, version=version)


def error(transaction_id: bytes, code: int, message: str, version: bytes = None) -> ErrorMessage:
    return ErrorMessage(transaction_id, code, message, version=version)
