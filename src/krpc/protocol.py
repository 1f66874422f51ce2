"""
KRPC wire codec: typed messages to bencoded datagrams and back.
"""
import logging

from bencode import decode as bdecode
from bencode.decoder import MAX_DEPTH
from bencode.structure import BencodeDict, BencodeInt, BencodeList, BencodeString, BencodeType

from .compact import unpack_nodes, unpack_peer
from .errors import (
    InvalidField,
    InvalidFieldType,
    InvalidLength,
    KRPCDecodeError,
    MalformedError,
    MissingField,
    NotADictionary,
    UnknownMessageType,
    UnknownMethod,
)
from .message_types import NODE_ID_LEN, MessageType, QueryMethod
from .messages import AnnouncePeer, ErrorMessage, FindNode, GetPeers, Message, Ping, Response

logger = logging.getLogger(__name__)

_TYPE_NAMES = {
    BencodeInt: "integer",
    BencodeString: "byte string",
    BencodeList: "list",
    BencodeDict: "dictionary",
}


def encode(message: Message) -> bytes:
    """Serializes a message into one datagram payload."""
    return message.encode()


def decode(data: bytes, max_depth: int = MAX_DEPTH) -> Message:
    """
    Parses one datagram payload into a typed message.
    Raises a BencodeDecodeError subclass if the bytes are not a valid KRPC message.
    """
    root = bdecode(data, max_depth=max_depth)
    try:
        return from_bencode(root)
    except KRPCDecodeError as exc:
        logger.debug("[KRPC] rejected %d-byte message: %s", len(data), exc)
        raise


# ---- Field access ----

def _get(d: BencodeDict, name: str, kind):
    value = d.get(name.encode())
    if value is not None and not isinstance(value, kind):
        raise InvalidFieldType(name, _TYPE_NAMES[kind], _TYPE_NAMES[type(value)])
    return value


def _require(d: BencodeDict, name: str, kind):
    value = _get(d, name, kind)
    if value is None:
        raise MissingField(name)
    return value


def _require_hash(d: BencodeDict, name: str) -> bytes:
    value = _require(d, name, BencodeString).value
    if len(value) != NODE_ID_LEN:
        raise InvalidLength(name, str(NODE_ID_LEN), len(value))
    return value


def _optional_bytes(d: BencodeDict, name: str):
    value = _get(d, name, BencodeString)
    return value.value if value is not None else None


# ---- Dispatch ----

def from_bencode(root: BencodeType) -> Message:
    """Builds a typed message from an already decoded bencode value."""
    if not isinstance(root, BencodeDict):
        raise NotADictionary(_TYPE_NAMES.get(type(root), type(root).__name__))

    transaction_id = _require(root, "t", BencodeString).value
    version = _optional_bytes(root, "v")
    y = _require(root, "y", BencodeString).value

    try:
        kind = MessageType(y)
    except ValueError:
        raise UnknownMessageType(y) from None

    logger.debug("[KRPC] dispatching message type %r", y)
    if kind is MessageType.QUERY:
        return _decode_query(root, transaction_id, version)
    if kind is MessageType.RESPONSE:
        return _decode_response(root, transaction_id, version)
    return _decode_error(root, transaction_id, version)


def _decode_query(root: BencodeDict, transaction_id: bytes, version):
    name = _require(root, "q", BencodeString).value
    try:
        method = QueryMethod(name)
    except ValueError:
        raise UnknownMethod(name) from None

    args = _require(root, "a", BencodeDict)
    sender_id = _require_hash(args, "id")

    if method is QueryMethod.PING:
        return Ping(transaction_id, sender_id, version=version)

    if method is QueryMethod.FIND_NODE:
        return FindNode(transaction_id, sender_id, _require_hash(args, "target"), version=version)

    info_hash = _require_hash(args, "info_hash")
    if method is QueryMethod.GET_PEERS:
        return GetPeers(transaction_id, sender_id, info_hash, version=version)

    port = _require(args, "port", BencodeInt).value
    if not 0 <= port <= 0xFFFF:
        raise InvalidField("port", f"{port} is outside 0..65535")
    token = _require(args, "token", BencodeString).value
    implied_port = _get(args, "implied_port", BencodeInt)
    if implied_port is not None:
        implied_port = implied_port.value != 0
    return AnnouncePeer(transaction_id, sender_id, info_hash, port, token, implied_port, version=version)


def _decode_response(root: BencodeDict, transaction_id: bytes, version):
    results = _require(root, "r", BencodeDict)
    sender_id = _require_hash(results, "id")

    nodes = _get(results, "nodes", BencodeString)
    if nodes is not None:
        nodes = unpack_nodes(nodes.value)

    values = _get(results, "values", BencodeList)
    if values is not None:
        peers = []
        for entry in values:
            if not isinstance(entry, BencodeString):
                raise InvalidFieldType("values", "list of byte strings", _TYPE_NAMES[type(entry)])
            peers.append(unpack_peer(entry.value))
        values = peers

    token = _optional_bytes(results, "token")
    return Response(transaction_id, sender_id, nodes, values, token, version=version)


def _decode_error(root: BencodeDict, transaction_id: bytes, version):
    e = root.get(b"e")
    if e is None:
        raise MissingField("e")
    if not isinstance(e, BencodeList) or len(e) != 2:
        raise MalformedError("'e' must be a list of [code, message]")
    code, message = e
    if not isinstance(code, BencodeInt) or not isinstance(message, BencodeString):
        raise MalformedError("'e' must hold an integer code and a byte string message")
    try:
        text = message.value.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedError("error message is not valid UTF-8") from None
    return ErrorMessage(transaction_id, code.value, text, version=version)
