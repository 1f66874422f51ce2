"""
KRPC (BitTorrent DHT, BEP-5) message codec built on the bencode package.
"""
from .compact import (
    CompactNodeInfo,
    CompactPeerInfo,
    pack_node,
    pack_nodes,
    pack_peer,
    pack_peers,
    unpack_node,
    unpack_nodes,
    unpack_peer,
    unpack_peers,
)
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
from .message_types import ErrorCode, MessageType, QueryMethod
from .messages import (
    AnnouncePeer,
    ErrorMessage,
    FindNode,
    GetPeers,
    Message,
    Ping,
    Query,
    Response,
    announce_peer,
    error,
    find_node,
    get_peers,
    new_node_id,
    new_transaction_id,
    ping,
    response,
)
from .protocol import decode, encode, from_bencode

__all__ = [
    "encode",
    "decode",
    "from_bencode",
    "Message",
    "Query",
    "Ping",
    "FindNode",
    "GetPeers",
    "AnnouncePeer",
    "Response",
    "ErrorMessage",
    "ping",
    "find_node",
    "get_peers",
    "announce_peer",
    "response",
    "error",
    "new_transaction_id",
    "new_node_id",
    "CompactNodeInfo",
    "CompactPeerInfo",
    "pack_node",
    "unpack_node",
    "pack_nodes",
    "unpack_nodes",
    "pack_peer",
    "unpack_peer",
    "pack_peers",
    "unpack_peers",
    "MessageType",
    "QueryMethod",
    "ErrorCode",
    "KRPCDecodeError",
    "NotADictionary",
    "MissingField",
    "UnknownMethod",
    "UnknownMessageType",
    "MalformedError",
    "InvalidField",
    "InvalidFieldType",
    "InvalidLength",
]
