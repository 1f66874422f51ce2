"""
Defines constants for KRPC (BEP-5) message kinds, query methods and record sizes.
"""
from enum import Enum, IntEnum


class MessageType(bytes, Enum):
    """Values of the top-level 'y' key."""
    QUERY = b"q"
    RESPONSE = b"r"
    ERROR = b"e"


class QueryMethod(bytes, Enum):
    """Values of the 'q' key for the four BEP-5 queries."""
    PING = b"ping"
    FIND_NODE = b"find_node"
    GET_PEERS = b"get_peers"
    ANNOUNCE_PEER = b"announce_peer"


class ErrorCode(IntEnum):
    """Standard codes carried in the first element of an 'e' list."""
    GENERIC = 201
    SERVER = 202
    PROTOCOL = 203
    METHOD_UNKNOWN = 204


NODE_ID_LEN = 20                       # node ids and info hashes
COMPACT_PEER_LEN = 4 + 2               # IPv4 + big-endian port
COMPACT_NODE_LEN = NODE_ID_LEN + COMPACT_PEER_LEN
TRANSACTION_ID_LEN = 2                 # what most clients send
