"""
Compact node and peer records as carried in KRPC responses.

'nodes' is one byte string of concatenated 26-byte records, while 'values'
is a list of separate 6-byte strings. Both keep the order they were given in.
"""
import ipaddress
import struct
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import InvalidField, InvalidLength
from .message_types import COMPACT_NODE_LEN, COMPACT_PEER_LEN, NODE_ID_LEN


def check_ip(ip: str) -> str:
    try:
        return str(ipaddress.IPv4Address(ip))
    except ValueError as exc:
        raise InvalidField("ip", f"not an IPv4 address: {ip!r}") from exc


def check_port(port: int) -> int:
    if not isinstance(port, int) or isinstance(port, bool) or not 0 <= port <= 0xFFFF:
        raise InvalidField("port", f"must be an integer in 0..65535, got {port!r}")
    return port


@dataclass(frozen=True)
class CompactPeerInfo:
    ip: str
    port: int

    def __post_init__(self):
        object.__setattr__(self, "ip", check_ip(self.ip))
        check_port(self.port)

    @property
    def address(self) -> Tuple[str, int]:
        return self.ip, self.port


@dataclass(frozen=True)
class CompactNodeInfo:
    node_id: bytes
    ip: str
    port: int

    def __post_init__(self):
        if not isinstance(self.node_id, (bytes, bytearray)):
            raise TypeError("node_id must be bytes")
        if len(self.node_id) != NODE_ID_LEN:
            raise InvalidLength("node_id", str(NODE_ID_LEN), len(self.node_id))
        object.__setattr__(self, "node_id", bytes(self.node_id))
        object.__setattr__(self, "ip", check_ip(self.ip))
        check_port(self.port)

    @property
    def address(self) -> Tuple[str, int]:
        return self.ip, self.port

    def __repr__(self):
        return f"CompactNodeInfo(node_id={self.node_id.hex()}, ip={self.ip!r}, port={self.port})"


# ---- Peers ----

def pack_peer(peer: CompactPeerInfo) -> bytes:
    """4-byte IPv4 address followed by the port, big-endian."""
    return ipaddress.IPv4Address(peer.ip).packed + struct.pack(">H", peer.port)


def unpack_peer(data: bytes, field: str = "values") -> CompactPeerInfo:
    if len(data) != COMPACT_PEER_LEN:
        raise InvalidLength(field, str(COMPACT_PEER_LEN), len(data))
    ip = ".".join(str(b) for b in data[:4])
    port = struct.unpack(">H", data[4:6])[0]
    return CompactPeerInfo(ip, port)


def pack_peers(peers: Iterable[CompactPeerInfo]) -> List[bytes]:
    return [pack_peer(p) for p in peers]


def unpack_peers(values: Iterable[bytes], field: str = "values") -> List[CompactPeerInfo]:
    return [unpack_peer(v, field) for v in values]


# ---- Nodes ----

def pack_node(node: CompactNodeInfo) -> bytes:
    return node.node_id + pack_peer(CompactPeerInfo(node.ip, node.port))


def unpack_node(data: bytes, field: str = "nodes") -> CompactNodeInfo:
    if len(data) != COMPACT_NODE_LEN:
        raise InvalidLength(field, str(COMPACT_NODE_LEN), len(data))
    peer = unpack_peer(data[NODE_ID_LEN:], field)
    return CompactNodeInfo(data[:NODE_ID_LEN], peer.ip, peer.port)


def pack_nodes(nodes: Iterable[CompactNodeInfo]) -> bytes:
    return b"".join(pack_node(n) for n in nodes)


def unpack_nodes(blob: bytes, field: str = "nodes") -> List[CompactNodeInfo]:
    """
    Splits a concatenated 'nodes' blob into 26-byte records.
    Raises InvalidLength unless the length is a multiple of 26.
    """
    if len(blob) % COMPACT_NODE_LEN:
        raise InvalidLength(field, f"a multiple of {COMPACT_NODE_LEN}", len(blob))
    return [unpack_node(blob[i:i+COMPACT_NODE_LEN], field) for i in range(0, len(blob), COMPACT_NODE_LEN)]
