import pytest

from krpc.compact import (
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
from krpc.errors import InvalidField, InvalidLength

NODE_A = CompactNodeInfo(b"mnopqrstuvwxyz123456", "65.66.67.68", 24929)
NODE_B = CompactNodeInfo(b"11111111111111111111", "69.70.71.72", 24929)


def test_pack_peer():
    # 'aa' is 24929 big-endian
    assert pack_peer(CompactPeerInfo("65.66.67.68", 24929)) == b"ABCDaa"
    assert pack_peer(CompactPeerInfo("127.0.0.1", 6881)) == b"\x7f\x00\x00\x01\x1a\xe1"


def test_unpack_peer():
    peer = unpack_peer(b"\x7f\x00\x00\x01\x1a\xe1")
    assert peer == CompactPeerInfo("127.0.0.1", 6881)
    assert peer.address == ("127.0.0.1", 6881)


@pytest.mark.parametrize("size", [0, 5, 7, 18])
def test_unpack_peer_wrong_size(size):
    with pytest.raises(InvalidLength) as exc_info:
        unpack_peer(b"\x01" * size)
    assert exc_info.value.field == "values"


def test_peers_keep_order():
    peers = [CompactPeerInfo("10.0.0.2", 2), CompactPeerInfo("10.0.0.1", 1)]
    packed = pack_peers(peers)
    assert packed == [b"\x0a\x00\x00\x02\x00\x02", b"\x0a\x00\x00\x01\x00\x01"]
    assert unpack_peers(packed) == peers


def test_pack_nodes_concatenates():
    blob = pack_nodes([NODE_A, NODE_B])
    assert blob == b"mnopqrstuvwxyz123456ABCDaa11111111111111111111EFGHaa"
    assert len(blob) == 52
    assert pack_node(NODE_A) == blob[:26]


def test_unpack_nodes_in_order():
    blob = b"mnopqrstuvwxyz123456ABCDaa11111111111111111111EFGHaa"
    assert unpack_nodes(blob) == [NODE_A, NODE_B]
    assert unpack_nodes(b"") == []
    assert unpack_node(blob[26:]) == NODE_B


@pytest.mark.parametrize("size", [1, 25, 27, 53])
def test_unpack_nodes_wrong_size(size):
    with pytest.raises(InvalidLength) as exc_info:
        unpack_nodes(b"\x00" * size)
    assert exc_info.value.field == "nodes"
    assert exc_info.value.length == size


def test_record_validation():
    with pytest.raises(InvalidLength):
        CompactNodeInfo(b"short", "1.2.3.4", 1)
    with pytest.raises(InvalidField):
        CompactPeerInfo("::1", 1)
    with pytest.raises(InvalidField):
        CompactPeerInfo("1.2.3.4", 65536)
    with pytest.raises(ValueError):
        CompactPeerInfo("1.2.3.4", -1)


def test_node_repr_uses_hex():
    assert "6d6e6f70" in repr(NODE_A)
