
import pytest

from bencode.decoder import decode, decode_prefix
from bencode.encoder import encode
from bencode.structure import BencodeInt, BencodeString, BencodeList, BencodeDict, to_python


def test_int():
    print("Testing integer decoding...")
    obj = decode(b"i42e")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeInt)
    assert obj.value == 42

    print("Testing integer encoding...")
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"i42e"


def test_int_edges():
    assert decode(b"i0e").value == 0
    assert decode(b"i-17e").value == -17
    assert decode(b"i9223372036854775807e").value == 2 ** 63 - 1
    assert decode(b"i-9223372036854775808e").value == -(2 ** 63)


def test_string():
    print("Testing string decoding...")
    obj = decode(b"4:spam")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeString)
    assert obj.value == b"spam"

    print("Testing string encoding...")
    assert encode(obj) == b"4:spam"


def test_binary_string():
    raw = bytes(range(256))
    obj = decode(b"256:" + raw)
    assert obj.value == raw
    assert decode(b"0:").value == b""


def test_list():
    print("Testing list decoding...")
    obj = decode(b"l4:spami3ee")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeList)
    assert len(obj.value) == 2
    assert obj.value == [BencodeString(b"spam"), BencodeInt(3)]


def test_dict():
    print("Testing dictionary decoding & encoding...")
    obj = decode(b"d3:cow3:mooe")
    print("Decoded:", obj)
    assert isinstance(obj, BencodeDict)
    assert obj.value[b"cow"].value == b"moo"
    enc = encode(obj)
    print("Re-encoded:", enc)
    assert enc == b"d3:cow3:mooe"


@pytest.mark.parametrize("buf", [
    b"i0e",
    b"le",
    b"de",
    b"d1:ad2:id20:abcdefghij0123456789e1:q4:ping1:t2:aa1:y1:qe",
    b"d4:dictd3:key5:value4:listl1:a1:bee5:hello5:worlde",
    b"lli1eli-2eeed0:0:ee",
])
def test_canonical_roundtrip(buf):
    assert encode(decode(buf)) == buf


def test_dict_sorted_regardless_of_insertion_order():
    d = BencodeDict({b"zeta": BencodeInt(1), b"alpha": BencodeInt(2), b"mid": BencodeInt(3)})
    assert list(d.keys()) == [b"alpha", b"mid", b"zeta"]
    assert encode(d) == b"d5:alphai2e3:midi3e4:zetai1ee"


def test_dict_sorts_by_raw_bytes():
    d = BencodeDict({b"b": BencodeInt(1), b"B": BencodeInt(2), b"\xff": BencodeInt(3), b"": BencodeInt(4)})
    assert list(d.keys()) == [b"", b"B", b"b", b"\xff"]


def test_dict_accepts_str_keys():
    d = BencodeDict({"spam": BencodeString(b"eggs")})
    assert b"spam" in d
    assert d == decode(b"d4:spam4:eggse")


def test_encode_plain_python():
    assert encode({"spam": [1, "a", b"\x00"], b"cow": {}}) == b"d3:cowde4:spaml" + b"i1e1:a1:\x00ee"
    assert encode(-3) == b"i-3e"
    assert encode(True) == b"i1e"


def test_encode_rejects_unknown_types():
    with pytest.raises(TypeError):
        encode(1.5)
    with pytest.raises(TypeError):
        encode({1: 2})


def test_structure_validation():
    with pytest.raises(TypeError):
        BencodeInt("1")
    with pytest.raises(ValueError):
        BencodeInt(2 ** 63)
    with pytest.raises(TypeError):
        BencodeString("text")
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    with pytest.raises(TypeError):
        BencodeDict({1: BencodeInt(1)})
    with pytest.raises(ValueError):
        BencodeDict({"a": BencodeInt(1), b"a": BencodeInt(2)})


def test_equality():
    assert BencodeInt(1) == BencodeInt(1)
    assert BencodeInt(1) != BencodeString(b"1")
    assert decode(b"l1:ae") == BencodeList([BencodeString(b"a")])


def test_decode_prefix_reports_consumed():
    value, consumed = decode_prefix(b"i12e4:spam")
    assert value == BencodeInt(12)
    assert consumed == 4


def test_to_python():
    obj = decode(b"d1:ali1e1:xe1:bi-2ee")
    assert to_python(obj) == {b"a": [1, b"x"], b"b": -2}


def test_dict_value_is_read_only():
    d = BencodeDict({b"b": BencodeInt(1), b"a": BencodeInt(2)})
    with pytest.raises(TypeError):
        d.value[b"0"] = BencodeInt(3)
    assert encode(d) == b"d1:ai2e1:bi1ee"
