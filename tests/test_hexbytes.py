import binascii

import pytest

from iavlkit.hexbytes import HexBytes, cp_incr


def test_bytes_compatibility():
    data = b"hello world"
    hb = HexBytes(data)
    assert bytes(hb) == data
    assert HexBytes(bytes(hb)) == hb


@pytest.mark.parametrize(
    "raw, expected",
    [(b"", '""'), (b"a", '"61"'), (b"abc", '"616263"')],
)
def test_json_marshal(raw, expected):
    hb = HexBytes(raw)
    assert hb.to_json() == expected
    back = HexBytes.from_json(expected)
    assert back == HexBytes(raw)
    assert isinstance(back, HexBytes)


def test_json_upper_case():
    assert HexBytes(b"\xab\xcd").to_json() == '"ABCD"'


def test_from_json_accepts_bytes_and_lower_case():
    assert HexBytes.from_json(b'"abcd"') == b"\xab\xcd"


@pytest.mark.parametrize("bad", ['"', "abc", '"616', "61\"", ""])
def test_from_json_rejects_unquoted(bad):
    with pytest.raises(ValueError):
        HexBytes.from_json(bad)


def test_from_json_rejects_bad_hex():
    with pytest.raises(binascii.Error):
        HexBytes.from_json('"zz"')


def test_str_and_format():
    hb = HexBytes(b"\x01\xfe")
    assert str(hb) == "01FE"
    assert f"{hb}" == "01FE"


@pytest.mark.parametrize(
    "value, expected",
    [
        (b"\x00", b"\x01"),
        (b"\x00\xff", b"\x01\x00"),
        (b"ab", b"ac"),
        (b"\x01\xff\xff", b"\x02\x00\x00"),
        (b"\xff", None),
        (b"\xff\xff", None),
    ],
)
def test_cp_incr(value, expected):
    assert cp_incr(value) == expected


def test_cp_incr_does_not_modify_input():
    original = bytearray(b"\x00\xff")
    cp_incr(original)
    assert original == bytearray(b"\x00\xff")


def test_cp_incr_empty():
    with pytest.raises(ValueError):
        cp_incr(b"")