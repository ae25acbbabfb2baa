import pytest

from bin2fpgadata.hex_codec import HEX_DIGITS, byte_to_hex


def test_all_bytes_match_format():
    for value in range(256):
        high, low = byte_to_hex(value)
        assert high + low == f"{value:02x}"
        assert high in HEX_DIGITS and low in HEX_DIGITS


def test_nibble_split():
    assert byte_to_hex(0x0A) == ("0", "a")
    assert byte_to_hex(0xF0) == ("f", "0")


def test_out_of_range_is_a_defect():
    with pytest.raises(AssertionError):
        byte_to_hex(256)
