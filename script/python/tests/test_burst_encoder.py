import pytest

from bin2fpgadata.burst_encoder import encode_terminal, encode_window, mark_end


def test_full_window_is_byte_reversed():
    window = bytes(range(16))
    data = encode_window(window, 16)
    assert data == bytes(reversed(window)).hex()
    assert data[:2] == "0f"
    assert data[-2:] == "00"


def test_full_window_1024():
    window = bytes(i & 0xFF for i in range(1024))
    data = encode_window(window, 1024)
    assert len(data) == 2048
    assert data == window[::-1].hex()


def test_short_window_padding_on_the_left():
    data = encode_window(b"\x01\x02\x03", 16)
    assert len(data) == 32
    assert data == "00" * 13 + "030201"


def test_window_longer_than_burst_rejected():
    with pytest.raises(ValueError):
        encode_window(bytes(17), 16)


def test_terminal_with_end_marker():
    # 4 x 0x11: sentinel sits right before the real data
    data = encode_terminal(b"\x11" * 4, 16, end_marker=True)
    assert data == "00" * 11 + "0a" + "11" * 4


def test_terminal_without_end_marker():
    data = encode_terminal(b"\x11" * 4, 16, end_marker=False)
    assert data == "00" * 12 + "11" * 4
    assert "a" not in data


def test_empty_terminal_window():
    assert encode_terminal(b"", 16, end_marker=True) == "00" * 15 + "0a"
    assert encode_terminal(b"", 16, end_marker=False) == "00" * 16


def test_terminal_one_byte_short_of_full():
    window = bytes(range(1, 16))
    data = encode_terminal(window, 16, end_marker=True)
    assert data[:2] == "0a"
    assert data[2:] == window[::-1].hex()


def test_mark_end_without_padding_overwrites_last_real_nibble():
    data = encode_window(b"\xff" * 16, 16)
    marked = mark_end(data, 16, 16)
    assert marked[:2] == "fa"
    assert marked[2:] == "ff" * 15


def test_padding_is_zero_outside_data_and_sentinel():
    burst = 32
    for real in range(burst):
        window = b"\xee" * real
        data = encode_terminal(window, burst, end_marker=True)
        padding = data[: 2 * (burst - real)]
        assert padding[:-1] == "0" * (len(padding) - 1)
        assert padding[-1] == "a"
        assert data[2 * (burst - real):] == "ee" * real
