import io

import pytest

from bin2fpgadata.config import ConfigError, ConverterConfig
from bin2fpgadata.stream_driver import ConversionStats, convert, iter_bursts
from bin2fpgadata.transcript import TranscriptEmitter


class TrickleReader(io.RawIOBase):
    """Her read() çağrısında en fazla bir byte döner (pipe benzeri)."""

    def __init__(self, data):
        self._data = data
        self._pos = 0

    def readable(self):
        return True

    def read(self, size=-1):
        chunk = self._data[self._pos:self._pos + 1]
        self._pos += len(chunk)
        return chunk


def bursts(data, **kwargs):
    return list(iter_bursts(io.BytesIO(data), ConverterConfig(**kwargs)))


def test_example_twenty_bytes():
    result = bursts(b"\x11" * 20, burst_length=16)
    assert [b.address for b in result] == [0x0, 0x10]
    assert result[0].data == "11" * 16
    assert not result[0].terminal
    assert result[1].terminal
    assert result[1].data == "00" * 11 + "0a" + "11" * 4


@pytest.mark.parametrize("length", [0, 1, 15, 16, 17, 47, 48, 100])
def test_burst_count(length):
    result = bursts(bytes(length), burst_length=16)
    expected = length // 16 + 1
    assert len(result) == expected
    assert sum(b.terminal for b in result) == 1
    assert result[-1].terminal


def test_exact_multiple_gets_padding_only_terminal():
    result = bursts(b"\xab" * 32, burst_length=16)
    assert len(result) == 3
    assert result[2].address == 0x20
    assert result[2].data == "00" * 15 + "0a"


def test_exact_multiple_without_end_marker():
    result = bursts(b"\xab" * 32, burst_length=16, end_marker=False)
    assert result[2].data == "0" * 32


def test_every_burst_is_well_formed():
    data = bytes(i % 251 for i in range(1000))
    for burst in bursts(data, burst_length=64):
        assert len(burst.data) == 128
        assert set(burst.data) <= set("0123456789abcdef")


def test_full_bursts_reverse_input():
    data = bytes(range(48))
    result = bursts(data, burst_length=16)
    for index, burst in enumerate(result[:-1]):
        window = data[index * 16:(index + 1) * 16]
        assert burst.data[:2] == f"{window[-1]:02x}"
        assert burst.data[-2:] == f"{window[0]:02x}"


def test_offset_applied_to_all_addresses():
    result = bursts(bytes(40), burst_length=16, offset=0x1000)
    assert [b.address for b in result] == [0x1000, 0x1010, 0x1020]


def test_hole_skips_full_bursts():
    stats = ConversionStats()
    result = list(iter_bursts(
        io.BytesIO(bytes(64)),
        ConverterConfig(burst_length=16, hole_begin=0x10, hole_end=0x30),
        stats,
    ))
    assert [b.address for b in result] == [0x0, 0x30, 0x40]
    assert stats.bursts_skipped == 2
    assert stats.input_bytes == 64


def test_hole_does_not_skip_terminal_burst():
    result = bursts(bytes(20), burst_length=16, hole_begin=0x10, hole_end=0x20)
    assert [b.address for b in result] == [0x0, 0x10]
    assert result[-1].terminal


def test_hole_respects_offset():
    result = bursts(bytes(48), burst_length=16, offset=0x100, hole_begin=0x110, hole_end=0x120)
    assert [b.address for b in result] == [0x100, 0x120, 0x130]


def test_short_reads_do_not_end_stream_early():
    data = bytes(range(40))
    result = list(iter_bursts(TrickleReader(data), ConverterConfig(burst_length=16)))
    assert [b.address for b in result] == [0x0, 0x10, 0x20]
    assert result[0].data == data[:16][::-1].hex()


@pytest.mark.parametrize("burst_length", [0, 8, 24, 1040, 2048])
def test_invalid_burst_length(burst_length):
    with pytest.raises(ConfigError):
        next(iter_bursts(io.BytesIO(bytes(32)), ConverterConfig(burst_length=burst_length)))


def test_convert_writes_transcript_and_counts():
    out = io.StringIO()
    stats = convert(
        io.BytesIO(bytes(48)),
        ConverterConfig(burst_length=16, hole_begin=0x10, hole_end=0x20),
        TranscriptEmitter(out),
    )
    assert stats.bursts_emitted == 3
    assert stats.bursts_skipped == 1
    assert stats.input_bytes == 48
    lines = out.getvalue().splitlines()
    assert lines[0::2] == ["0", "20", "30"]


def test_skip_ranges_merge_adjacent_bursts():
    stats = ConversionStats()
    list(iter_bursts(
        io.BytesIO(bytes(100)),
        ConverterConfig(burst_length=16, hole_begin=0x10, hole_end=0x40),
        stats,
    ))
    assert stats.skip_ranges == [(0x10, 0x40)]
    assert stats.bursts_skipped == 3
    assert stats.terminal_bytes == 4


def test_convert_logs_hole_and_terminal_records(tmp_path):
    from bin2fpgadata.debug_logger import DebugLogger

    logger = DebugLogger("bin2fpgadata", tmp_path)
    logger.section("Conversion")
    convert(
        io.BytesIO(bytes(52)),
        ConverterConfig(burst_length=16, hole_begin=0x10, hole_end=0x30),
        TranscriptEmitter(io.StringIO()),
        logger,
    )
    records = logger.sections[0]["records"]
    assert records[0] == {"kind": "hole_skip", "first": 0x10, "end": 0x30, "bursts": 2}
    assert records[1] == {"kind": "terminal_burst", "address": 0x30, "real_bytes": 4, "sentinel_pos": 23}
