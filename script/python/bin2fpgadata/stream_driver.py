#!/usr/bin/env python3
"""
stream_driver.py — Burst-chunked input iteration
-------------------------------------------------

Girdi stream'ini burst_length boyutunda pencerelerle okur:

  MAIN_LOOP   : tam pencere okunabildiği sürece encode et, adresle,
                hole içinde değilse yield et.
  FINAL_BURST : kalan 0..burst_length-1 byte'ı padding + (opsiyonel)
                0a EOF işaretiyle encode et ve HER ZAMAN yield et.

Girdi uzunluğu burst_length'in tam katı olsa bile son burst üretilir
(tamamen padding).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Iterator, List, Optional, Tuple

from bin2fpgadata.address_map import AddressMapper
from bin2fpgadata.burst_encoder import EncodedBurst, encode_terminal, encode_window, end_marker_pos
from bin2fpgadata.config import ConverterConfig
from bin2fpgadata.transcript import TranscriptEmitter


class DriverState(Enum):
    MAIN_LOOP = "main_loop"
    FINAL_BURST = "final_burst"


@dataclass
class ConversionStats:
    input_bytes: int = 0
    bursts_emitted: int = 0
    bursts_skipped: int = 0
    end_marker: bool = True
    terminal_bytes: int = 0
    # Hole tarafından atlanan ardışık adres aralıkları, [first, end)
    skip_ranges: List[Tuple[int, int]] = field(default_factory=list)

    def add_skip(self, address: int, burst_length: int) -> None:
        self.bursts_skipped += 1
        if self.skip_ranges and self.skip_ranges[-1][1] == address:
            self.skip_ranges[-1] = (self.skip_ranges[-1][0], address + burst_length)
        else:
            self.skip_ranges.append((address, address + burst_length))


def _read_window(stream: BinaryIO, size: int) -> bytes:
    """size byte oku; pipe gibi kısa okuma yapan stream'lerde EOF'a kadar tekrar dene."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def iter_bursts(
    stream: BinaryIO,
    config: ConverterConfig,
    stats: Optional[ConversionStats] = None,
) -> Iterator[EncodedBurst]:
    """
    Stream'deki tüm burst'leri sırayla üret.

    Hole içine düşen tam burst'ler atlanır (stats verilmişse sayılır);
    terminal burst hole kontrolüne tabi değildir.
    """
    config.validate()
    burst_length = config.burst_length
    mapper = AddressMapper(config.offset, config.hole_begin, config.hole_end)

    position = 0
    state = DriverState.MAIN_LOOP
    window = b""

    while state is DriverState.MAIN_LOOP:
        window = _read_window(stream, burst_length)
        if len(window) < burst_length:
            state = DriverState.FINAL_BURST
            continue

        address = mapper.address(position)
        if mapper.in_hole(address):
            if stats is not None:
                stats.add_skip(address, burst_length)
        else:
            yield EncodedBurst(address, encode_window(window, burst_length))
        position += burst_length

    # Son burst: her zaman tek sefer, hole kontrolü yok
    address = mapper.address(position)
    if stats is not None:
        stats.input_bytes = position + len(window)
        stats.terminal_bytes = len(window)
    yield EncodedBurst(
        address,
        encode_terminal(window, burst_length, config.end_marker),
        terminal=True,
    )


def convert(
    stream: BinaryIO,
    config: ConverterConfig,
    emitter: TranscriptEmitter,
    logger=None,
) -> ConversionStats:
    """
    Girdiyi okuyup tüm burst'leri emitter'a yaz.

    Args:
        stream: Binary girdi stream'i
        config: Doğrulanacak dönüştürücü konfigürasyonu
        emitter: Transcript / Tcl yazıcı
        logger: Opsiyonel DebugLogger

    Returns:
        ConversionStats
    """
    stats = ConversionStats(end_marker=config.end_marker)
    terminal = None

    for burst in iter_bursts(stream, config, stats):
        emitter.emit(burst)
        stats.bursts_emitted += 1
        if burst.terminal:
            terminal = burst

    if logger is not None:
        for first, end in stats.skip_ranges:
            logger.record("hole_skip", first=first, end=end, bursts=(end - first) // config.burst_length)
        logger.record(
            "terminal_burst",
            address=terminal.address,
            real_bytes=stats.terminal_bytes,
            sentinel_pos=end_marker_pos(stats.terminal_bytes, config.burst_length) if config.end_marker else None,
        )
        logger.params(stats, prefix="stats")

    return stats
