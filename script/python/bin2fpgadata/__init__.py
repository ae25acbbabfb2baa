"""
bin2fpgadata — Binary image → FPGA burst data converter

Binary dosyayı burst boyutunda pencerelere ayırır, her pencereyi ters byte
sırasıyla HEX string'e çevirir ve adresiyle birlikte yazar. İsteğe bağlı
olarak Vivado hw_axi write transaction Tcl script'i üretir.
"""

from bin2fpgadata.address_map import AddressMapper
from bin2fpgadata.burst_encoder import EncodedBurst, encode_terminal, encode_window, mark_end
from bin2fpgadata.config import ConfigError, ConverterConfig
from bin2fpgadata.hex_codec import byte_to_hex
from bin2fpgadata.stream_driver import ConversionStats, DriverState, convert, iter_bursts
from bin2fpgadata.transcript import TranscriptEmitter, format_tcl, format_transcript

__version__ = "1.0.0"

__all__ = [
    "AddressMapper",
    "ConfigError",
    "ConversionStats",
    "ConverterConfig",
    "DriverState",
    "EncodedBurst",
    "TranscriptEmitter",
    "byte_to_hex",
    "convert",
    "encode_terminal",
    "encode_window",
    "format_tcl",
    "format_transcript",
    "iter_bursts",
    "mark_end",
]
