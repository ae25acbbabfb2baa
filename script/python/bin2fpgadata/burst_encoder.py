#!/usr/bin/env python3
"""
burst_encoder.py — Burst window → reversed HEX string
------------------------------------------------------

Bir burst penceresindeki byte'lar ters sırada yazılır: okunan ilk byte
string'in en SAĞINDA, son byte en SOLUNDA durur (AXI transaction data
alanının beklediği big-endian-first düzen).

Kısa (terminal) pencerelerde string önce tamamen '0' ile doldurulur; gerçek
byte'lar yine tam burst uzunluğuna göre hesaplanan pozisyonlara yazılır,
böylece padding string'in başında kalır.

Örnek (burst_length=16, 4 byte 0x11, end marker açık):
    0000000000000000000000 0a 11111111
"""

from dataclasses import dataclass

from bin2fpgadata.hex_codec import byte_to_hex


@dataclass(frozen=True)
class EncodedBurst:
    """Adresi ve HEX verisi belirlenmiş tek bir burst."""
    address: int
    data: str
    terminal: bool = False


def _char_pos(byte_index: int, burst_length: int) -> int:
    # i. byte'ın high nibble karakterinin string içindeki yeri
    return 2 * (burst_length - 1 - byte_index)


def encode_window(window: bytes, burst_length: int) -> str:
    """
    Pencereyi 2*burst_length uzunluğunda ters sıralı HEX string'e çevir.

    Pencere burst_length'ten kısa olabilir; eksik byte'lar '00' kalır.
    """
    if len(window) > burst_length:
        raise ValueError(
            f"window of {len(window)} bytes exceeds burst length {burst_length}"
        )

    chars = ["0"] * (2 * burst_length)
    for i, value in enumerate(window):
        pos = _char_pos(i, burst_length)
        chars[pos], chars[pos + 1] = byte_to_hex(value)
    return "".join(chars)


def end_marker_pos(real_bytes: int, burst_length: int) -> int:
    """EOF karakterinin ('a') HEX string içindeki indeksi."""
    return max(_char_pos(real_bytes, burst_length), 0) + 1


def mark_end(data: str, real_bytes: int, burst_length: int) -> str:
    """
    Gerçek veriye komşu ilk padding byte'ını 0x0a (EOF karakteri) yap.

    Padding hiç yoksa (real_bytes == burst_length) yazım son okunan gerçek
    byte'ın low nibble'ının üzerine düşer. Mevcut tüketicilerle uyum için
    bu davranış korunuyor.
    """
    pos = end_marker_pos(real_bytes, burst_length)
    return data[:pos] + "a" + data[pos + 1:]


def encode_terminal(window: bytes, burst_length: int, end_marker: bool = True) -> str:
    """Son (padding'li) burst'ü encode et, istenirse EOF işaretini ekle."""
    data = encode_window(window, burst_length)
    if end_marker:
        data = mark_end(data, len(window), burst_length)
    return data
