"""Byte → two lowercase hex characters."""

from typing import Tuple

HEX_DIGITS = "0123456789abcdef"


def byte_to_hex(value: int) -> Tuple[str, str]:
    """
    Tek bir byte'ı (high nibble, low nibble) karakter çiftine çevirir.

    Args:
        value: 0..255 arası byte değeri

    Returns:
        ("1", "f") gibi iki karakterlik tuple
    """
    assert 0 <= value <= 0xFF, f"byte out of range: {value}"
    return HEX_DIGITS[value >> 4], HEX_DIGITS[value & 0xF]
