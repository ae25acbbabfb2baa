"""
Burst adres hesaplama ve address hole kontrolü.

Adres = pencere başlangıç offset'i + adres offset'i (32-bit, taşma kontrolü
yok). Hole [hole_begin, hole_end) yarı açık aralıktır ve yalnızca
hole_begin < hole_end olduğunda aktiftir.
"""

from dataclasses import dataclass

ADDRESS_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class AddressMapper:
    offset: int = 0
    hole_begin: int = 0
    hole_end: int = 0

    @property
    def has_hole(self) -> bool:
        return self.hole_begin < self.hole_end

    def address(self, window_start: int) -> int:
        return (window_start + self.offset) & ADDRESS_MASK

    def in_hole(self, address: int) -> bool:
        return self.has_hole and self.hole_begin <= address < self.hole_end
