# filename: huffman_bits.py
#
# Single-bit sources and sinks. Bits are packed most-significant first by
# default and the last byte is padded with zeros.
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Protocol

BIT_ORDERS = ("msb", "lsb")


class BitSource(Protocol):
    def has_next(self) -> bool: ...

    def next_bit(self) -> int: ...


class BitSink(Protocol):
    def write_bit(self, bit: int) -> None: ...


def _check_bit(bit: int) -> None:
    # bool and float compare equal to 0/1 but are not bits
    if type(bit) is not int or bit not in (0, 1):
        raise ValueError(f"bit must be the int 0 or 1, got {bit!r}")


def _check_order(bit_order: str) -> str:
    if bit_order not in BIT_ORDERS:
        raise ValueError(f"bit_order must be one of {BIT_ORDERS}, got {bit_order!r}")
    return bit_order


class BitWriter:
    def __init__(self, bit_order: str = "msb") -> None:
        self.bit_order = _check_order(bit_order)
        self.buf = bytearray()
        self.acc = 0
        self.bits = 0
        self.bit_length = 0

    def write_bit(self, bit: int) -> None:
        _check_bit(bit)
        if self.bit_order == "msb":
            self.acc = (self.acc << 1) | bit
        else:
            self.acc |= bit << self.bits
        self.bits += 1
        self.bit_length += 1
        if self.bits == 8:
            self.buf.append(self.acc)
            self.acc = 0
            self.bits = 0

    def getvalue(self) -> bytes:
        """Packed bytes so far, with the pending partial byte zero-padded."""
        if self.bits == 0:
            return bytes(self.buf)
        tail = self.acc << (8 - self.bits) if self.bit_order == "msb" else self.acc
        return bytes(self.buf) + bytes([tail])


class BitReader:
    def __init__(self, data: bytes, bit_length: Optional[int] = None, bit_order: str = "msb") -> None:
        self.bit_order = _check_order(bit_order)
        self.data = data
        available = len(data) * 8
        if bit_length is None:
            bit_length = available
        elif not 0 <= bit_length <= available:
            raise ValueError(f"bit_length {bit_length} outside 0..{available}")
        self.bit_length = bit_length
        self.position = 0

    def has_next(self) -> bool:
        return self.position < self.bit_length

    def next_bit(self) -> int:
        if not self.has_next():
            raise EOFError("no more bits")
        byte = self.data[self.position >> 3]
        offset = self.position & 7
        self.position += 1
        if self.bit_order == "msb":
            return (byte >> (7 - offset)) & 1
        return (byte >> offset) & 1


class IterBitSource:
    """BitSource over any iterable of 0/1 values."""

    def __init__(self, bits: Iterable[int]) -> None:
        self._bits: Iterator[int] = iter(bits)
        self._pending: List[int] = []

    def has_next(self) -> bool:
        if self._pending:
            return True
        for bit in self._bits:
            self._pending.append(bit)
            return True
        return False

    def next_bit(self) -> int:
        if not self.has_next():
            raise EOFError("no more bits")
        bit = self._pending.pop()
        _check_bit(bit)
        return bit


class BitList(list):
    """In-memory BitSink."""

    def write_bit(self, bit: int) -> None:
        self.append(bit)


def bits_from_string(text: str) -> IterBitSource:
    return IterBitSource(int(ch) for ch in text)
