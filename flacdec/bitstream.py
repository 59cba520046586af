"""A reader for data that is not byte-aligned."""

from __future__ import annotations

from .byteio import ReadBytes

__all__ = ["Bitstream"]


def _mask_u8(bits: int) -> int:
    """Return a byte with ones in its ``bits`` most significant bits."""
    return (0xFF << (8 - bits)) & 0xFF


def _leading_zeros_u8(byte: int) -> int:
    return 8 - byte.bit_length()


def _check_bits(bits: int, low: int, high: int) -> None:
    if not low <= bits <= high:
        raise ValueError(f"bit count must be in [{low}, {high}], got {bits}")


class Bitstream:
    """Reads individual bits and bit fields from a byte reader, MSB first.

    A single byte is buffered; its unconsumed bits are kept in the most
    significant positions, and the remaining low bits are always zero.
    """

    def __init__(self, reader: ReadBytes) -> None:
        self.reader = reader
        self._data = 0
        self._bits_left = 0

    def read_bit(self) -> bool:
        """Read a single bit."""
        if self._bits_left == 0:
            fresh = self.reader.read_u8()
            self._data = (fresh << 1) & 0xFF
            self._bits_left = 7
            return bool(fresh & 0x80)
        bit = self._data & 0x80
        self._data = (self._data << 1) & 0xFF
        self._bits_left -= 1
        return bool(bit)

    def read_unary(self) -> int:
        """Read bits until a 1 is read, and return the number of zeros."""
        n = _leading_zeros_u8(self._data)
        if n < self._bits_left:
            self._data = (self._data << (n + 1)) & 0xFF
            self._bits_left -= n + 1
            return n

        n = self._bits_left
        while True:
            fresh = self.reader.read_u8()
            zeros = _leading_zeros_u8(fresh)
            n += zeros
            if zeros < 8:
                self._bits_left = 8 - (zeros + 1)
                self._data = (fresh << (zeros + 1)) & 0xFF
                return n

    def read_leq_u8(self, bits: int) -> int:
        """Read at most eight bits as an unsigned integer."""
        _check_bits(bits, 0, 8)
        if self._bits_left < bits:
            msb = self._data
            fresh = self.reader.read_u8()
            needed = bits - self._bits_left
            lsb = (fresh & _mask_u8(needed)) >> self._bits_left
            self._data = (fresh << needed) & 0xFF
            self._bits_left = 8 - needed
            result = msb | lsb
        else:
            result = self._data & _mask_u8(bits)
            self._data = (self._data << bits) & 0xFF
            self._bits_left -= bits
        return result >> (8 - bits)

    def read_gt_u8_leq_u16(self, bits: int) -> int:
        """Read more than eight and at most sixteen bits."""
        _check_bits(bits, 9, 16)
        bits_to_read = bits - self._bits_left
        mask_msb = (0xFFFFFFFF << bits_to_read) & 0xFFFFFFFF
        msb = (self._data << (bits - 8)) & mask_msb

        fresh = self.reader.read_u8()
        if bits_to_read >= 8:
            lsb = fresh << (bits_to_read - 8)
        else:
            lsb = fresh >> (8 - bits_to_read)
        combined = msb | lsb

        if bits_to_read <= 8:
            self._bits_left = 8 - bits_to_read
            self._data = (fresh << (8 - self._bits_left)) & 0xFF
            return combined

        fresher = self.reader.read_u8()
        self._bits_left = 16 - bits_to_read
        self._data = (fresher << (8 - self._bits_left)) & 0xFF
        return combined | (fresher >> (16 - bits_to_read))

    def read_leq_u16(self, bits: int) -> int:
        """Read at most sixteen bits as an unsigned integer."""
        _check_bits(bits, 0, 16)
        if bits <= 8:
            return self.read_leq_u8(bits)
        msb = self.read_leq_u8(8)
        lsb = self.read_leq_u8(bits - 8)
        return (msb << (bits - 8)) | lsb

    def read_leq_u32(self, bits: int) -> int:
        """Read at most thirty-two bits as an unsigned integer."""
        _check_bits(bits, 0, 32)
        if bits <= 16:
            return self.read_leq_u16(bits)
        msb = self.read_leq_u16(16)
        lsb = self.read_leq_u16(bits - 16)
        return (msb << (bits - 16)) | lsb