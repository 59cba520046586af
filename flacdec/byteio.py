"""Byte-level readers with big- and little-endian helpers.

A stream that ends before the requested bytes were read raises
:class:`EOFError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

__all__ = ["ReadBytes", "BufferedReader", "ByteCursor"]

DEFAULT_CAPACITY = 2048


class ReadBytes(ABC):
    """A source of bytes with convenience methods for fixed-width integers."""

    @abstractmethod
    def read_u8(self) -> int:
        """Read a single byte, raising EOFError at the end of the stream."""

    @abstractmethod
    def read_u8_or_eof(self) -> int | None:
        """Read a single byte, or return None at the end of the stream."""

    @abstractmethod
    def read_exact(self, count: int) -> bytes:
        """Read exactly ``count`` bytes."""

    @abstractmethod
    def skip(self, amount: int) -> None:
        """Skip over ``amount`` bytes."""

    def read_be_u16(self) -> int:
        """Read a big-endian 16-bit unsigned integer."""
        b0 = self.read_u8()
        b1 = self.read_u8()
        return (b0 << 8) | b1

    def read_be_u16_or_eof(self) -> int | None:
        """Read a big-endian 16-bit unsigned integer, or None at the end."""
        b0 = self.read_u8_or_eof()
        if b0 is None:
            return None
        b1 = self.read_u8_or_eof()
        if b1 is None:
            return None
        return (b0 << 8) | b1

    def read_be_u24(self) -> int:
        """Read a big-endian 24-bit unsigned integer."""
        b0 = self.read_u8()
        b1 = self.read_u8()
        b2 = self.read_u8()
        return (b0 << 16) | (b1 << 8) | b2

    def read_be_u32(self) -> int:
        """Read a big-endian 32-bit unsigned integer."""
        b0 = self.read_u8()
        b1 = self.read_u8()
        b2 = self.read_u8()
        b3 = self.read_u8()
        return (b0 << 24) | (b1 << 16) | (b2 << 8) | b3

    def read_le_u32(self) -> int:
        """Read a little-endian 32-bit unsigned integer."""
        b0 = self.read_u8()
        b1 = self.read_u8()
        b2 = self.read_u8()
        b3 = self.read_u8()
        return (b3 << 24) | (b2 << 16) | (b1 << 8) | b0


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"byte count must not be negative, got {count}")


class BufferedReader(ReadBytes):
    """Buffers reads from a binary file-like object."""

    def __init__(self, inner: BinaryIO, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._inner = inner
        self._capacity = capacity
        self._buf = b""
        self._pos = 0

    def into_inner(self) -> BinaryIO:
        """Return the wrapped object; buffered bytes are discarded."""
        return self._inner

    def _refill(self) -> bool:
        chunk = self._inner.read(self._capacity)
        self._buf = bytes(chunk) if chunk else b""
        self._pos = 0
        return bool(self._buf)

    def read_u8(self) -> int:
        if self._pos == len(self._buf) and not self._refill():
            raise EOFError("Expected one more byte.")
        byte = self._buf[self._pos]
        self._pos += 1
        return byte

    def read_u8_or_eof(self) -> int | None:
        if self._pos == len(self._buf) and not self._refill():
            return None
        byte = self._buf[self._pos]
        self._pos += 1
        return byte

    def read_exact(self, count: int) -> bytes:
        _check_count(count)
        parts = []
        left = count
        while True:
            take = min(left, len(self._buf) - self._pos)
            parts.append(self._buf[self._pos:self._pos + take])
            self._pos += take
            left -= take
            if left == 0:
                return b"".join(parts)
            if not self._refill():
                raise EOFError("Expected more bytes.")

    def skip(self, amount: int) -> None:
        _check_count(amount)
        left = amount
        while True:
            take = min(left, len(self._buf) - self._pos)
            self._pos += take
            left -= take
            if left == 0:
                return
            if not self._refill():
                raise EOFError("Expected more bytes.")


class ByteCursor(ReadBytes):
    """Reads from a bytes-like object held in memory."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    def position(self) -> int:
        """Return the number of bytes consumed so far."""
        return self._pos

    def read_u8(self) -> int:
        if self._pos >= len(self._data):
            raise EOFError("unexpected eof")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def read_u8_or_eof(self) -> int | None:
        if self._pos >= len(self._data):
            return None
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def read_exact(self, count: int) -> bytes:
        _check_count(count)
        end = self._pos + count
        if end > len(self._data):
            raise EOFError("unexpected eof")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def skip(self, amount: int) -> None:
        _check_count(amount)
        end = self._pos + amount
        if end > len(self._data):
            raise EOFError("unexpected eof")
        self._pos = end