"""CRC-8 and CRC-16 checksums as used by FLAC frame headers and frames.

The CRC-8 uses the polynomial x^8 + x^2 + x^1 + x^0 and the CRC-16 the
polynomial x^16 + x^15 + x^2 + x^0. Both start from 0 and are not reflected.
"""

from __future__ import annotations

import io
from collections.abc import Iterable

from .byteio import ReadBytes

__all__ = ["crc8", "crc16", "Crc8Reader", "Crc16Reader"]

_CRC8_POLY = 0x07
_CRC16_POLY = 0x8005


def _make_table(poly: int, width: int) -> tuple[int, ...]:
    top = 1 << (width - 1)
    mask = (1 << width) - 1
    table = []
    for index in range(256):
        value = index << (width - 8)
        for _ in range(8):
            value = ((value << 1) ^ poly) if value & top else (value << 1)
        table.append(value & mask)
    return tuple(table)


_CRC8_TABLE = _make_table(_CRC8_POLY, 8)
_CRC16_TABLE = _make_table(_CRC16_POLY, 16)


def _crc8_step(state: int, byte: int) -> int:
    return _CRC8_TABLE[state ^ byte]


def _crc16_step(state: int, byte: int) -> int:
    return ((state << 8) & 0xFFFF) ^ _CRC16_TABLE[((state >> 8) ^ byte) & 0xFF]


def crc8(data: Iterable[int]) -> int:
    """Return the CRC-8 of ``data``."""
    state = 0
    for byte in data:
        state = _crc8_step(state, byte)
    return state


def crc16(data: Iterable[int]) -> int:
    """Return the CRC-16 of ``data``."""
    state = 0
    for byte in data:
        state = _crc16_step(state, byte)
    return state


class _CrcReader(ReadBytes):
    """Wraps a reader and computes a checksum over every byte read."""

    def __init__(self, inner: ReadBytes) -> None:
        self._inner = inner
        self._state = 0

    @staticmethod
    def _step(state: int, byte: int) -> int:
        raise NotImplementedError  # overridden by every concrete reader

    def crc(self) -> int:
        """Return the checksum computed thus far."""
        return self._state

    def read_u8(self) -> int:
        byte = self._inner.read_u8()
        self._state = self._step(self._state, byte)
        return byte

    def read_u8_or_eof(self) -> int | None:
        byte = self._inner.read_u8_or_eof()
        if byte is not None:
            self._state = self._step(self._state, byte)
        return byte

    def read_exact(self, count: int) -> bytes:
        chunk = self._inner.read_exact(count)
        state = self._state
        for byte in chunk:
            state = self._step(state, byte)
        self._state = state
        return chunk

    def skip(self, amount: int) -> None:
        raise io.UnsupportedOperation(
            "CRC reader does not support skip, it does not compute CRC over skipped data."
        )


class Crc8Reader(_CrcReader):
    """A reader that computes the CRC-8 over everything it reads."""

    def __init__(self, inner: ReadBytes) -> None:
        super().__init__(inner)

    _step = staticmethod(_crc8_step)

    def crc(self) -> int:
        """Return the CRC-8 computed thus far."""
        return self._state

    def read_u8(self) -> int:
        return super().read_u8()

    def read_u8_or_eof(self) -> int | None:
        return super().read_u8_or_eof()

    def read_exact(self, count: int) -> bytes:
        return super().read_exact(count)

    def skip(self, amount: int) -> None:
        super().skip(amount)


class Crc16Reader(_CrcReader):
    """A reader that computes the CRC-16 over everything it reads."""

    def __init__(self, inner: ReadBytes) -> None:
        super().__init__(inner)

    _step = staticmethod(_crc16_step)

    def crc(self) -> int:
        """Return the CRC-16 computed thus far."""
        return self._state

    def read_u8(self) -> int:
        return super().read_u8()

    def read_u8_or_eof(self) -> int | None:
        return super().read_u8_or_eof()

    def read_exact(self, count: int) -> bytes:
        return super().read_exact(count)

    def skip(self, amount: int) -> None:
        super().skip(amount)