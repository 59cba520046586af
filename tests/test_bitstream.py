import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from flacdec.bitstream import Bitstream
from flacdec.byteio import BufferedReader, ByteCursor


def _bits(data):
    return Bitstream(BufferedReader(io.BytesIO(bytes(data))))


def test_read_bit():
    bits = _bits([0b1010_0100, 0b1110_0001])
    assert bits.read_bit() is True
    assert bits.read_bit() is False
    assert bits.read_bit() is True
    assert bits.read_leq_u8(1) == 0
    assert bits.read_bit() is False
    assert bits.read_bit() is True
    assert bits.read_bit() is False
    assert bits.read_bit() is False

    assert bits.read_bit() is True
    assert bits.read_bit() is True
    assert bits.read_bit() is True
    assert bits.read_leq_u8(2) == 0
    assert bits.read_bit() is False
    assert bits.read_bit() is False
    assert bits.read_bit() is True

    with pytest.raises(EOFError):
        bits.read_bit()


def test_read_unary():
    bits = _bits([0b1010_0100, 0b1000_0000, 0b0010_0000, 0b0000_0000, 0b0000_1010])
    assert bits.read_unary() == 0
    assert bits.read_unary() == 1
    assert bits.read_unary() == 2
    assert bits.read_unary() == 2
    assert bits.read_unary() == 9
    assert bits.read_unary() == 17
    assert bits.read_leq_u8(3) == 0b010
    with pytest.raises(EOFError):
        bits.read_bit()


def test_read_leq_u8():
    bits = _bits([
        0b1010_0101,
        0b1110_0001,
        0b1101_0010,
        0b0101_0101,
        0b0111_0011,
        0b0011_1111,
        0b1010_1010,
        0b0000_1100,
    ])
    assert bits.read_leq_u8(0) == 0
    assert bits.read_leq_u8(1) == 1
    assert bits.read_leq_u8(1) == 0
    assert bits.read_leq_u8(2) == 0b10
    assert bits.read_leq_u8(2) == 0b01
    assert bits.read_leq_u8(3) == 0b011
    assert bits.read_leq_u8(3) == 0b110
    assert bits.read_leq_u8(4) == 0b0001
    assert bits.read_leq_u8(5) == 0b11010
    assert bits.read_leq_u8(6) == 0b010010
    assert bits.read_leq_u8(7) == 0b1010101
    assert bits.read_leq_u8(8) == 0b11001100
    assert bits.read_leq_u8(6) == 0b111111
    assert bits.read_leq_u8(8) == 0b10101010
    assert bits.read_leq_u8(4) == 0b0000
    assert bits.read_leq_u8(1) == 1
    assert bits.read_leq_u8(1) == 1
    assert bits.read_leq_u8(2) == 0b00


def test_read_gt_u8_leq_u16():
    bits = _bits([0b1010_0101, 0b1110_0001, 0b1101_0010, 0b0101_0101, 0b1111_0000])
    assert bits.read_gt_u8_leq_u16(10) == 0b1010_0101_11
    assert bits.read_gt_u8_leq_u16(10) == 0b10_0001_1101
    assert bits.read_leq_u8(3) == 0b001
    assert bits.read_gt_u8_leq_u16(10) == 0b0_0101_0101_1
    assert bits.read_leq_u8(7) == 0b111_0000
    with pytest.raises(EOFError):
        bits.read_gt_u8_leq_u16(10)


def test_read_leq_u16():
    bits = _bits([0b1010_0101, 0b1110_0001, 0b1101_0010, 0b0101_0101])
    assert bits.read_leq_u16(0) == 0
    assert bits.read_leq_u16(1) == 1
    assert bits.read_leq_u16(13) == 0b010_0101_1110_00
    assert bits.read_leq_u16(9) == 0b01_1101_001


def test_read_leq_u32():
    bits = _bits([0b1010_0101, 0b1110_0001, 0b1101_0010, 0b0101_0101])
    assert bits.read_leq_u32(1) == 1
    assert bits.read_leq_u32(17) == 0b010_0101_1110_0001_11
    assert bits.read_leq_u32(14) == 0b01_0010_0101_0101


def test_read_mixed():
    bits = _bits([0x03, 0xC7, 0xBF, 0xE5, 0x9B, 0x74, 0x1E, 0x3A, 0xDD, 0x7D,
                  0xC5, 0x5E, 0xF6, 0xBF, 0x78, 0x1B, 0xBD])
    assert bits.read_leq_u8(6) == 0
    assert bits.read_leq_u8(1) == 1
    minus = 1 << 16
    for value in (-14401, -13514, -12168, -10517, -9131, -8489, -8698):
        assert bits.read_leq_u32(17) == minus | (value & 0xFFFF)


def test_works_over_byte_cursor():
    bits = Bitstream(ByteCursor(bytes([0b1010_0101, 0b1110_0001])))
    assert bits.read_leq_u16(12) == 0b1010_0101_1110
    assert bits.read_unary() == 3
    with pytest.raises(EOFError):
        bits.read_leq_u8(1)


@pytest.mark.parametrize("method, bits", [
    ("read_leq_u8", 9),
    ("read_leq_u8", -1),
    ("read_gt_u8_leq_u16", 8),
    ("read_gt_u8_leq_u16", 17),
    ("read_leq_u16", 17),
    ("read_leq_u32", 33),
])
def test_bit_count_out_of_range(method, bits):
    stream = _bits([0xFF] * 8)
    with pytest.raises(ValueError):
        getattr(stream, method)(bits)
    assert stream.read_leq_u8(8) == 0xFF


_fields = st.lists(
    st.integers(min_value=1, max_value=32).flatmap(
        lambda width: st.tuples(st.just(width),
                                st.integers(min_value=0, max_value=(1 << width) - 1))
    ),
    max_size=30,
)


def _pack(fields):
    total = sum(width for width, _ in fields)
    padding = (-total) % 8
    acc = 0
    for width, value in fields:
        acc = (acc << width) | value
    acc <<= padding
    return acc.to_bytes((total + padding) // 8, "big")


@given(_fields)
def test_read_leq_u32_round_trip(fields):
    stream = Bitstream(ByteCursor(_pack(fields)))
    assert [stream.read_leq_u32(width) for width, _ in fields] == [v for _, v in fields]


@given(_fields)
def test_gt_u8_agrees_with_leq_u16(fields):
    data = _pack(fields) + b"\xff\xff"
    a = Bitstream(ByteCursor(data))
    b = Bitstream(ByteCursor(data))
    for width, _ in fields:
        a.read_leq_u32(width)
        b.read_leq_u32(width)
    assert a.read_gt_u8_leq_u16(12) == b.read_leq_u16(12)


@given(st.lists(st.integers(min_value=0, max_value=40), max_size=20))
def test_read_unary_round_trip(counts):
    fields = [(n + 1, 1) for n in counts]
    stream = Bitstream(ByteCursor(_pack(fields)))
    assert [stream.read_unary() for _ in counts] == counts