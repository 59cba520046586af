"""Parsing of FLAC frame headers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .byteio import ReadBytes
from .crc import Crc8Reader
from .errors import FormatError

__all__ = [
    "BlockingStrategy",
    "ChannelAssignment",
    "FrameHeader",
    "read_var_length_int",
    "read_frame_header_or_eof",
]

_RESERVED = "invalid frame header, encountered reserved value"
_INVALID_VAR_INT = "invalid variable-length integer"

_SAMPLE_RATES = {
    0b0001: 88_200,
    0b0010: 176_400,
    0b0011: 192_000,
    0b0100: 8_000,
    0b0101: 16_000,
    0b0110: 22_050,
    0b0111: 24_000,
    0b1000: 32_000,
    0b1001: 44_100,
    0b1010: 48_000,
    0b1011: 96_000,
}

_BITS_PER_SAMPLE = {
    0b001: 8,
    0b010: 12,
    0b100: 16,
    0b101: 20,
    0b110: 24,
}


class BlockingStrategy(enum.Enum):
    """Whether frames carry a frame number or a sample number."""

    FIXED = "fixed"
    VARIABLE = "variable"


class ChannelAssignment(enum.Enum):
    """How the channels of a frame are coded."""

    #: Every channel is coded as-is.
    INDEPENDENT = "independent"
    #: Channel 0 is the left channel, channel 1 is the side channel.
    LEFT_SIDE = "left_side"
    #: Channel 0 is the side channel, channel 1 is the right channel.
    RIGHT_SIDE = "right_side"
    #: Channel 0 is the mid channel, channel 1 is the side channel.
    MID_SIDE = "mid_side"


@dataclass(frozen=True)
class FrameHeader:
    """The decoded header of a single frame.

    ``block_time`` is the frame number for the fixed blocking strategy and
    the sample number of the first sample for the variable one. A
    ``sample_rate`` or ``bits_per_sample`` of None means the value must be
    taken from the streaminfo block.
    """

    blocking_strategy: BlockingStrategy
    block_time: int
    block_size: int
    sample_rate: int | None
    channel_assignment: ChannelAssignment
    bits_per_sample: int | None
    independent_channels: int = 0

    def channels(self) -> int:
        """Return the number of channels in the frame."""
        if self.channel_assignment is ChannelAssignment.INDEPENDENT:
            return self.independent_channels
        return 2

    def first_sample_number(self) -> int:
        """Return the inter-channel sample number of the first sample."""
        if self.blocking_strategy is BlockingStrategy.FIXED:
            return self.block_size * self.block_time
        return self.block_time


def read_var_length_int(reader: ReadBytes) -> int:
    """Read an integer in FLAC's UTF-8-like coding, up to 36 bits."""
    first = reader.read_u8()

    leading_ones = 0
    mark = 0x80
    while first & mark:
        leading_ones += 1
        mark >>= 1

    if leading_ones == 1:
        # A single leading one marks a continuation byte.
        raise FormatError(_INVALID_VAR_INT)
    additional = leading_ones - 1 if leading_ones > 1 else 0
    data_mask = 0x7F >> leading_ones

    result = (first & data_mask) << (6 * additional)
    for shift in range(additional - 1, -1, -1):
        byte = reader.read_u8()
        if byte & 0xC0 != 0x80:
            raise FormatError(_INVALID_VAR_INT)
        result |= (byte & 0x3F) << (6 * shift)
    return result


def _decode_block_size_code(code: int) -> tuple[int, int]:
    """Return (block size, bytes of block size to read from header end)."""
    if code == 0b0000:
        raise FormatError(_RESERVED)
    if code == 0b0001:
        return 192, 0
    if 0b0010 <= code <= 0b0101:
        return 576 << (code - 2), 0
    if code == 0b0110:
        return 0, 1
    if code == 0b0111:
        return 0, 2
    return 256 << (code - 8), 0


def _decode_channel_assignment(code: int) -> tuple[ChannelAssignment, int]:
    if code < 8:
        return ChannelAssignment.INDEPENDENT, code + 1
    if code == 0b1000:
        return ChannelAssignment.LEFT_SIDE, 0
    if code == 0b1001:
        return ChannelAssignment.RIGHT_SIDE, 0
    if code == 0b1010:
        return ChannelAssignment.MID_SIDE, 0
    raise FormatError(_RESERVED)


def read_frame_header_or_eof(reader: ReadBytes) -> FrameHeader | None:
    """Read a frame header, or return None if the stream ends before it."""
    crc_input = Crc8Reader(reader)

    sync_res_block = crc_input.read_be_u16_or_eof()
    if sync_res_block is None:
        return None

    if sync_res_block & 0xFFFC != 0xFFF8:
        raise FormatError("frame sync code missing")
    if sync_res_block & 0b10:
        raise FormatError(_RESERVED)
    strategy = (
        BlockingStrategy.VARIABLE if sync_res_block & 0b1 else BlockingStrategy.FIXED
    )

    bs_sr = crc_input.read_u8()
    block_size, block_size_bytes = _decode_block_size_code(bs_sr >> 4)

    sr_code = bs_sr & 0x0F
    sample_rate: int | None = None
    if sr_code in _SAMPLE_RATES:
        sample_rate = _SAMPLE_RATES[sr_code]
    elif sr_code == 0b1111:
        # Prevents sync-fooling.
        raise FormatError("invalid frame header")

    chan_bps_res = crc_input.read_u8()
    channel_assignment, independent = _decode_channel_assignment(chan_bps_res >> 4)

    bps_code = (chan_bps_res & 0b1110) >> 1
    if bps_code == 0:
        bits_per_sample = None
    elif bps_code in _BITS_PER_SAMPLE:
        bits_per_sample = _BITS_PER_SAMPLE[bps_code]
    else:
        raise FormatError(_RESERVED)

    if chan_bps_res & 0b1:
        raise FormatError(_RESERVED)

    block_time = read_var_length_int(crc_input)
    if strategy is BlockingStrategy.FIXED and block_time > 0x7FFFFFFF:
        raise FormatError("invalid frame header, frame number too large")

    if block_size_bytes == 1:
        block_size = crc_input.read_u8() + 1
    elif block_size_bytes == 2:
        stored = crc_input.read_be_u16()
        if stored == 0xFFFF:
            raise FormatError("invalid block size, exceeds 65535")
        block_size = stored + 1

    if sr_code == 0b1100:
        sample_rate = crc_input.read_u8()
    elif sr_code == 0b1101:
        sample_rate = crc_input.read_be_u16()
    elif sr_code == 0b1110:
        sample_rate = crc_input.read_be_u16() * 10

    computed_crc = crc_input.crc()
    presumed_crc = crc_input.read_u8()
    if computed_crc != presumed_crc:
        raise FormatError("frame header CRC mismatch")

    return FrameHeader(
        blocking_strategy=strategy,
        block_time=block_time,
        block_size=block_size,
        sample_rate=sample_rate,
        channel_assignment=channel_assignment,
        bits_per_sample=bits_per_sample,
        independent_channels=independent,
    )