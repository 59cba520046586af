"""Decoded blocks of audio samples and inter-channel decorrelation."""

from __future__ import annotations

from collections.abc import Iterator, MutableSequence
from dataclasses import dataclass, field

__all__ = [
    "Block",
    "decode_left_side",
    "decode_right_side",
    "decode_mid_side",
    "ensure_buffer_len",
]


def _wrap_i32(value: int) -> int:
    """Reduce ``value`` to a signed 32-bit integer, wrapping on overflow."""
    return ((value + 0x8000_0000) & 0xFFFF_FFFF) - 0x8000_0000


def _div2_truncate(value: int) -> int:
    """Divide by two, rounding towards zero."""
    return -((-value) // 2) if value < 0 else value // 2


def decode_left_side(buffer: MutableSequence[int]) -> None:
    """Convert left ++ side samples in place to left ++ right."""
    half = len(buffer) // 2
    lefts = buffer[:half]
    sides = buffer[half:2 * half]
    buffer[half:2 * half] = [_wrap_i32(left - side) for left, side in zip(lefts, sides)]


def decode_right_side(buffer: MutableSequence[int]) -> None:
    """Convert side ++ right samples in place to left ++ right."""
    half = len(buffer) // 2
    sides = buffer[:half]
    rights = buffer[half:2 * half]
    buffer[:half] = [_wrap_i32(side + right) for side, right in zip(sides, rights)]


def decode_mid_side(buffer: MutableSequence[int]) -> None:
    """Convert mid ++ side samples in place to left ++ right."""
    half = len(buffer) // 2
    lefts = []
    rights = []
    for mid, side in zip(buffer[:half], buffer[half:2 * half]):
        # Double mid, then restore the bit lost to truncation when side is odd.
        mid = _wrap_i32(mid * 2) | (side & 1)
        lefts.append(_div2_truncate(_wrap_i32(mid + side)))
        rights.append(_div2_truncate(_wrap_i32(mid - side)))
    buffer[:half] = lefts
    buffer[half:2 * half] = rights


def ensure_buffer_len(buffer: list[int], new_len: int) -> list[int]:
    """Resize ``buffer`` in place to exactly ``new_len`` elements and return it.

    Elements added are zero; existing contents are kept but are expected to
    be overwritten by the caller.
    """
    if new_len < 0:
        raise ValueError(f"buffer length must not be negative, got {new_len}")
    missing = new_len - len(buffer)
    if missing > 0:
        buffer.extend([0] * missing)
    else:
        del buffer[new_len:]
    return buffer


@dataclass
class Block:
    """A block of decoded audio samples, channels stored one after another.

    ``time`` is the inter-channel sample number of the first sample in the
    block; divide it by the sample rate to get the start time in seconds.
    """

    time: int
    block_size: int
    num_channels: int
    buffer: list[int] = field(default_factory=list)

    @classmethod
    def from_buffer(cls, time: int, block_size: int, buffer: list[int]) -> Block:
        """Build a block whose channel count follows from the buffer length."""
        channels = len(buffer) // block_size if block_size else 0
        return cls(time=time, block_size=block_size, num_channels=channels, buffer=buffer)

    @classmethod
    def empty(cls) -> Block:
        """Return a block with 0 channels and 0 samples."""
        return cls(time=0, block_size=0, num_channels=0, buffer=[])

    def __len__(self) -> int:
        """Return the total number of samples, counting every channel."""
        return self.block_size * self.num_channels

    def duration(self) -> int:
        """Return the number of inter-channel samples (the block size)."""
        return self.block_size

    def channels(self) -> int:
        """Return the number of channels in the block."""
        return self.num_channels

    def _check_channel(self, ch: int) -> None:
        if not 0 <= ch < self.num_channels:
            raise IndexError(
                f"channel {ch} out of range for block with {self.num_channels} channels"
            )

    def channel(self, ch: int) -> list[int]:
        """Return the samples of the zero-based channel ``ch``."""
        self._check_channel(ch)
        start = ch * self.block_size
        return self.buffer[start:start + self.block_size]

    def sample(self, ch: int, sample: int) -> int:
        """Return sample ``sample`` (index within the block) of channel ``ch``."""
        self._check_channel(ch)
        if not 0 <= sample < self.block_size:
            raise IndexError(
                f"sample {sample} out of range for block of size {self.block_size}"
            )
        return self.buffer[ch * self.block_size + sample]

    def stereo_samples(self) -> Iterator[tuple[int, int]]:
        """Return an iterator over (left, right) sample pairs.

        Raises ValueError if the block does not have exactly two channels.
        """
        if self.num_channels != 2:
            raise ValueError(
                "stereo_samples() must only be called for blocks with two channels."
            )
        size = self.block_size
        if len(self.buffer) < 2 * size:
            raise ValueError("block buffer is shorter than two channels of samples")
        return zip(self.buffer[:size], self.buffer[size:2 * size])