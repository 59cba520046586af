# flacdec

Pure-Python building blocks for decoding FLAC audio streams. It has no
dependencies outside the standard library.

## What is in the package

- `flacdec.byteio`
  - `ReadBytes`: an abstract byte source with `read_u8`, `read_u8_or_eof`,
    `read_exact`, `skip`, and the integer helpers `read_be_u16`,
    `read_be_u16_or_eof`, `read_be_u24`, `read_be_u32` and `read_le_u32`.
  - `BufferedReader(inner, capacity=2048)`: reads from a binary file object
    in chunks of `capacity` bytes; `into_inner()` returns the wrapped object
    (buffered bytes are discarded).
  - `ByteCursor(data)`: reads from a `bytes`-like object in memory;
    `position()` gives the number of bytes consumed.
- `flacdec.bitstream`
  - `Bitstream(reader)`: reads most-significant-bit first from a `ReadBytes`:
    `read_bit`, `read_unary` (counts zeros up to the next one bit),
    `read_leq_u8`, `read_gt_u8_leq_u16`, `read_leq_u16` and `read_leq_u32`.
    A bit count outside the range a method accepts raises `ValueError`.
- `flacdec.crc`
  - `crc8(data)` and `crc16(data)`: the FLAC checksums (polynomials
    x^8 + x^2 + x + 1 and x^16 + x^15 + x^2 + 1, initial value 0).
  - `Crc8Reader(inner)` and `Crc16Reader(inner)`: `ReadBytes` wrappers that
    checksum every byte read through them; `crc()` returns the value so far.
    `skip` raises `io.UnsupportedOperation`, since skipped bytes would not be
    checksummed.
- `flacdec.header`
  - `read_frame_header_or_eof(reader)`: parses and CRC-checks one frame
    header, returning a `FrameHeader`, or `None` if the stream ends before
    the header begins.
  - `FrameHeader`: a frozen dataclass with `blocking_strategy`
    (`BlockingStrategy.FIXED` or `VARIABLE`), `block_time`, `block_size`,
    `sample_rate`, `channel_assignment` (`ChannelAssignment.INDEPENDENT`,
    `LEFT_SIDE`, `RIGHT_SIDE`, `MID_SIDE`), `bits_per_sample` and
    `independent_channels`; `channels()` and `first_sample_number()` derive
    the channel count and the number of the first sample. A `sample_rate` or
    `bits_per_sample` of `None` means the value is given elsewhere in the
    stream.
  - `read_var_length_int(reader)`: reads FLAC's UTF-8-like coded frame and
    sample numbers (up to 36 bits).
- `flacdec.block`
  - `Block`: decoded samples with the channels stored one after another.
    `Block.empty()`, `Block.from_buffer(time, block_size, buffer)`,
    `len(block)` (samples across all channels), `duration()`, `channels()`,
    `channel(ch)`, `sample(ch, sample)` and `stereo_samples()`, which yields
    `(left, right)` pairs and raises `ValueError` unless there are exactly two
    channels. Out-of-range channel or sample indices raise `IndexError`.
  - `decode_left_side`, `decode_right_side`, `decode_mid_side`: undo FLAC's
    inter-channel decorrelation in place on a buffer holding two channels,
    with signed 32-bit wrap-around.
  - `ensure_buffer_len(buffer, new_len)`: resizes a list in place, padding
    with zeros.
- `flacdec.errors`
  - `FlacError`, with the subclasses `FormatError` (ill-formed stream or a
    reserved value) and `UnsupportedError`. Errors compare equal when they
    have the same type and reason.

Reading past the end of the input raises `EOFError`; other I/O failures
propagate as `OSError`.

## What the package does not do

The package stops at the frame header and the sample block. It does not
decode subframes (constant, verbatim, fixed or LPC prediction, and the
residual coding), does not read the stream marker or metadata blocks such as
STREAMINFO or Vorbis comments, and does not verify a frame's closing CRC-16
for you. It therefore cannot turn a FLAC file into samples by itself, and it
has no command-line program.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from flacdec.byteio import ByteCursor
from flacdec.crc import crc8, crc16
from flacdec.bitstream import Bitstream
from flacdec.block import Block

assert crc8(b"abc") == 0x5F
assert crc16(b"abc") == 0xCADB

cursor = ByteCursor(bytes([0x00, 0x02, 0x81, 0x59]))
assert cursor.read_be_u16() == 2
assert cursor.read_be_u16() == 33113

bits = Bitstream(ByteCursor(bytes([0b1010_0100])))
assert bits.read_bit() is True
assert bits.read_unary() == 1

block = Block.from_buffer(0, 3, [2, 3, 5, 7, 11, 13])
assert list(block.stereo_samples()) == [(2, 7), (3, 11), (5, 13)]
```