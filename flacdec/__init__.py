"""Building blocks for decoding FLAC audio: byte and bit readers, CRC checks, frame headers and sample blocks."""

__version__ = "0.4.3"

__all__ = ["bitstream", "block", "byteio", "crc", "errors", "header"]