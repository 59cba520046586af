"""Exceptions raised while decoding a FLAC stream.

Problems with the underlying input are not wrapped: a stream that ends too
early raises :class:`EOFError`, and other I/O failures raise :class:`OSError`
as usual.
"""

from __future__ import annotations

__all__ = ["FlacError", "FormatError", "UnsupportedError", "INVALID_UTF8_REASON"]

#: Reason used when a vendor string or Vorbis comment is not valid UTF-8.
INVALID_UTF8_REASON = "Vorbis comment or vendor string is not valid UTF-8"


class FlacError(Exception):
    """Base class for errors that prevent successful decoding of a stream."""

    _prefix = ""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    def __str__(self) -> str:
        return f"{self._prefix}{self.reason}"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.reason == other.reason  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.reason))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reason!r})"


class FormatError(FlacError):
    """An ill-formed FLAC stream was encountered.

    Values that the specification marks as reserved are reported with this
    error as well.
    """

    _prefix = "Ill-formed FLAC stream: "


class UnsupportedError(FlacError):
    """A feature in the FLAC specification that is not implemented was found."""

    _prefix = "A currently unsupported feature of the FLAC format was encountered: "