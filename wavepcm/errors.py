"""
Exception taxonomy for the WAVE codec.

All codec failures derive from WaveError so callers can catch one type.
Decode errors are terminal: no partial buffer is ever returned.
"""

from __future__ import annotations


class WaveError(Exception):
    """Base class for WAVE codec errors."""


class ChannelMismatch(WaveError, ValueError):
    """
    Raised when a sample sequence cannot be divided into whole frames.

    Covers len(samples) % channels != 0, a channel count below 1, and
    joining mono buffers of unequal length.
    """


class EncodeError(WaveError):
    """
    Raised when a buffer cannot be described by a canonical header.

    Only reachable when the data size overflows the u32 RIFF size fields.
    """


class DecodeError(WaveError):
    """Base class for errors raised while decoding a WAVE byte stream."""


class Truncated(DecodeError):
    """
    Raised when the stream ends early.

    Either no "data" chunk was found before end of stream, or the body held
    fewer bytes than the declared sample count.
    """


class UnsupportedBitDepth(DecodeError):
    """Raised when the fmt chunk declares a depth other than 8 or 16 bits."""


class MalformedHeader(DecodeError):
    """Raised when the fmt chunk declares zero channels or a zero sample rate."""


class BadMagic(DecodeError):
    """Raised in strict mode when a RIFF, WAVE or fmt tag does not match."""


class UnsupportedFormat(DecodeError):
    """Raised in strict mode when the fmt format tag is not linear PCM (1)."""
