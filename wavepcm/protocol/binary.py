# wavepcm/protocol/binary.py
"""
Little-endian byte primitives for RIFF parsing and synthesis.

Layout conventions:
- u32 fields are little-endian (u16 fields are packed by chunks.py)
- chunk ids are 4 raw ASCII bytes

Usage example:

    raw = read_exact(stream, 4, what="chunk size")
    size = read_u32_le(raw)

    skip_bytes(stream, size)

    payload = u32_le(file_size) + WAVE_TAG
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from wavepcm.errors import Truncated


# -------------------------
# Packing
# -------------------------

def u32_le(value: int) -> bytes:
    return struct.pack("<I", value)


# -------------------------
# Unpacking
# -------------------------

def read_u32_le(buf: bytes, offset: int = 0) -> int:
    return struct.unpack_from("<I", buf, offset)[0]


# -------------------------
# Stream helpers
# -------------------------

def read_exact(stream: BinaryIO, size: int, *, what: str = "bytes") -> bytes:
    """
    Read exactly `size` bytes from `stream`.

    Raises:
        Truncated if the stream ends before `size` bytes were read.
    """
    if size <= 0:
        return b""

    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    data = b"".join(chunks)
    if len(data) != size:
        raise Truncated(f"Stream ended reading {what}: got {len(data)} of {size} bytes")
    return data


def skip_bytes(stream: BinaryIO, size: int) -> None:
    """
    Advance `stream` by `size` bytes without interpreting them.

    Seekable streams are moved with a relative seek; a seek past the end is
    not an error here, the next read reports truncation. Non-seekable
    streams are drained with reads, and running dry raises Truncated.
    """
    if size <= 0:
        return

    if stream.seekable():
        stream.seek(size, io.SEEK_CUR)
        return

    read_exact(stream, size, what="skipped chunk body")
