"""
WAVE decoder.

Pipeline:
    RIFF header -> fmt chunk (+ extension skip) -> chunk scan to "data"
    -> raw sample read (8 or 16 bit) -> AudioBuffer (int16 samples)

Leniency:
- Default mode does not check the RIFF/WAVE/fmt tags or the format tag,
  matching files produced by tools that write sloppy headers.
- strict=True rejects bad tags (BadMagic) and non-PCM formats
  (UnsupportedFormat).

Silent clamps (not errors):
- Trailing data-chunk bytes that do not fill a whole frame are dropped.
- Chunks are skipped by their declared size without RIFF pad bytes.

The stream is read, never closed; its owner decides its lifetime.
"""

from __future__ import annotations

import io
from typing import BinaryIO

import numpy as np

from wavepcm.audio.buffer import AudioBuffer
from wavepcm.audio.conversion import widen_array
from wavepcm.constants import (
    CHUNK_ID_BYTES,
    DATA_TAG,
    FMT_CHUNK_BYTES,
    FMT_TAG,
    PCM_FORMAT_TAG,
    RIFF_HEADER_BYTES,
    SUPPORTED_BIT_DEPTHS,
)
from wavepcm.errors import (
    BadMagic,
    MalformedHeader,
    Truncated,
    UnsupportedBitDepth,
    UnsupportedFormat,
)
from wavepcm.observability.logger import log_event
from wavepcm.protocol.binary import read_exact, read_u32_le, skip_bytes
from wavepcm.protocol.chunks import FormatChunk, RiffHeader


def decode(stream: BinaryIO, *, strict: bool = False) -> AudioBuffer:
    """
    Decode a complete WAVE byte stream into an AudioBuffer.

    Args:
        stream:
            Readable binary stream positioned at the RIFF header.
            Seekable streams skip unknown chunks with seek(); others read.
        strict:
            Validate RIFF/WAVE/fmt tags and the PCM format tag.

    Raises:
        Truncated if the stream ends before the data chunk or its samples.
        UnsupportedBitDepth if bits_per_sample is not 8 or 16.
        MalformedHeader if the fmt chunk declares zero channels or a zero rate.
        BadMagic / UnsupportedFormat in strict mode.
    """
    riff = RiffHeader.unpack(read_exact(stream, RIFF_HEADER_BYTES, what="RIFF header"))
    if strict and not riff.is_valid:
        raise BadMagic(f"Not a RIFF/WAVE stream: {riff.riff_tag!r} / {riff.wave_tag!r}")

    fmt = FormatChunk.unpack(read_exact(stream, FMT_CHUNK_BYTES, what="fmt chunk"))
    if strict:
        if fmt.chunk_id != FMT_TAG:
            raise BadMagic(f"Expected fmt chunk, got {fmt.chunk_id!r}")
        if fmt.format_tag != PCM_FORMAT_TAG:
            raise UnsupportedFormat(f"Format tag {fmt.format_tag} is not linear PCM")

    # Extended fmt body (e.g. cbSize) is not interpreted
    skip_bytes(stream, fmt.extension_bytes)

    _seek_data_chunk(stream)

    if fmt.bits_per_sample not in SUPPORTED_BIT_DEPTHS:
        raise UnsupportedBitDepth(f"Unsupported bits_per_sample: {fmt.bits_per_sample}")
    if fmt.channels == 0:
        raise MalformedHeader("fmt chunk declares 0 channels")
    if fmt.sample_rate == 0:
        raise MalformedHeader("fmt chunk declares a sample rate of 0")

    data_size = read_u32_le(read_exact(stream, 4, what="data chunk size"))
    bytes_per_sample = fmt.bits_per_sample // 8
    frame_count = data_size // bytes_per_sample // fmt.channels
    sample_count = frame_count * fmt.channels

    body = read_exact(stream, sample_count * bytes_per_sample, what="sample data")

    if fmt.bits_per_sample == 16:
        samples = np.frombuffer(body, dtype="<i2").astype(np.int16)
    else:
        samples = widen_array(body)

    buffer = AudioBuffer(
        sampling_rate=fmt.sample_rate,
        bits_per_sample=fmt.bits_per_sample,
        channels=fmt.channels,
        samples=samples,
    )

    log_event({
        "event_type": "wave_decoded",
        "sampling_rate": buffer.sampling_rate,
        "bits_per_sample": buffer.bits_per_sample,
        "channels": buffer.channels,
        "frame_count": buffer.frame_count,
        "data_size": data_size,
        "dropped_bytes": data_size - len(body),
    })

    return buffer


def decode_bytes(data: bytes | bytearray | memoryview, *, strict: bool = False) -> AudioBuffer:
    """Decode a complete in-memory WAVE file."""
    with io.BytesIO(bytes(data)) as stream:
        return decode(stream, strict=strict)


def _seek_data_chunk(stream: BinaryIO) -> None:
    """
    Advance past every chunk until the "data" id has been consumed.

    Leaves the stream positioned at the data chunk's size field.
    """
    while True:
        try:
            chunk_id = read_exact(stream, CHUNK_ID_BYTES, what="chunk id")
        except Truncated as e:
            raise Truncated("Stream ended before a data chunk was found") from e

        if chunk_id == DATA_TAG:
            return

        size = read_u32_le(read_exact(stream, 4, what="chunk size"))
        log_event({
            "event_type": "chunk_skipped",
            "chunk_id": chunk_id.decode("ascii", errors="replace"),
            "size": size,
        })
        skip_bytes(stream, size)
