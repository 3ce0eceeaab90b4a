"""
WAVE encoder.

Always writes the canonical 44-byte PCM header:

    RIFF  <data_size + 36>  WAVE
    fmt   16  1  channels  rate  byte_rate  block_align  bits
    data  <data_size>

followed by the body: 16-bit buffers as little-endian int16 words,
8-bit buffers narrowed back to unsigned bytes. No other chunks are emitted.
"""

from __future__ import annotations

from typing import BinaryIO

from wavepcm.audio.buffer import AudioBuffer
from wavepcm.audio.conversion import narrow_array
from wavepcm.constants import DATA_TAG, RIFF_SIZE_OVERHEAD, U16_MAX, U32_MAX
from wavepcm.errors import EncodeError
from wavepcm.observability.logger import log_event
from wavepcm.protocol.chunks import ChunkHeader, FormatChunk, RiffHeader


def build_header(
    *,
    frame_count: int,
    channels: int,
    sampling_rate: int,
    bits_per_sample: int,
) -> bytes:
    """
    Build the canonical 44-byte header for a body of `frame_count` frames.

    Raises:
        EncodeError if any header field does not fit its u16/u32 slot.
    """
    data_size = frame_count * (bits_per_sample // 8) * channels
    file_size = data_size + RIFF_SIZE_OVERHEAD
    if file_size > U32_MAX:
        raise EncodeError(f"Data size {data_size} exceeds the RIFF 4 GiB limit")

    fmt = FormatChunk.for_pcm(
        channels=channels,
        sample_rate=sampling_rate,
        bits_per_sample=bits_per_sample,
    )
    for name, value, limit in (
        ("channels", fmt.channels, U16_MAX),
        ("block_align", fmt.block_align, U16_MAX),
        ("sample_rate", fmt.sample_rate, U32_MAX),
        ("byte_rate", fmt.byte_rate, U32_MAX),
    ):
        if value > limit:
            raise EncodeError(f"{name} {value} does not fit the fmt chunk (max {limit})")

    return (
        RiffHeader(file_size=file_size).pack()
        + fmt.pack()
        + ChunkHeader(chunk_id=DATA_TAG, size=data_size).pack()
    )


def encode_body(buffer: AudioBuffer) -> bytes:
    """Raw sample bytes at the buffer's declared width."""
    if buffer.bits_per_sample == 8:
        return narrow_array(buffer.samples).tobytes()
    return buffer.samples.astype("<i2", copy=False).tobytes()


def encode(buffer: AudioBuffer) -> bytes:
    """Encode a buffer as a complete WAVE file."""
    header = build_header(
        frame_count=buffer.frame_count,
        channels=buffer.channels,
        sampling_rate=buffer.sampling_rate,
        bits_per_sample=buffer.bits_per_sample,
    )
    body = encode_body(buffer)

    log_event({
        "event_type": "wave_encoded",
        "sampling_rate": buffer.sampling_rate,
        "bits_per_sample": buffer.bits_per_sample,
        "channels": buffer.channels,
        "frame_count": buffer.frame_count,
        "total_bytes": len(header) + len(body),
    })

    return header + body


def encode_to(buffer: AudioBuffer, sink: BinaryIO) -> int:
    """
    Write a buffer as a complete WAVE file to `sink`.

    Sink errors propagate untouched; the sink is left open.

    Returns:
        Number of bytes written.
    """
    payload = encode(buffer)
    sink.write(payload)
    return len(payload)
