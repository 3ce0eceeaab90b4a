"""
Sample-domain transforms (pure).

Every function takes AudioBuffer values and returns new ones; inputs are
never modified. sampling_rate and bits_per_sample carry over unchanged
unless the transform is about bit depth.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from wavepcm.audio.buffer import AudioBuffer
from wavepcm.audio.conversion import narrow_array, widen_array
from wavepcm.constants import SUPPORTED_BIT_DEPTHS
from wavepcm.errors import ChannelMismatch


def _derive(source: AudioBuffer, samples: np.ndarray, *, channels: int) -> AudioBuffer:
    return AudioBuffer(
        sampling_rate=source.sampling_rate,
        bits_per_sample=source.bits_per_sample,
        channels=channels,
        samples=samples,
    )


# -------------------------
# Channel layout
# -------------------------

def split(buffer: AudioBuffer) -> list[AudioBuffer]:
    """
    Deinterleave into one mono buffer per channel.

    Frame i, channel c lands at result[c].samples[i].
    """
    frames = buffer.frames()
    return [
        _derive(buffer, np.ascontiguousarray(frames[:, c]), channels=1)
        for c in range(buffer.channels)
    ]


def join_channels(buffers: Sequence[AudioBuffer]) -> AudioBuffer:
    """
    Interleave mono buffers into one multi-channel buffer (inverse of split).

    Raises:
        ValueError if no buffers are given, or rates / bit depths differ.
        ChannelMismatch if an input is not mono or frame counts differ.
    """
    if not buffers:
        raise ValueError("join_channels requires at least one buffer")

    first = buffers[0]
    for b in buffers:
        if b.channels != 1:
            raise ChannelMismatch(f"join_channels expects mono inputs, got {b.channels} channels")
        if b.frame_count != first.frame_count:
            raise ChannelMismatch(
                f"frame counts differ: {b.frame_count} != {first.frame_count}"
            )
        if b.sampling_rate != first.sampling_rate:
            raise ValueError(
                f"sampling rates differ: {b.sampling_rate} != {first.sampling_rate}"
            )
        if b.bits_per_sample != first.bits_per_sample:
            raise ValueError(
                f"bit depths differ: {b.bits_per_sample} != {first.bits_per_sample}"
            )

    interleaved = np.column_stack([b.samples for b in buffers]).reshape(-1)
    return _derive(first, interleaved, channels=len(buffers))


def to_monaural(buffer: AudioBuffer) -> AudioBuffer:
    """
    Downmix to one channel by averaging each frame.

    The mean is truncated toward zero ([1, 2] -> 1, [-1, -2] -> -1).
    The mean of int16 values is itself in int16 range, so no clipping occurs.
    """
    sums = buffer.frames().astype(np.int64).sum(axis=1)
    means = np.sign(sums) * (np.abs(sums) // buffer.channels)
    return _derive(buffer, means.astype(np.int16), channels=1)


# -------------------------
# Time range
# -------------------------

def extract(buffer: AudioBuffer, start_ms: int, length_ms: int) -> AudioBuffer:
    """
    Cut [start_ms, start_ms + length_ms) out of the buffer.

    Millisecond offsets become frames via ms * sampling_rate // 1000.
    A range running past the end is clamped to the last frame; a start past
    the end yields an empty buffer. Neither is an error.

    Raises:
        ValueError if start_ms or length_ms is negative.
    """
    if start_ms < 0 or length_ms < 0:
        raise ValueError(f"start_ms and length_ms must be >= 0, got {start_ms}, {length_ms}")

    start = start_ms * buffer.sampling_rate // 1000
    length = length_ms * buffer.sampling_rate // 1000

    if start + length > buffer.frame_count:
        length = max(buffer.frame_count - start, 0)

    ch = buffer.channels
    return _derive(buffer, buffer.samples[start * ch:(start + length) * ch], channels=ch)


# -------------------------
# Bit depth
# -------------------------

def convert_bit_depth(buffer: AudioBuffer, bits_per_sample: int) -> AudioBuffer:
    """
    Retag a buffer to 8 or 16 bits.

    Going to 8 bits quantizes the samples (narrow, then widen) so the buffer
    holds exactly what an 8-bit encode/decode cycle would produce. Going to
    16 bits keeps the samples.
    """
    if bits_per_sample not in SUPPORTED_BIT_DEPTHS:
        raise ValueError(
            f"bits_per_sample must be one of {SUPPORTED_BIT_DEPTHS}, got {bits_per_sample}"
        )

    samples = buffer.samples
    if bits_per_sample == 8:
        samples = widen_array(narrow_array(samples))

    return AudioBuffer(
        sampling_rate=buffer.sampling_rate,
        bits_per_sample=bits_per_sample,
        channels=buffer.channels,
        samples=samples,
    )
