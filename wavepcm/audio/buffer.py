"""
In-memory audio buffer.

Pure data container plus construction-time validation.
No I/O, no encoding, no transforms (see decoder.py, encoder.py,
transforms.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from wavepcm.audio.conversion import normalize_array, widen_array
from wavepcm.constants import INT16_MAX, INT16_MIN, SUPPORTED_BIT_DEPTHS
from wavepcm.errors import ChannelMismatch


def _as_int16(samples: Iterable[int] | np.ndarray) -> np.ndarray:
    arr = np.asarray(samples if isinstance(samples, np.ndarray) else list(samples))
    if arr.size == 0:
        return np.zeros(0, dtype=np.int16)
    if arr.ndim != 1:
        raise ValueError(f"samples must be one-dimensional, got shape {arr.shape}")
    if arr.dtype == np.int16:
        return arr.copy()
    if not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"samples must be integers, got dtype {arr.dtype}")
    if arr.min() < INT16_MIN or arr.max() > INT16_MAX:
        raise ValueError("16-bit samples must lie in [-32768, 32767]")
    return arr.astype(np.int16)


@dataclass(frozen=True, eq=False)
class AudioBuffer:
    """
    Interleaved PCM audio, always held as signed 16-bit samples.

    sampling_rate:
        Frames per second (Hz). Must be > 0.

    bits_per_sample:
        Original width, 8 or 16. Samples are stored as int16 either way;
        this only decides the width used on encode.

    channels:
        Channel count (>= 1). Samples are interleaved frame-major:
        ch0, ch1, ..., ch0, ch1, ...

    samples:
        Read-only int16 numpy array. Its length must be a multiple of
        `channels`.
    """
    sampling_rate: int
    bits_per_sample: int
    channels: int
    samples: np.ndarray

    def __post_init__(self) -> None:
        if self.channels < 1:
            raise ChannelMismatch(f"channels must be >= 1, got {self.channels}")
        if self.sampling_rate <= 0:
            raise ValueError(f"sampling_rate must be > 0, got {self.sampling_rate}")
        if self.bits_per_sample not in SUPPORTED_BIT_DEPTHS:
            raise ValueError(
                f"bits_per_sample must be one of {SUPPORTED_BIT_DEPTHS}, "
                f"got {self.bits_per_sample}"
            )

        arr = _as_int16(self.samples)
        if arr.size % self.channels != 0:
            raise ChannelMismatch(
                f"{arr.size} samples do not divide into {self.channels} channels"
            )
        arr.flags.writeable = False
        object.__setattr__(self, "samples", arr)

    # -------------------------
    # Constructors
    # -------------------------

    @classmethod
    def from_pcm16(
        cls,
        samples: Iterable[int] | np.ndarray,
        sampling_rate: int,
        channels: int,
    ) -> AudioBuffer:
        """Build from signed 16-bit samples in [-32768, 32767], silence at 0."""
        return cls(
            sampling_rate=sampling_rate,
            bits_per_sample=16,
            channels=channels,
            samples=samples,
        )

    @classmethod
    def from_pcm8(
        cls,
        data: bytes | Iterable[int] | np.ndarray,
        sampling_rate: int,
        channels: int,
    ) -> AudioBuffer:
        """
        Build from unsigned 8-bit samples in [0, 255], silence at 128.

        Samples are widened to 16-bit internally; bits_per_sample stays 8.
        """
        if not isinstance(data, (bytes, bytearray, np.ndarray)):
            data = np.asarray(list(data))
        return cls(
            sampling_rate=sampling_rate,
            bits_per_sample=8,
            channels=channels,
            samples=widen_array(data),
        )

    @classmethod
    def from_float(
        cls,
        values: Iterable[float] | np.ndarray,
        range_max: float,
        sampling_rate: int,
        channels: int,
    ) -> AudioBuffer:
        """Build from float samples scaled so that +/-range_max maps to +/-32767."""
        if not isinstance(values, np.ndarray):
            values = np.asarray(list(values), dtype=np.float32)
        return cls(
            sampling_rate=sampling_rate,
            bits_per_sample=16,
            channels=channels,
            samples=normalize_array(values, range_max),
        )

    # -------------------------
    # Derived values
    # -------------------------

    @property
    def frame_count(self) -> int:
        return self.samples.size // self.channels

    @property
    def duration_ms(self) -> int:
        """
        Whole seconds of audio, in milliseconds.

        Integer division happens before the multiply, so anything under one
        second reports 0.
        """
        return self.frame_count // self.sampling_rate * 1000

    @property
    def bytes_per_sample(self) -> int:
        return self.bits_per_sample // 8

    def frames(self) -> np.ndarray:
        """Read-only (frame_count, channels) view of the samples."""
        return self.samples.reshape(self.frame_count, self.channels)

    def __len__(self) -> int:
        return self.frame_count

    def __repr__(self) -> str:
        return (
            f"AudioBuffer(sampling_rate={self.sampling_rate}, "
            f"bits_per_sample={self.bits_per_sample}, channels={self.channels}, "
            f"frame_count={self.frame_count})"
        )
