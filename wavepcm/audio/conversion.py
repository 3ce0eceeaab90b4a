"""
Sample-width conversion.

8-bit PCM is unsigned with silence at 128; 16-bit PCM is signed with
silence at 0. The mappings below are affine, not bit shifts, and are kept
bit-for-bit with files written by earlier tooling:

    widen:   t = byte / 256 * 65536 - 1        -> trunc(t - 32767)
    narrow:  t = sample / 65536 * 256          -> trunc(t + 128)

Observed behavior (pinned in tests):
- widen(b) == 256 * b - 32768 for every byte, so widen(0) = -32768,
  widen(128) = 0 and widen(255) = 32512 (the top of the int16 range is
  never produced)
- narrow(widen(b)) == b for every byte
- narrow rounds toward zero before the +128 offset, so narrow(-1) = 127

Each conversion has a scalar form and a numpy array form with identical
arithmetic.
"""

from __future__ import annotations

import math

import numpy as np

from wavepcm.constants import (
    INT16_MAX,
    INT16_MIN,
    PCM8_SILENCE,
    UINT8_MAX,
    UINT8_SPAN,
    UINT16_SPAN,
)


# -------------------------
# Scalar forms
# -------------------------

def widen_8_to_16(value: int) -> int:
    """Map an unsigned 8-bit sample [0, 255] onto signed 16-bit."""
    if not 0 <= value <= UINT8_MAX:
        raise ValueError(f"8-bit sample out of range: {value}")
    t = value / UINT8_SPAN * UINT16_SPAN - 1
    return int(t - INT16_MAX)


def narrow_16_to_8(value: int) -> int:
    """Map a signed 16-bit sample onto unsigned 8-bit [0, 255]."""
    if not INT16_MIN <= value <= INT16_MAX:
        raise ValueError(f"16-bit sample out of range: {value}")
    t = value / UINT16_SPAN * UINT8_SPAN
    return int(t + PCM8_SILENCE)


def normalize_float_to_i16(value: float, range_max: float) -> int:
    """
    Scale a float sample in [-range_max, range_max] to signed 16-bit.

    Computed in single precision, truncated toward zero. Results outside
    the int16 range saturate.
    """
    return int(normalize_array(np.asarray([value]), range_max)[0])


# -------------------------
# Array forms
# -------------------------

def widen_array(data: np.ndarray | bytes | bytearray) -> np.ndarray:
    """Vectorized widen_8_to_16. Accepts raw bytes or an integer array."""
    if isinstance(data, (bytes, bytearray, memoryview)):
        raw = np.frombuffer(data, dtype=np.uint8)
    else:
        raw = np.asarray(data)
        if raw.size and (raw.min() < 0 or raw.max() > UINT8_MAX):
            raise ValueError("8-bit samples must lie in [0, 255]")

    t = raw.astype(np.float64) / UINT8_SPAN * UINT16_SPAN - 1
    return np.trunc(t - INT16_MAX).astype(np.int16)


def narrow_array(samples: np.ndarray) -> np.ndarray:
    """Vectorized narrow_16_to_8. Returns a uint8 array."""
    s = np.asarray(samples, dtype=np.int16)
    t = s.astype(np.float64) / UINT16_SPAN * UINT8_SPAN
    return np.trunc(t + PCM8_SILENCE).astype(np.uint8)


def normalize_array(values: np.ndarray, range_max: float) -> np.ndarray:
    """Vectorized normalize_float_to_i16."""
    if range_max == 0 or math.isnan(range_max):
        raise ValueError(f"range_max must be a non-zero number, got {range_max}")

    v = np.asarray(values, dtype=np.float32)
    if np.isnan(v).any():
        raise ValueError("float samples must not be NaN")

    scaled = v / np.float32(range_max) * np.float32(INT16_MAX)
    # Clip in float space first; casting out-of-range floats is undefined.
    clipped = np.clip(np.trunc(scaled), INT16_MIN, INT16_MAX)
    return clipped.astype(np.int16)
