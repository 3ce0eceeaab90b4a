"""
File-path convenience wrappers around the codec.

Each call opens and closes its own handle; a decode error still closes it.
"""

from __future__ import annotations

from pathlib import Path

from wavepcm.audio.buffer import AudioBuffer
from wavepcm.audio.decoder import decode
from wavepcm.audio.encoder import encode_to


def load(path: str | Path, *, strict: bool = False) -> AudioBuffer:
    with open(path, "rb") as f:
        return decode(f, strict=strict)


def save(buffer: AudioBuffer, path: str | Path) -> int:
    """Write `buffer` to `path`, replacing any existing file. Returns bytes written."""
    with open(path, "wb") as f:
        return encode_to(buffer, f)
