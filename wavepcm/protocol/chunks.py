# wavepcm/protocol/chunks.py
"""
RIFF/WAVE chunk header definitions.

Canonical layout (all integers little-endian):

    RiffHeader   12 bytes   "RIFF"  u32 file_size  "WAVE"
    FormatChunk  24 bytes   "fmt "  u32 chunk_size  u16 format_tag
                            u16 channels  u32 sample_rate  u32 byte_rate
                            u16 block_align  u16 bits_per_sample
    ChunkHeader   8 bytes   4-byte id  u32 size

Each header is a frozen dataclass with `pack()` and a `unpack()` classmethod.
Unpacking never validates tags; policy lives in the decoder.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from wavepcm.constants import (
    CHUNK_HEADER_BYTES,
    FMT_BODY_BYTES,
    FMT_CHUNK_BYTES,
    FMT_TAG,
    PCM_FORMAT_TAG,
    RIFF_HEADER_BYTES,
    RIFF_TAG,
    WAVE_TAG,
)
from wavepcm.protocol.binary import read_u32_le, u32_le

_FMT_BODY = struct.Struct("<HHIIHH")


def _check_length(buf: bytes, expected: int, name: str) -> None:
    if len(buf) != expected:
        raise ValueError(f"{name} requires {expected} bytes, got {len(buf)}")


@dataclass(frozen=True)
class RiffHeader:
    """
    Leading RIFF header.

    file_size:
        Byte count after the first 8 bytes of the file.
    """
    file_size: int
    riff_tag: bytes = RIFF_TAG
    wave_tag: bytes = WAVE_TAG

    def pack(self) -> bytes:
        return self.riff_tag + u32_le(self.file_size) + self.wave_tag

    @classmethod
    def unpack(cls, buf: bytes) -> RiffHeader:
        _check_length(buf, RIFF_HEADER_BYTES, "RiffHeader")
        return cls(
            file_size=read_u32_le(buf, 4),
            riff_tag=bytes(buf[0:4]),
            wave_tag=bytes(buf[8:12]),
        )

    @property
    def is_valid(self) -> bool:
        return self.riff_tag == RIFF_TAG and self.wave_tag == WAVE_TAG


@dataclass(frozen=True)
class FormatChunk:
    """
    The fmt chunk, canonical 16-byte body only.

    chunk_size may exceed 16 on disk; the extension bytes are not
    represented here and must be skipped by the reader.
    """
    channels: int
    sample_rate: int
    bits_per_sample: int
    byte_rate: int
    block_align: int
    format_tag: int = PCM_FORMAT_TAG
    chunk_size: int = FMT_BODY_BYTES
    chunk_id: bytes = FMT_TAG

    @classmethod
    def for_pcm(cls, *, channels: int, sample_rate: int, bits_per_sample: int) -> FormatChunk:
        """Build a canonical PCM fmt chunk with derived byte_rate and block_align."""
        block_align = (bits_per_sample // 8) * channels
        return cls(
            channels=channels,
            sample_rate=sample_rate,
            bits_per_sample=bits_per_sample,
            byte_rate=sample_rate * block_align,
            block_align=block_align,
        )

    def pack(self) -> bytes:
        return (
            self.chunk_id
            + u32_le(self.chunk_size)
            + _FMT_BODY.pack(
                self.format_tag,
                self.channels,
                self.sample_rate,
                self.byte_rate,
                self.block_align,
                self.bits_per_sample,
            )
        )

    @classmethod
    def unpack(cls, buf: bytes) -> FormatChunk:
        _check_length(buf, FMT_CHUNK_BYTES, "FormatChunk")
        (
            format_tag,
            channels,
            sample_rate,
            byte_rate,
            block_align,
            bits_per_sample,
        ) = _FMT_BODY.unpack_from(buf, 8)
        return cls(
            channels=channels,
            sample_rate=sample_rate,
            bits_per_sample=bits_per_sample,
            byte_rate=byte_rate,
            block_align=block_align,
            format_tag=format_tag,
            chunk_size=read_u32_le(buf, 4),
            chunk_id=bytes(buf[0:4]),
        )

    @property
    def extension_bytes(self) -> int:
        """Bytes following the canonical body (0 for a canonical chunk)."""
        return max(self.chunk_size - FMT_BODY_BYTES, 0)


@dataclass(frozen=True)
class ChunkHeader:
    """Generic 8-byte chunk header (id + size). Used for "data" and skipped chunks."""
    chunk_id: bytes
    size: int

    def pack(self) -> bytes:
        return self.chunk_id + u32_le(self.size)

    @classmethod
    def unpack(cls, buf: bytes) -> ChunkHeader:
        _check_length(buf, CHUNK_HEADER_BYTES, "ChunkHeader")
        return cls(chunk_id=bytes(buf[0:4]), size=read_u32_le(buf, 4))
