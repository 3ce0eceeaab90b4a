"""
WIRE-FORMAT CONSTANTS
---------------------
Single source of truth for the RIFF/WAVE layout and sample ranges.

Rules:
- If changing a value changes bytes on the wire, it belongs here.
- No magic numbers elsewhere in the codebase.
- Other modules MUST import from this file.
"""

from __future__ import annotations

from typing import Final, Tuple

# =============================================================================
# Chunk tags (ASCII, 4 bytes each)
# =============================================================================

RIFF_TAG: Final[bytes] = b"RIFF"
WAVE_TAG: Final[bytes] = b"WAVE"
FMT_TAG: Final[bytes] = b"fmt "
DATA_TAG: Final[bytes] = b"data"

CHUNK_ID_BYTES: Final[int] = 4

# =============================================================================
# Header sizes (canonical 44-byte PCM header)
# =============================================================================

RIFF_HEADER_BYTES: Final[int] = 12          # "RIFF" + u32 file_size + "WAVE"
FMT_CHUNK_BYTES: Final[int] = 24            # "fmt " + u32 size + 16-byte body
FMT_BODY_BYTES: Final[int] = 16             # canonical fmt body, no extension
CHUNK_HEADER_BYTES: Final[int] = 8          # 4-byte id + u32 size
CANONICAL_HEADER_BYTES: Final[int] = (
    RIFF_HEADER_BYTES + FMT_CHUNK_BYTES + CHUNK_HEADER_BYTES
)

# file_size field counts everything after the first 8 bytes of the header,
# minus the data body: "WAVE" + fmt chunk + data chunk header.
RIFF_SIZE_OVERHEAD: Final[int] = CANONICAL_HEADER_BYTES - CHUNK_HEADER_BYTES

U16_MAX: Final[int] = 2**16 - 1
U32_MAX: Final[int] = 2**32 - 1

# =============================================================================
# PCM format
# =============================================================================

PCM_FORMAT_TAG: Final[int] = 1
SUPPORTED_BIT_DEPTHS: Final[Tuple[int, ...]] = (8, 16)

# =============================================================================
# Sample ranges
# =============================================================================

INT16_MIN: Final[int] = -32768
INT16_MAX: Final[int] = 32767
UINT8_MAX: Final[int] = 255

PCM8_SILENCE: Final[int] = 128

# Scale factors used by the 8<->16 bit mapping.
# 256 = 2**8 and 65536 = 2**16 unsigned code points.
UINT8_SPAN: Final[int] = UINT8_MAX + 1
UINT16_SPAN: Final[int] = 65536
