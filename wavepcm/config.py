"""
Codec configuration.

Responsibilities:
- Read environment variables
- Provide a typed, immutable config object

Non-responsibilities:
- No wire-format constants (see constants.py)
- No runtime mutation
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """
    Immutable codec configuration.

    Constructed once at process startup (CLI) and passed downward.
    Library callers may build one directly or ignore it.
    """

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    env: str

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    strict_header: bool

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    enable_json_logs: bool

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @staticmethod
    def load_from_env() -> CodecConfig:
        """
        Load configuration from environment variables.

        All variables are optional.
        """
        return CodecConfig(
            env=os.environ.get("WAVEPCM_ENV", "dev"),
            strict_header=os.environ.get("WAVEPCM_STRICT_HEADER", "0") == "1",
            enable_json_logs=os.environ.get("WAVEPCM_JSON_LOGS", "1") == "1",
        )
