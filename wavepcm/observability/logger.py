"""
JSONL event logger.

- Write one JSON object per line
- Output to stdout, or stderr when configured for the CLI
- No buffering, no batching
- Disabled by default; the CLI turns it on from CodecConfig
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Mapping, Callable


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()

def _stderr_print(line: str) -> None:
    sys.stderr.write(line + "\n")
    sys.stderr.flush()

_print: Callable[[str], None] = _stdout_print

_enabled: bool = False


def configure(*, enabled: bool, to_stderr: bool = False) -> None:
    """
    Turn event emission on or off for the whole process.

    to_stderr keeps stdout free for command output (the CLI sets it).
    """
    global _enabled, _print
    _enabled = enabled
    _print = _stderr_print if to_stderr else _stdout_print


def is_enabled() -> bool:
    return _enabled


def now_ms() -> int:
    return int(time.time() * 1000)


def log_event(event: Mapping[str, Any]) -> None:
    """
    Write a single JSONL event to the configured sink.

    The caller supplies a fully-formed event dict including event_type.
    ts_ms is added when missing.

    This function:
    - Serializes to JSON
    - Writes exactly one line
    - Flushes immediately (no buffering)
    - Never raises
    """
    if not _enabled:
        return

    if "ts_ms" not in event:
        event = {"ts_ms": now_ms(), **event}

    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Last-resort fallback; logging must never crash a decode
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
