# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from wavepcm.audio.buffer import AudioBuffer
from wavepcm.audio.decoder import decode_bytes
from wavepcm.audio.encoder import encode
from wavepcm.observability import logger


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    monkeypatch.setattr(logger, "_enabled", True)
    return lines


def test_log_event_emits_valid_jsonl(captured: list[str]) -> None:
    """
    - log_event emits exactly one JSONL line
    - payload is serialized as-is
    - output sink is patchable
    """
    payload: dict[str, Any] = {
        "ts_ms": 1,
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    assert len(captured) == 1
    assert json.loads(captured[0]) == payload


def test_log_event_adds_timestamp(captured: list[str]) -> None:
    logger.log_event({"event_type": "TEST"})

    decoded = json.loads(captured[0])
    assert isinstance(decoded["ts_ms"], int)
    assert decoded["event_type"] == "TEST"


def test_log_event_never_raises_on_unserializable(captured: list[str]) -> None:
    logger.log_event({"ts_ms": 1, "event_type": "TEST", "obj": object()})

    decoded = json.loads(captured[0])
    assert decoded["event_type"] == "LOGGER_SERIALIZATION_ERROR"


def test_disabled_logger_is_silent(monkeypatch: pytest.MonkeyPatch) -> None:
    lines: list[str] = []
    monkeypatch.setattr(logger, "_print", lines.append)
    monkeypatch.setattr(logger, "_enabled", False)

    logger.log_event({"event_type": "TEST"})

    assert lines == []


def test_codec_emits_encode_and_decode_events(captured: list[str]) -> None:
    raw = encode(AudioBuffer.from_pcm16([1, 2, 3, 4], 8000, 2))
    decode_bytes(raw)

    events = [json.loads(line) for line in captured]
    assert [e["event_type"] for e in events] == ["wave_encoded", "wave_decoded"]
    assert events[0]["total_bytes"] == 52
    assert events[1]["frame_count"] == 2
    assert events[1]["dropped_bytes"] == 0


def test_configure_to_stderr(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(logger, "_enabled", False)
    monkeypatch.setattr(logger, "_print", logger._print)

    logger.configure(enabled=True, to_stderr=True)
    logger.log_event({"ts_ms": 1, "event_type": "TEST"})

    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err) == {"ts_ms": 1, "event_type": "TEST"}
