# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from pathlib import Path

import pytest

from wavepcm.audio.buffer import AudioBuffer
from wavepcm.audio.files import load, save
from wavepcm.cli import main
from wavepcm.errors import Truncated
from wavepcm.observability import logger


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    # main() reconfigures the logger; monkeypatch restores it afterwards
    monkeypatch.setattr(logger, "_enabled", False)
    monkeypatch.setattr(logger, "_print", logger._print)
    monkeypatch.setenv("WAVEPCM_JSON_LOGS", "0")
    monkeypatch.delenv("WAVEPCM_STRICT_HEADER", raising=False)


@pytest.fixture
def stereo_wav(tmp_path: Path) -> Path:
    path = tmp_path / "stereo.wav"
    # 2000 frames at 1 kHz: 2 seconds
    samples = [v for i in range(2000) for v in (i, -i)]
    save(AudioBuffer.from_pcm16(samples, 1000, 2), path)
    return path


# ---------------------------------------------------------------------
# load / save
# ---------------------------------------------------------------------

def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "out.wav"
    buf = AudioBuffer.from_pcm16([1, 2, 3, 4], 8000, 2)

    written = save(buf, path)

    assert written == 52
    assert path.stat().st_size == 52
    assert load(path).samples.tolist() == [1, 2, 3, 4]


def test_load_truncated_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "bad.wav"
    path.write_bytes(b"RIFF\x00\x00")

    with pytest.raises(Truncated):
        load(path)


# ---------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------

def test_info(stereo_wav: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["info", str(stereo_wav)]) == 0

    info = json.loads(capsys.readouterr().out)
    assert info["channels"] == 2
    assert info["frame_count"] == 2000
    assert info["duration_ms"] == 2000
    assert info["bits_per_sample"] == 16


def test_split(stereo_wav: Path, tmp_path: Path) -> None:
    prefix = tmp_path / "part"

    assert main(["split", str(stereo_wav), str(prefix)]) == 0

    left = load(f"{prefix}.ch0.wav")
    right = load(f"{prefix}.ch1.wav")
    assert left.samples[:3].tolist() == [0, 1, 2]
    assert right.samples[:3].tolist() == [0, -1, -2]


def test_mono(stereo_wav: Path, tmp_path: Path) -> None:
    out = tmp_path / "mono.wav"

    assert main(["mono", str(stereo_wav), str(out)]) == 0

    mono = load(out)
    assert mono.channels == 1
    assert set(mono.samples.tolist()) == {0}


def test_extract(stereo_wav: Path, tmp_path: Path) -> None:
    out = tmp_path / "cut.wav"

    assert main(["extract", str(stereo_wav), str(out), "--start-ms", "100", "--length-ms", "50"]) == 0

    cut = load(out)
    assert cut.frame_count == 50
    assert cut.samples[:2].tolist() == [100, -100]


def test_convert(stereo_wav: Path, tmp_path: Path) -> None:
    out = tmp_path / "eight.wav"

    assert main(["convert", str(stereo_wav), str(out), "--bits", "8"]) == 0

    eight = load(out)
    assert eight.bits_per_sample == 8
    assert out.stat().st_size == 44 + 4000


def test_codec_error_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "bad.wav"
    bad.write_bytes(b"RIFF")

    assert main(["info", str(bad)]) == 1
    assert "wavepcm:" in capsys.readouterr().err


def test_strict_header_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "sloppy.wav"
    save(AudioBuffer.from_pcm16([1, 2], 8000, 1), path)
    raw = bytearray(path.read_bytes())
    raw[0:4] = b"RIFX"
    path.write_bytes(bytes(raw))

    assert main(["info", str(path)]) == 0

    monkeypatch.setenv("WAVEPCM_STRICT_HEADER", "1")
    assert main(["info", str(path)]) == 1


def test_usage_error_exits_2() -> None:
    with pytest.raises(SystemExit) as exc:
        main(["convert", "a.wav", "b.wav", "--bits", "24"])

    assert exc.value.code == 2


def test_info_prints_one_line_with_default_logging(
    stereo_wav: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("WAVEPCM_JSON_LOGS", raising=False)

    assert main(["info", str(stereo_wav)]) == 0

    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["frame_count"] == 2000

    events = [json.loads(line) for line in captured.err.splitlines()]
    assert [e["event_type"] for e in events] == ["wave_decoded"]


def test_missing_input_file_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["info", str(tmp_path / "missing.wav")]) == 1
    assert "wavepcm:" in capsys.readouterr().err
