# tests/test_make_tone.py
import pytest

import src.cli.make_tone as make_tone_module
from src.cli.make_tone import make_tone, main
from src.container.riff import parse_header
from src.synth.sine import generate_sine, generate_sweep
from src.utils.constants import HEADER_SIZE


def test_make_tone_defaults(tmp_path):
    path = tmp_path / "sound.wav"
    out = make_tone(str(path))
    assert path.read_bytes() == out
    assert len(out) == HEADER_SIZE + 176400
    hdr = parse_header(out)
    assert hdr.sample_rate == 44100
    assert hdr.chunk_size == 176436
    assert hdr.subchunk2_size == 176400
    assert out[HEADER_SIZE:] == generate_sine(261.6256, 88200)

def test_make_tone_sweep(tmp_path):
    path = tmp_path / "sweep.wav"
    out = make_tone(str(path), sr=16000, freq=261.6256, seconds=0.5, end_freq=65.4064)
    assert out[HEADER_SIZE:] == generate_sweep(261.6256, 65.4064, 8000, sample_rate=16000)

    stepped = make_tone(str(path), sr=16000, freq=261.6256, seconds=0.5, end_freq=65.4064, continuous_phase=False)
    assert stepped[HEADER_SIZE:] == generate_sweep(261.6256, 65.4064, 8000, sample_rate=16000, continuous_phase=False)
    assert stepped != out

def test_make_tone_creates_parent_dirs(tmp_path):
    path = tmp_path / "out" / "tones" / "a.wav"
    make_tone(str(path), seconds=0.01)
    assert path.exists()

def test_make_tone_zero_seconds(tmp_path):
    out = make_tone(str(tmp_path / "empty.wav"), seconds=0)
    assert len(out) == HEADER_SIZE
    assert parse_header(out).subchunk2_size == 0

def test_make_tone_rejects_negative_duration(tmp_path):
    path = tmp_path / "neg.wav"
    with pytest.raises(ValueError):
        make_tone(str(path), seconds=-1.0)
    assert not path.exists()

def test_make_tone_rounds_sample_count(tmp_path):
    # 44100 * 0.35 is 15434.999... in floating point
    out = make_tone(str(tmp_path / "short.wav"), sr=44100, freq=440.0, seconds=0.35)
    assert parse_header(out).subchunk2_size == 2 * 15435
    out = make_tone(str(tmp_path / "short.wav"), sr=48000, freq=440.0, seconds=0.29)
    assert parse_header(out).subchunk2_size == 2 * 13920

@pytest.mark.parametrize("seconds", [float("inf"), float("nan")])
def test_make_tone_rejects_non_finite_duration(tmp_path, seconds):
    path = tmp_path / "inf.wav"
    with pytest.raises(ValueError, match="finite"):
        make_tone(str(path), seconds=seconds)
    assert not path.exists()

def test_make_tone_rejects_oversized_file_before_generating(tmp_path, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("samples generated for a file that cannot be written")
    monkeypatch.setattr(make_tone_module, "generate_sine", fail)
    monkeypatch.setattr(make_tone_module, "generate_sweep", fail)

    path = tmp_path / "huge.wav"
    with pytest.raises(ValueError, match="too large"):
        make_tone(str(path), sr=44100, seconds=100000)
    with pytest.raises(ValueError, match="too large"):
        make_tone(str(path), sr=44100, seconds=100000, end_freq=880.0)
    assert not path.exists()

def test_make_tone_write_failure_propagates(tmp_path):
    # a directory cannot be opened for writing
    with pytest.raises(OSError):
        make_tone(str(tmp_path), seconds=0.01)

def test_cli_writes_file(tmp_path, capsys):
    path = tmp_path / "cli.wav"
    rc = main(["--out", str(path), "--sr", "8000", "--freq", "440", "--seconds", "0.25"])
    assert rc == 0
    hdr = parse_header(path.read_bytes())
    assert hdr.sample_rate == 8000
    assert hdr.subchunk2_size == 4000
    assert "Saved sound file" in capsys.readouterr().out

def test_cli_sweep_step_phase(tmp_path):
    path = tmp_path / "cli_sweep.wav"
    main(["--out", str(path), "--sr", "8000", "--freq", "440", "--end_freq", "880", "--seconds", "0.1", "--step_phase"])
    data = path.read_bytes()
    assert data[HEADER_SIZE:] == generate_sweep(440.0, 880.0, 800, sample_rate=8000, continuous_phase=False)

@pytest.mark.parametrize("argv", [
    ["--freq", "0"],
    ["--freq", "-5"],
    ["--sr", "0"],
    ["--seconds", "-1"],
    ["--end_freq", "0"],
    ["--seconds", "inf"],
    ["--seconds", "nan"],
    ["--seconds", "100000"],
])
def test_cli_rejects_bad_parameters(tmp_path, argv):
    path = tmp_path / "bad.wav"
    with pytest.raises(SystemExit) as exc:
        main(["--out", str(path)] + argv)
    assert exc.value.code == 2
    assert not path.exists()
