import json
import wave

import numpy as np
import pytest

from timbreadapter.audio_io import AudioLoadError
from timbreadapter.cli import analyse_file, main
from timbreadapter.messages import Language, messages_for
from timbreadapter.patch import Patch

RATE = 44100


def _write_wav(path, channels):
    data = np.asarray(channels, dtype=np.float64)
    if data.ndim == 1:
        data = data[np.newaxis, :]
    pcm = np.clip(np.round(data.T * 32767.0), -32768, 32767).astype("<i2")
    with wave.open(str(path), "wb") as writer:
        writer.setnchannels(data.shape[0])
        writer.setsampwidth(2)
        writer.setframerate(RATE)
        writer.writeframes(pcm.tobytes())
    return path


def _sine(freq, seconds, amplitude=0.5):
    t = np.arange(int(RATE * seconds)) / RATE
    return amplitude * np.sin(2.0 * np.pi * freq * t)


@pytest.fixture
def sine_file(tmp_path):
    return _write_wav(tmp_path / "tone.wav", _sine(440.0, 2.0))


def test_analyse_file_finds_pitch(sine_file):
    result = analyse_file(sine_file)
    assert result.dominant_midi == 69
    assert result.dominant_note == "A4"
    assert result.duration_sec == pytest.approx(2.0, abs=1e-6)


def test_analyse_file_identical_channels_have_no_width(tmp_path):
    tone = _sine(440.0, 2.0)
    path = _write_wav(tmp_path / "stereo.wav", [tone, tone])
    assert analyse_file(path).stereo_width == pytest.approx(0.0, abs=1e-6)


def test_analyse_file_inverted_channels_are_wide(tmp_path):
    tone = _sine(440.0, 2.0)
    path = _write_wav(tmp_path / "wide.wav", [tone, -tone])
    assert analyse_file(path).stereo_width == pytest.approx(1.0, abs=1e-3)


def test_analyse_file_rejects_short_clip(tmp_path):
    path = _write_wav(tmp_path / "short.wav", _sine(440.0, 0.5))
    with pytest.raises(AudioLoadError):
        analyse_file(path)


def test_analyse_file_rejects_missing_file(tmp_path):
    with pytest.raises(AudioLoadError):
        analyse_file(tmp_path / "absent.wav")


def test_main_prints_report(sine_file, capsys):
    status = main([str(sine_file)])
    out = capsys.readouterr().out
    assert status == 0
    assert "Patch Snapshot" in out
    assert "Source: tone.wav" in out
    assert messages_for(Language.ENGLISH).analysis_complete_prefix + "tone.wav" in out


def test_main_chinese_report(sine_file, capsys):
    status = main([str(sine_file), "--language", "zh"])
    out = capsys.readouterr().out
    messages = messages_for(Language.CHINESE)
    assert status == 0
    assert messages.brightness_stat in out
    assert messages.analysis_complete_prefix + "tone.wav" in out


def test_main_exports_json(sine_file, tmp_path, capsys):
    target = tmp_path / "snapshot.json"
    status = main([str(sine_file), "--export", str(target)])
    capsys.readouterr()
    assert status == 0
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["source"] == "tone.wav"
    assert list(data) == list(Patch().to_dict("tone.wav"))
    assert all(0.0 <= value <= 100.0 for key, value in data.items() if key != "source")


def test_main_reports_bad_duration(tmp_path, capsys):
    path = _write_wav(tmp_path / "short.wav", _sine(440.0, 0.5))
    status = main([str(path)])
    err = capsys.readouterr().err
    assert status == 1
    assert messages_for(Language.ENGLISH).duration_error in err


def test_main_reports_unreadable_file(tmp_path, capsys):
    path = tmp_path / "junk.wav"
    path.write_bytes(b"not audio at all")
    status = main([str(path), "--language", "zh"])
    err = capsys.readouterr().err
    assert status == 1
    assert messages_for(Language.CHINESE).open_failed in err