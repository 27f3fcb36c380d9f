import math

import numpy as np
import pytest

from timbreadapter.analysis import (
    AnalysisResult,
    SpectrumSummary,
    analyse_spectrum,
    compute_envelope,
    compute_rms,
    compute_stereo_width,
    compute_zcr,
    detect_dominant_pitch,
    estimate_attack,
    estimate_envelope_type,
    harmonic_midis,
    midi_to_note_name,
    run_analysis,
)

SR = 44100


def _sine(freq, seconds=1.0, amp=0.5):
    t = np.arange(int(SR * seconds)) / SR
    return amp * np.sin(2 * np.pi * freq * t)


def test_rms_of_constant_signal():
    assert compute_rms([0.5] * 100) == pytest.approx(0.5)


def test_rms_of_empty_signal_is_zero():
    assert compute_rms([]) == 0.0


def test_zcr_of_positive_signal_is_zero():
    assert compute_zcr([0.1, 0.2, 0.3, 0.0]) == 0.0


def test_zcr_alternating_signal():
    n = 10
    samples = [1.0 if i % 2 == 0 else -1.0 for i in range(n)]
    assert compute_zcr(samples) == pytest.approx((n - 1) / n)


def test_envelope_is_normalised_and_blocked():
    samples = np.linspace(-0.2, 0.4, 1100)
    env = compute_envelope(samples, 512)
    assert len(env) == math.ceil(1100 / 512)
    assert env.max() == pytest.approx(1.0)
    assert np.all(env >= 0.0)


def test_envelope_rejects_bad_hop():
    with pytest.raises(ValueError):
        compute_envelope([0.1, 0.2], 0)


def test_attack_default_when_threshold_not_reached():
    assert estimate_attack([0.0, 0.05, 0.5], SR, 512) == 0.02


def test_attack_has_minimum():
    assert estimate_attack([0.0, 1.0], SR, 512) == 0.005


def test_attack_grows_with_slower_rise():
    fast = estimate_attack(np.linspace(0, 1, 20), SR, 512)
    slow = estimate_attack(np.linspace(0, 1, 200), SR, 512)
    assert slow > fast


@pytest.mark.parametrize(
    "env, expected",
    [
        ([], "General"),
        ([1.0] + [0.0] * 99, "Pluck / Perc"),
        ([1.0] * 100, "Lead / Key"),
        (list(np.linspace(0.0, 1.0, 100)), "Pad / Swell"),
        ([0.8] * 15 + [1.0] + [0.8] * 84, "Organ / Sustained"),
        ([0.5] * 10 + [1.0] + [0.5] * 89, "General"),
    ],
)
def test_envelope_type(env, expected):
    assert estimate_envelope_type(env) == expected


def test_stereo_width_mono_is_zero():
    assert compute_stereo_width(_sine(440)) == 0.0


def test_stereo_width_identical_channels_is_narrow():
    s = _sine(440)
    assert compute_stereo_width([s, s]) == pytest.approx(0.0, abs=1e-6)


def test_stereo_width_inverted_channels_is_full():
    s = _sine(440)
    assert compute_stereo_width([s, -s]) == pytest.approx(1.0, abs=1e-6)


def test_spectrum_of_short_signal_is_empty():
    assert analyse_spectrum(np.ones(1000), SR) == SpectrumSummary()


def test_spectrum_of_sine_centres_on_tone():
    summary = analyse_spectrum(_sine(1000), SR)
    assert abs(summary.centroid - 1000) < 300
    assert summary.high_ratio < 0.1
    assert summary.motion < 50


def test_noise_is_flatter_and_brighter_than_sine():
    rng = np.random.default_rng(1)
    noise = rng.uniform(-0.5, 0.5, SR)
    sine = analyse_spectrum(_sine(500), SR)
    white = analyse_spectrum(noise, SR)
    assert white.flatness > sine.flatness
    assert white.centroid > sine.centroid
    assert white.peakiness < sine.peakiness


def test_dominant_pitch_of_a440():
    midi, freq = detect_dominant_pitch(_sine(440), SR)
    assert midi == 69
    assert abs(freq - 440) < SR / 4096


def test_dominant_pitch_of_silence_uses_first_bin():
    midi, freq = detect_dominant_pitch(np.zeros(5000), SR)
    assert freq == pytest.approx(SR / 4096)


def test_note_names():
    assert midi_to_note_name(69) == "A4"
    assert midi_to_note_name(-1) == "-"
    assert midi_to_note_name(72)[:-1] == midi_to_note_name(60)[:-1]


def test_harmonics_within_keyboard():
    assert harmonic_midis(60) == [60, 72, 79, 84]
    assert harmonic_midis(90) == [90]
    assert harmonic_midis(20) == []
    for note in harmonic_midis(70):
        assert 48 <= note <= 96


def test_run_analysis_consistency():
    s = _sine(440, seconds=2.0)
    result = run_analysis(s, [s, s], SR)
    assert isinstance(result, AnalysisResult)
    assert result.duration_sec == pytest.approx(2.0)
    assert result.dominant_note == midi_to_note_name(result.dominant_midi)
    assert result.harmonic_midis == harmonic_midis(result.dominant_midi)
    assert result.rms == pytest.approx(compute_rms(s))
    assert result.stereo_width == pytest.approx(0.0, abs=1e-6)


def test_run_analysis_rejects_bad_sample_rate():
    with pytest.raises(ValueError):
        run_analysis([0.0] * 10, [[0.0] * 10], 0)