"""Timbre feature extraction from mono and multichannel sample buffers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

_NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
_HARMONIC_OFFSETS = (0, 12, 19, 24)
_PREVIEW_LOW = 48
_PREVIEW_HIGH = 96

_SPECTRUM_FFT_SIZE = 1 << 11
_SPECTRUM_HOP = 1024
_PITCH_FFT_SIZE = 1 << 12
_ENVELOPE_HOP = 512
_EPS = 1.0e-12


@dataclass(frozen=True)
class SpectrumSummary:
    """Frame-averaged spectral descriptors."""

    centroid: float = 0.0
    rolloff: float = 0.0
    flatness: float = 0.0
    peakiness: float = 0.0
    high_ratio: float = 0.0
    motion: float = 0.0


@dataclass
class AnalysisResult:
    """Everything the analysis learns about one clip."""

    duration_sec: float = 0.0
    rms: float = 0.0
    zcr: float = 0.0
    attack_time: float = 0.02
    stereo_width: float = 0.0
    centroid: float = 0.0
    rolloff: float = 0.0
    flatness: float = 0.0
    peakiness: float = 0.0
    high_ratio: float = 0.0
    motion: float = 0.0
    dominant_midi: int = -1
    dominant_freq: float = 0.0
    dominant_note: str = "-"
    envelope_type: str = "General"
    harmonic_midis: list[int] = field(default_factory=list)


def _as_samples(samples) -> np.ndarray:
    return np.asarray(samples, dtype=np.float64).reshape(-1)


def _as_channels(channels) -> np.ndarray:
    arr = np.asarray(channels, dtype=np.float64)
    if arr.ndim == 1:
        arr = arr[np.newaxis, :]
    return arr


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _hann(size: int) -> np.ndarray:
    return 0.5 - 0.5 * np.cos(2.0 * math.pi * np.arange(size) / (size - 1))


def compute_rms(samples) -> float:
    """Root mean square of the samples (0 for an empty buffer)."""
    data = _as_samples(samples)
    return math.sqrt(float(np.sum(data * data)) / max(1, data.size))


def compute_zcr(samples) -> float:
    """Fraction of neighbouring sample pairs whose sign differs."""
    data = _as_samples(samples)
    if data.size < 2:
        return 0.0
    positive = data >= 0.0
    changes = int(np.count_nonzero(positive[1:] != positive[:-1]))
    return changes / data.size


def compute_envelope(samples, hop: int) -> np.ndarray:
    """Peak amplitude per block of ``hop`` samples, normalised to a maximum of 1."""
    if hop <= 0:
        raise ValueError("hop must be positive")
    data = np.abs(_as_samples(samples))
    peaks = np.array(
        [block.max() for block in (data[start:start + hop] for start in range(0, data.size, hop))],
        dtype=np.float64,
    )
    max_value = max(1.0e-6, float(peaks.max())) if peaks.size else 1.0e-6
    return peaks / max_value


def estimate_attack(envelope, sample_rate: float, hop: int) -> float:
    """Time in seconds for the envelope to rise from 10% to 90%."""
    idx10 = -1
    idx90 = -1
    for i, value in enumerate(_as_samples(envelope)):
        if idx10 < 0 and value >= 0.1:
            idx10 = i
        if value >= 0.9:
            idx90 = i
            break
    if idx10 < 0 or idx90 < 0:
        return 0.02
    return max(0.005, (idx90 - idx10) * hop / sample_rate)


def estimate_envelope_type(envelope) -> str:
    """Classify the envelope shape into a coarse instrument family."""
    env = _as_samples(envelope)
    size = env.size
    if size == 0:
        return "General"
    peak_index = int(np.argmax(env))
    s0 = int(np.float32(size) * np.float32(0.45))
    s1 = int(np.float32(size) * np.float32(0.75))
    window = env[s0:s1]
    sustain = float(window.mean()) if window.size else 0.5
    if peak_index < size * 0.08 and sustain < 0.35:
        return "Pluck / Perc"
    if peak_index < size * 0.12 and sustain > 0.55:
        return "Lead / Key"
    if peak_index > size * 0.18 and sustain > 0.45:
        return "Pad / Swell"
    if sustain > 0.70:
        return "Organ / Sustained"
    return "General"


def compute_stereo_width(channels) -> float:
    """Width in [0, 1] from the left/right correlation; 0 for mono input."""
    data = _as_channels(channels)
    if data.shape[0] < 2:
        return 0.0
    step = max(1, data.shape[1] // 20000)
    left = data[0, ::step]
    right = data[1, ::step]
    sum_lr = float(np.sum(left * right))
    sum_l2 = float(np.sum(left * left))
    sum_r2 = float(np.sum(right * right))
    corr = sum_lr / math.sqrt(sum_l2 * sum_r2 + _EPS)
    return min(1.0, max(0.0, (1.0 - corr) * 0.5))


def analyse_spectrum(samples, sample_rate: float) -> SpectrumSummary:
    """Average spectral descriptors over Hann-windowed frames of 2048 samples."""
    data = _as_samples(samples)
    size = _SPECTRUM_FFT_SIZE
    if data.size <= size:
        return SpectrumSummary(high_ratio=0.0)

    starts = range(0, data.size - size, _SPECTRUM_HOP)
    frames = np.stack([data[s:s + size] for s in starts]) * _hann(size)
    mags = np.abs(np.fft.rfft(frames, axis=1))[:, 1:size // 2]
    freqs = np.arange(1, size // 2) * sample_rate / size

    cumulative = np.cumsum(mags, axis=1)
    mag_sum = cumulative[:, -1]
    weighted = mags @ freqs
    centroids = np.where(mag_sum > 0.0, weighted / np.where(mag_sum > 0.0, mag_sum, 1.0), 0.0)

    reached = cumulative >= (mag_sum * 0.85)[:, np.newaxis]
    rolloffs = np.where(reached.any(axis=1), freqs[np.argmax(reached, axis=1)], 0.0)

    valid_mask = mags > _EPS
    valid = valid_mask.sum(axis=1)
    log_sum = np.where(valid_mask, np.log(np.where(valid_mask, mags, 1.0)), 0.0).sum(axis=1)
    flat_ok = (valid > 0) & (mag_sum > 0.0)
    safe_valid = np.maximum(valid, 1)
    flatness = np.where(
        flat_ok,
        np.exp(log_sum / safe_valid) / np.where(flat_ok, mag_sum / safe_valid, 1.0),
        0.0,
    )
    max_mag = np.maximum(mags.max(axis=1), _EPS)
    peakiness = max_mag / (mag_sum / safe_valid + _EPS)

    low_e = float(mags[:, freqs < 800.0].sum())
    high_e = float(mags[:, freqs > 3000.0].sum())
    count = frames.shape[0]
    motion = float(np.abs(np.diff(centroids)).sum()) / (count - 1) if count > 1 else 0.0

    return SpectrumSummary(
        centroid=float(centroids.mean()),
        rolloff=float(rolloffs.mean()),
        flatness=float(flatness.mean()),
        peakiness=float(peakiness.mean()),
        high_ratio=high_e / (low_e + high_e + _EPS),
        motion=motion,
    )


def detect_dominant_pitch(samples, sample_rate: float) -> tuple[int, float]:
    """Strongest spectral peak between 50 Hz and 3 kHz as (MIDI note, frequency)."""
    data = _as_samples(samples)
    size = _PITCH_FFT_SIZE
    start = max(0, (data.size - size) // 2)
    frame = np.zeros(size)
    chunk = data[start:start + size]
    frame[:chunk.size] = chunk
    mags = np.abs(np.fft.rfft(frame * _hann(size)))

    best_idx = 1
    best_mag = 0.0
    bins = np.arange(1, size // 2)
    freqs = bins * sample_rate / size
    in_range = bins[(freqs >= 50.0) & (freqs <= 3000.0)]
    if in_range.size:
        candidate = int(in_range[np.argmax(mags[in_range])])
        if mags[candidate] > best_mag:
            best_idx = candidate
    freq = best_idx * sample_rate / size
    midi = _round_half_away(69.0 + 12.0 * math.log2(freq / 440.0))
    return midi, freq


def midi_to_note_name(midi: int) -> str:
    """Note name with octave, such that MIDI 60 is C4; "-" for negative numbers."""
    if midi < 0:
        return "-"
    return f"{_NOTE_NAMES[midi % 12]}{midi // 12 - 1}"


def harmonic_midis(dominant_midi: int) -> list[int]:
    """Octave, twelfth and double octave of the note that fit the preview keyboard."""
    notes: list[int] = []
    for offset in _HARMONIC_OFFSETS:
        note = dominant_midi + offset
        if _PREVIEW_LOW <= note <= _PREVIEW_HIGH and note not in notes:
            notes.append(note)
    return notes


def run_analysis(mono, channels, sample_rate: float) -> AnalysisResult:
    """Run every feature extractor over a clip and collect the results."""
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    data = _as_samples(mono)
    envelope = compute_envelope(data, _ENVELOPE_HOP)
    spectrum = analyse_spectrum(data, sample_rate)
    midi, freq = detect_dominant_pitch(data, sample_rate)
    return AnalysisResult(
        duration_sec=data.size / sample_rate,
        rms=compute_rms(data),
        zcr=compute_zcr(data),
        attack_time=estimate_attack(envelope, sample_rate, _ENVELOPE_HOP),
        stereo_width=compute_stereo_width(channels),
        centroid=spectrum.centroid,
        rolloff=spectrum.rolloff,
        flatness=spectrum.flatness,
        peakiness=spectrum.peakiness,
        high_ratio=spectrum.high_ratio,
        motion=spectrum.motion,
        dominant_midi=midi,
        dominant_freq=freq,
        dominant_note=midi_to_note_name(midi),
        envelope_type=estimate_envelope_type(envelope),
        harmonic_midis=harmonic_midis(midi),
    )