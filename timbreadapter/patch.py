"""Mapping timbre analysis onto synth-style patch parameters and their text views."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, fields
from typing import Union

from timbreadapter.analysis import AnalysisResult
from timbreadapter.messages import Language, envelope_label, messages_for

_EPS = 1.0e-12
_PARAM_MIN = 0.0
_PARAM_MAX = 100.0

# (attribute, JSON key, snapshot label) in export and snapshot order.
_EXPORTED = (
    ("cutoff", "cutoff", "Cutoff"),
    ("resonance", "resonance", "Resonance"),
    ("brightness", "brightness", "Brightness"),
    ("drive", "drive", "Drive"),
    ("unison", "unison", "Unison"),
    ("detune", "detune", "Detune"),
    ("harmonics", "harmonics", "Harmonics"),
    ("noise", "noise", "Noise"),
    ("stereo", "stereo", "Stereo"),
    ("fm_depth", "fmDepth", "FMDepth"),
    ("attack", "attack", "Attack"),
    ("decay", "decay", "Decay"),
    ("sustain", "sustain", "Sustain"),
    ("release", "release", "Release"),
)

LanguageLike = Union[Language, str]


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Linearly map ``value`` from the input range onto the output range, clamped."""
    t = (value - in_min) / (in_max - in_min + _EPS)
    t = min(1.0, max(0.0, t))
    return out_min + t * (out_max - out_min)


def _snap(value: float) -> float:
    """Snap a raw value onto the 0..100 parameter grid with a step of 1."""
    snapped = _PARAM_MIN + math.floor(value - _PARAM_MIN + 0.5)
    return float(min(_PARAM_MAX, max(_PARAM_MIN, snapped)))


def _clamp(value: float) -> float:
    return min(_PARAM_MAX, max(_PARAM_MIN, value))


@dataclass(frozen=True)
class Patch:
    """Raw synth parameter values on a 0..100 scale."""

    cutoff: float = 50.0
    resonance: float = 50.0
    brightness: float = 50.0
    drive: float = 50.0
    unison: float = 50.0
    detune: float = 50.0
    harmonics: float = 50.0
    noise: float = 50.0
    stereo: float = 50.0
    fm_depth: float = 50.0
    tone: float = 50.0
    filter_mix: float = 50.0
    attack: float = 50.0
    decay: float = 50.0
    sustain: float = 50.0
    release: float = 50.0

    def knob_values(self) -> dict[str, float]:
        """Every parameter as the control shows it: whole steps within 0..100."""
        return {f.name: _snap(getattr(self, f.name)) for f in fields(self)}

    def to_dict(self, source: str) -> dict[str, object]:
        """Exportable snapshot: the source file name followed by the parameters."""
        knobs = self.knob_values()
        data: dict[str, object] = {"source": source}
        for attribute, key, _label in _EXPORTED:
            data[key] = knobs[attribute]
        return data

    def to_json(self, source: str) -> str:
        """The exportable snapshot as a single line of JSON."""
        return json.dumps(self.to_dict(source), ensure_ascii=False)


def patch_from_analysis(result: AnalysisResult) -> Patch:
    """Derive synth parameters from an analysis result."""
    brightness = map_range(result.centroid, 250.0, 3800.0, 8.0, 100.0)
    cutoff = map_range(result.rolloff, 900.0, 7000.0, 18.0, 100.0)
    resonance = map_range(result.peakiness, 2.0, 20.0, 20.0, 90.0)
    noise = map_range(result.flatness * 0.8 + result.zcr * 2.5, 0.02, 0.45, 0.0, 100.0)
    stereo = map_range(result.stereo_width, 0.0, 1.0, 0.0, 100.0)
    harmonics = map_range(result.high_ratio, 0.04, 0.65, 8.0, 100.0)
    return Patch(
        cutoff=cutoff,
        resonance=resonance,
        brightness=brightness,
        drive=map_range(result.rms, 0.03, 0.42, 5.0, 95.0),
        unison=map_range((result.stereo_width + result.motion / 900.0) * 0.5, 0.0, 1.0, 0.0, 100.0),
        detune=map_range(result.motion, 5.0, 550.0, 0.0, 70.0),
        harmonics=harmonics,
        noise=noise,
        stereo=stereo,
        fm_depth=map_range(result.peakiness * 0.45 + result.motion * 0.002, 0.5, 10.0, 0.0, 88.0),
        tone=_clamp(brightness * 0.6 + harmonics * 0.4),
        filter_mix=_clamp(cutoff * 0.6 + resonance * 0.4),
        attack=map_range(result.attack_time, 0.005, 0.35, 2.0, 100.0),
        decay=map_range(result.flatness, 0.01, 0.65, 20.0, 85.0),
        sustain=map_range(1.0 - result.flatness, 0.2, 1.0, 25.0, 90.0),
        release=map_range(result.stereo_width + result.motion / 600.0, 0.0, 1.0, 12.0, 88.0),
    )


def _note_text(result: AnalysisResult, language: LanguageLike) -> str:
    if result.dominant_midi < 0:
        return messages_for(language).no_note
    return result.dominant_note


def build_hints(result: AnalysisResult, patch: Patch, language: LanguageLike = Language.ENGLISH) -> str:
    """Sound-design advice for the analysed clip, one suggestion per line."""
    messages = messages_for(language)
    envelope = result.envelope_type.lower()
    checks = (
        ("pluck" in envelope, messages.hint_pluck),
        ("lead" in envelope, messages.hint_lead),
        ("pad" in envelope, messages.hint_pad),
        (patch.noise > 55.0, messages.hint_noise),
        (patch.harmonics > 60.0, messages.hint_harmonics),
        (patch.stereo > 55.0, messages.hint_stereo),
    )
    hint = "".join(f"{text}\n" for applies, text in checks if applies)
    return hint or messages.hint_balanced


def format_stats(
    result: AnalysisResult, patch: Patch, language: LanguageLike = Language.ENGLISH
) -> tuple[str, str, str, str, str, str]:
    """The six summary lines: brightness, noise, attack, width, pitch and envelope."""
    messages = messages_for(language)
    return (
        f"{messages.brightness_stat}{int(patch.brightness)}%",
        f"{messages.noise_stat}{int(patch.noise)}%",
        f"{messages.attack_stat}{result.attack_time:.3f} s",
        f"{messages.width_stat}{int(patch.stereo)}%",
        f"{messages.pitch_stat}{_note_text(result, language)} / {result.dominant_freq:.1f} Hz",
        f"{messages.envelope_stat}{envelope_label(result.envelope_type, language)}",
    )


def build_snapshot_text(
    source: str, result: AnalysisResult, patch: Patch, language: LanguageLike = Language.ENGLISH
) -> str:
    """A plain-text summary of the analysis and the current patch."""
    messages = messages_for(language)
    knobs = patch.knob_values()
    header = (
        "Patch Snapshot\n"
        f"{messages.snapshot_rule}\n"
        f"Source: {source}\n"
        f"{messages.snapshot_pitch}{_note_text(result, language)} ({result.dominant_freq:.1f} Hz)\n"
        f"{messages.snapshot_envelope}{envelope_label(result.envelope_type, language)}\n\n"
    )
    body = "".join(f"{label}: {int(knobs[attribute])}%\n" for attribute, _key, label in _EXPORTED)
    return header + body