# timbreadapter

Analyse a short audio sample (1 to 15 seconds) and turn its timbre into a
synth-style patch: cutoff, resonance, brightness, drive, unison, detune,
harmonics, noise, stereo, FM depth, tone, filter mix and an ADSR envelope.

The analysis measures loudness (RMS), zero-crossing rate, the amplitude
envelope (attack time and envelope type), spectral centroid, rolloff,
flatness, peakiness, high-frequency ratio, spectral motion, stereo width and
the dominant pitch. These become patch values on a 0 to 100 scale, together
with a few plain-language hints on how to rebuild the sound.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
timbreadapter sample.wav
```

This loads a PCM WAV file, checks that it is between 1 and 15 seconds long,
analyses it and prints, in order: an "analysis complete" line, six summary
statistics (brightness, noise, attack, stereo width, dominant pitch,
envelope type), the sound-design hints and the patch snapshot.

Options:

- `--language {en,zh}`: language of the report (default `en`).
- `--export JSON`: also write the patch snapshot as a single line of JSON
  to the given file.

If the file cannot be read, or its length is outside 1 to 15 seconds, a
message goes to standard error and the exit status is 1.

## Library use

```python
from timbreadapter.audio_io import load_wav, validate_duration
from timbreadapter.analysis import run_analysis
from timbreadapter.patch import patch_from_analysis, build_snapshot_text, build_hints
from timbreadapter.messages import Language

clip = load_wav("sample.wav")
validate_duration(clip)

result = run_analysis(clip.mono(), clip.channels, clip.sample_rate)
patch = patch_from_analysis(result)

print(build_snapshot_text("sample.wav", result, patch, Language.ENGLISH))
print(build_hints(result, patch, Language.ENGLISH))
print(patch.to_json("sample.wav"))
```

`timbreadapter.cli.analyse_file(path)` does the loading, length check and
analysis in one call and returns an `AnalysisResult`.

Modules:

- `timbreadapter.analysis`: the feature extractors (`compute_rms`,
  `compute_zcr`, `compute_envelope`, `estimate_attack`,
  `estimate_envelope_type`, `compute_stereo_width`, `analyse_spectrum`,
  `detect_dominant_pitch`, `midi_to_note_name`, `harmonic_midis`,
  `run_analysis`) working on plain NumPy arrays, and the `SpectrumSummary`
  and `AnalysisResult` dataclasses.
- `timbreadapter.audio_io`: `AudioClip` (channels × samples, sample rate,
  `duration`, `mono()`), `load_wav` for 8-, 16-, 24- and 32-bit PCM WAV,
  and `validate_duration`.
- `timbreadapter.patch`: `map_range`, `patch_from_analysis`, the `Patch`
  dataclass (`knob_values()`, `to_dict(source)`, `to_json(source)`),
  `build_hints`, `format_stats` and `build_snapshot_text`.
- `timbreadapter.messages`: `Language` (`en`, `zh`), the `Messages` string
  table, `messages_for` and `envelope_label`.

## Errors

`load_wav` raises `AudioLoadError` when a file cannot be read or uses an
unsupported sample width; `validate_duration` raises it when the clip is
shorter than 1 or longer than 15 seconds. `run_analysis` and `AudioClip`
raise `ValueError` for a sample rate that is not positive.

## What it does not do

The package only reads WAV files; it has no decoders for MP3, FLAC, AIFF or
M4A. It does not play audio and has no graphical panel or keyboard
preview: results are printed as text or exported as JSON.