"""Command-line front end: analyse a clip, show the mapped patch and export it."""

from __future__ import annotations

import argparse
import sys
from os import PathLike
from pathlib import Path
from typing import Optional, Sequence, Union

from timbreadapter.analysis import AnalysisResult, run_analysis
from timbreadapter.audio_io import AudioClip, AudioLoadError, load_wav, validate_duration
from timbreadapter.messages import Language, messages_for
from timbreadapter.patch import (
    build_hints,
    build_snapshot_text,
    format_stats,
    patch_from_analysis,
)


def _analyse_clip(clip: AudioClip) -> AnalysisResult:
    return run_analysis(clip.mono(), clip.channels, clip.sample_rate)


def analyse_file(path: Union[str, PathLike]) -> AnalysisResult:
    """Load a WAV file, check its length and analyse its timbre."""
    clip = load_wav(path)
    validate_duration(clip)
    return _analyse_clip(clip)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timbreadapter",
        description="Analyse the timbre of a short audio clip and map it to synth parameters.",
    )
    parser.add_argument("audio", help="WAV file between 1 and 15 seconds long")
    parser.add_argument(
        "--language",
        choices=[language.value for language in Language],
        default=Language.ENGLISH.value,
        help="language of the report (default: en)",
    )
    parser.add_argument(
        "--export",
        metavar="JSON",
        help="write the patch snapshot as JSON to this file",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    language = Language(args.language)
    messages = messages_for(language)
    path = Path(args.audio)
    source = path.name

    try:
        clip = load_wav(path)
    except AudioLoadError:
        print(messages.open_failed, file=sys.stderr)
        return 1
    try:
        validate_duration(clip)
    except AudioLoadError:
        print(messages.duration_error, file=sys.stderr)
        return 1

    result = _analyse_clip(clip)
    patch = patch_from_analysis(result)

    print(f"{messages.analysis_complete_prefix}{source}")
    print()
    for line in format_stats(result, patch, language):
        print(line)
    print()
    print(build_hints(result, patch, language).rstrip("\n"))
    print()
    print(build_snapshot_text(source, result, patch, language), end="")

    if args.export:
        try:
            Path(args.export).write_text(patch.to_json(source), encoding="utf-8")
        except OSError as exc:
            print(f"{args.export}: {exc.strerror or exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())