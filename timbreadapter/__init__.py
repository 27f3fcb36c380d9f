"""Timbre analysis of short WAV samples, mapped to synth patch parameters."""

__version__ = "0.1.0"

__all__ = ["analysis", "audio_io", "messages", "patch", "cli"]