"""Loading audio clips from WAV files and checking they suit analysis."""

from __future__ import annotations

import wave
from dataclasses import dataclass
from os import PathLike
from typing import Union

import numpy as np

MIN_DURATION_SEC = 1.0
MAX_DURATION_SEC = 15.0


class AudioLoadError(Exception):
    """Raised when an audio file cannot be read or is unsuitable for analysis."""


@dataclass(frozen=True, eq=False)
class AudioClip:
    """Decoded audio: one row of float samples in [-1, 1] per channel."""

    channels: np.ndarray
    sample_rate: float

    def __post_init__(self) -> None:
        data = np.asarray(self.channels, dtype=np.float64)
        if data.ndim == 1:
            data = data[np.newaxis, :]
        if data.ndim != 2 or data.shape[0] < 1:
            raise ValueError("channels must be a non-empty 2-D array (channels x samples)")
        if self.sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        object.__setattr__(self, "channels", data)
        object.__setattr__(self, "sample_rate", float(self.sample_rate))

    @property
    def num_channels(self) -> int:
        return int(self.channels.shape[0])

    @property
    def num_samples(self) -> int:
        return int(self.channels.shape[1])

    @property
    def duration(self) -> float:
        """Length of the clip in seconds."""
        return self.num_samples / self.sample_rate

    def mono(self) -> np.ndarray:
        """Average of all channels, sample by sample."""
        return self.channels.sum(axis=0) * (1.0 / self.num_channels)


def _decode(raw: bytes, width: int) -> np.ndarray:
    if width == 1:
        return (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0
    if width == 2:
        return np.frombuffer(raw, dtype="<i2").astype(np.float64) / 32768.0
    if width == 3:
        octets = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        values = octets[:, 0] | (octets[:, 1] << 8) | (octets[:, 2] << 16)
        values = np.where(values >= 1 << 23, values - (1 << 24), values)
        return values.astype(np.float64) / float(1 << 23)
    if width == 4:
        return np.frombuffer(raw, dtype="<i4").astype(np.float64) / float(1 << 31)
    raise AudioLoadError(f"unsupported sample width: {width} bytes")


def load_wav(path: Union[str, PathLike]) -> AudioClip:
    """Read a PCM WAV file into an :class:`AudioClip`."""
    try:
        with wave.open(str(path), "rb") as reader:
            channel_count = reader.getnchannels()
            width = reader.getsampwidth()
            rate = reader.getframerate()
            raw = reader.readframes(reader.getnframes())
    except (wave.Error, EOFError, OSError) as exc:
        raise AudioLoadError(f"could not open audio file: {path}") from exc

    if channel_count < 1 or rate <= 0:
        raise AudioLoadError(f"could not open audio file: {path}")
    samples = _decode(raw, width)
    usable = (samples.size // channel_count) * channel_count
    channels = samples[:usable].reshape(-1, channel_count).T
    return AudioClip(channels=channels, sample_rate=rate)


def validate_duration(clip: AudioClip) -> float:
    """Return the clip's duration, or raise if it lies outside 1 to 15 seconds."""
    duration = clip.duration
    if duration < MIN_DURATION_SEC or duration > MAX_DURATION_SEC:
        raise AudioLoadError("Audio must be between 1 and 15 seconds.")
    return duration