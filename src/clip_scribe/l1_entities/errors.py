"""Domain error types."""

from __future__ import annotations

import math


class ClipScribeError(Exception):
    """Base class for every failure a transcription workflow can surface."""


class DecodeError(ClipScribeError):
    """Raised when input bytes cannot be decoded as audio."""


class DurationExceededError(ClipScribeError):
    """Raised when decoded audio is longer than the configured ceiling."""

    def __init__(self, actual: float, limit: float) -> None:
        self.actual = actual
        self.limit = limit
        super().__init__(f'Audio too long ({_round_half_up(actual)}s). Limit is {_fmt_seconds(limit)}s.')


class ModelLoadError(ClipScribeError):
    """Raised when the speech model cannot be acquired or initialised."""


class ModelResolutionError(ModelLoadError):
    """Raised when a whisper model cannot be resolved to a local path."""


class TranscriptionError(ClipScribeError):
    """Raised when the model invocation itself fails."""


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _fmt_seconds(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
