"""Audio buffer entities — decoded source audio and model-ready samples."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from clip_scribe.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE


@dataclass(frozen=True)
class DecodedAudio:
    """PCM audio as produced by the decoder, at the source rate and layout.

    ``channel_data`` is shaped ``(channels, frames)``.
    """

    duration_seconds: float
    sample_rate: int
    channel_data: np.ndarray

    @property
    def channel_count(self) -> int:
        return int(self.channel_data.shape[0])

    @property
    def frame_count(self) -> int:
        return int(self.channel_data.shape[1])


@dataclass(frozen=True)
class ResampledSamples:
    """Mono float32 samples at 16 kHz — the only shape handed to the model."""

    samples: np.ndarray
    sample_rate: int = SAMPLE_RATE
    channel_count: int = CHANNELS

    def __post_init__(self) -> None:
        if self.sample_rate != SAMPLE_RATE:
            raise ValueError(f'Resampled audio must be {SAMPLE_RATE} Hz, got {self.sample_rate}')
        if self.channel_count != CHANNELS:
            raise ValueError(f'Resampled audio must be mono, got {self.channel_count} channels')
        if self.samples.ndim != 1:
            raise ValueError(f'Resampled audio must be 1-D, got shape {self.samples.shape}')
        if self.samples.dtype != np.float32:
            object.__setattr__(self, 'samples', self.samples.astype(np.float32))

    @property
    def duration_seconds(self) -> float:
        return len(self.samples) / self.sample_rate

    def __len__(self) -> int:
        return len(self.samples)
