"""Transcription entities — model options, raw segments and the final result."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clip_scribe.l1_entities.audio_constants import SAMPLE_RATE


class TranscriptionOptions(BaseModel):
    """Fixed options passed to every model invocation.

    ``chunk_length_s`` and ``stride_length_s`` control how the model provider
    windows audio longer than one chunk; they are never per-file user input.
    """

    model_config = ConfigDict(frozen=True)

    language: str = 'english'
    chunk_length_s: float = Field(default=30.0, gt=0)
    stride_length_s: float = Field(default=5.0, ge=0)

    @model_validator(mode='after')
    def _stride_fits_chunk(self) -> TranscriptionOptions:
        if self.step_samples(SAMPLE_RATE) < 1:
            raise ValueError('stride_length_s must be less than half of chunk_length_s')
        return self

    @property
    def step_length_s(self) -> float:
        """Distance between the starts of consecutive windows."""
        return self.chunk_length_s - 2 * self.stride_length_s

    def step_samples(self, sample_rate: int) -> int:
        """Window advance in whole samples, as the windowing code computes it."""
        return int(self.chunk_length_s * sample_rate) - 2 * int(self.stride_length_s * sample_rate)


class TranscriptSegment(BaseModel):
    """A single span of recognised speech."""

    text: str
    start: float = Field(description='Offset in seconds from the start of the clip')
    end: float = Field(description='Offset in seconds from the start of the clip')


class TranscriptionResult(BaseModel):
    text: str
