"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from clip_scribe.l1_entities.transcript import TranscriptionOptions


class TranscriptionConfig(BaseModel):
    model: str
    language: str
    chunk_length_s: float = Field(gt=0)
    stride_length_s: float = Field(ge=0)

    @model_validator(mode='after')
    def _windowing_is_valid(self) -> TranscriptionConfig:
        self.options()
        return self

    def options(self) -> TranscriptionOptions:
        """Build the fixed per-invocation options from this config."""
        return TranscriptionOptions(
            language=self.language,
            chunk_length_s=self.chunk_length_s,
            stride_length_s=self.stride_length_s,
        )


class AudioConfig(BaseModel):
    max_duration_seconds: float = Field(gt=0)
    ffmpeg_timeout: float = Field(gt=0)


class UiConfig(BaseModel):
    error_reset_delay: float = Field(ge=0)
    auto_copy: bool


class AppConfig(BaseModel):
    transcription: TranscriptionConfig
    audio: AudioConfig
    ui: UiConfig
