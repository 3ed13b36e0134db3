"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import asyncio
from pathlib import Path

import numpy as np
import pytest

from clip_scribe.l1_entities.audio import DecodedAudio, ResampledSamples
from clip_scribe.l1_entities.config import AppConfig
from clip_scribe.l1_entities.errors import DecodeError
from clip_scribe.l1_entities.transcript import TranscriptionOptions, TranscriptionResult
from clip_scribe.l1_entities.workflow import WorkflowEvent, WorkflowState
from clip_scribe.l4_frameworks_and_drivers.config import build_app_config

# --- Protocol-conforming Fakes ---


def make_decoded(duration: float, sample_rate: int = 8000, channels: int = 1) -> DecodedAudio:
    frames = int(round(duration * sample_rate))
    data = np.full((channels, frames), 0.1, dtype=np.float32)
    return DecodedAudio(duration_seconds=duration, sample_rate=sample_rate, channel_data=data)


class FakeAudioCodec:
    """Fake codec session. Records calls and whether it was closed."""

    def __init__(
        self,
        decoded: DecodedAudio | None = None,
        decode_error: Exception | None = None,
        render_error: Exception | None = None,
    ) -> None:
        self._decoded = decoded if decoded is not None else make_decoded(10.0)
        self._decode_error = decode_error
        self._render_error = render_error
        self.decode_calls: list[bytes] = []
        self.render_calls: list[tuple[int, int, int]] = []
        self.close_calls = 0

    async def decode(self, data: bytes) -> DecodedAudio:
        self.decode_calls.append(data)
        if self._decode_error is not None:
            raise self._decode_error
        return self._decoded

    async def render_offline(
        self,
        decoded: DecodedAudio,
        target_rate: int,
        target_channels: int,
        target_length: int,
    ) -> np.ndarray:
        self.render_calls.append((target_rate, target_channels, target_length))
        if self._render_error is not None:
            raise self._render_error
        mono = decoded.channel_data.mean(axis=0)
        out = np.zeros(target_length, dtype=np.float32)
        positions = np.linspace(0, max(len(mono) - 1, 0), target_length)
        out[:] = np.interp(positions, np.arange(len(mono)), mono) if len(mono) else 0.0
        return out

    async def close(self) -> None:
        self.close_calls += 1

    @property
    def closed(self) -> bool:
        return self.close_calls > 0


class FakeCodecFactory:
    """Hands out a fresh FakeAudioCodec per call, built from the current settings."""

    def __init__(self, **codec_kwargs) -> None:
        self.codec_kwargs = codec_kwargs
        self.created: list[FakeAudioCodec] = []

    def __call__(self) -> FakeAudioCodec:
        codec = FakeAudioCodec(**self.codec_kwargs)
        self.created.append(codec)
        return codec

    def corrupt(self) -> None:
        self.codec_kwargs = {'decode_error': DecodeError('Unable to decode audio data')}

    def with_duration(self, duration: float, sample_rate: int = 8000, channels: int = 1) -> None:
        self.codec_kwargs = {'decoded': make_decoded(duration, sample_rate, channels)}


class FakeModelProvider:
    """Fake model provider for L2 use case tests."""

    def __init__(self, text: str = '  Hello world.  ') -> None:
        self._text = text
        self.load_calls: list[str] = []
        self.invoke_calls: list[tuple[object, ResampledSamples, TranscriptionOptions]] = []
        self.load_error: Exception | None = None
        self.invoke_error: Exception | None = None
        self.progress_steps: list[int] = []

    async def load(self, model_identifier: str, on_progress=None) -> object:
        self.load_calls.append(model_identifier)
        if self.load_error is not None:
            raise self.load_error
        if on_progress is not None and self.progress_steps:
            for percent in self.progress_steps:
                on_progress(percent)
            await asyncio.sleep(0)  # a real download finishes on a worker thread
        return {'model': model_identifier}

    async def invoke(
        self,
        handle: object,
        samples: ResampledSamples,
        options: TranscriptionOptions,
    ) -> TranscriptionResult:
        self.invoke_calls.append((handle, samples, options))
        if self.invoke_error is not None:
            raise self.invoke_error
        return TranscriptionResult(text=self._text)

    def set_text(self, text: str) -> None:
        self._text = text


class RecordingSink:
    """StatusSink that keeps every event."""

    def __init__(self) -> None:
        self.events: list[WorkflowEvent] = []

    def post(self, event: WorkflowEvent) -> None:
        self.events.append(event)

    @property
    def states(self) -> list[WorkflowState]:
        return [e.state for e in self.events]

    @property
    def last(self) -> WorkflowEvent:
        return self.events[-1]


class FakeClipboard:
    def __init__(self, error: Exception | None = None) -> None:
        self._error = error
        self.copied: list[str] = []

    async def copy(self, text: str) -> None:
        if self._error is not None:
            raise self._error
        self.copied.append(text)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
transcription:
  model: "base.en"
  chunk_length_s: 20
audio:
  max_duration_seconds: 60
ui:
  auto_copy: false
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p


@pytest.fixture
def codec_factory() -> FakeCodecFactory:
    return FakeCodecFactory()


@pytest.fixture
def fake_provider() -> FakeModelProvider:
    return FakeModelProvider()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()
