"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from functools import partial

from clip_scribe.l1_entities.config import AppConfig
from clip_scribe.l2_use_cases.duration_guard import DurationGuard
from clip_scribe.l2_use_cases.ingest_audio_use_case import AudioIngestor
from clip_scribe.l2_use_cases.model_cache import ModelCache
from clip_scribe.l2_use_cases.ports.audio_codec import AudioCodecFactory
from clip_scribe.l2_use_cases.ports.clipboard import Clipboard
from clip_scribe.l2_use_cases.ports.model_provider import ModelProvider
from clip_scribe.l2_use_cases.ports.status_sink import StatusSink
from clip_scribe.l2_use_cases.transcribe_file_use_case import TranscriptionOrchestrator
from clip_scribe.l3_interface_adapters.gateways.ffmpeg_audio_codec import FfmpegAudioCodec
from clip_scribe.l3_interface_adapters.gateways.pyperclip_clipboard import PyperclipClipboard
from clip_scribe.l3_interface_adapters.gateways.whisper_model_provider import WhisperModelProvider


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing.

    One container per process: its ModelCache is the process-wide model holder
    shared by every orchestrator it builds.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        codec_factory: AudioCodecFactory | None = None,
        model_provider: ModelProvider | None = None,
        clipboard: Clipboard | None = None,
    ) -> None:
        self.config = config

        self.codec_factory: AudioCodecFactory = codec_factory or partial(
            FfmpegAudioCodec, timeout=config.audio.ffmpeg_timeout
        )
        self.model_provider: ModelProvider = model_provider or WhisperModelProvider()
        self.clipboard: Clipboard = clipboard or PyperclipClipboard()

        self.ingestor = AudioIngestor(
            codec_factory=self.codec_factory,
            guard=DurationGuard(limit=config.audio.max_duration_seconds),
        )
        self.model_cache = ModelCache(self.model_provider, config.transcription.model)

    def orchestrator(self, status_sink: StatusSink) -> TranscriptionOrchestrator:
        """Build the session's workflow, reporting to *status_sink*."""
        return TranscriptionOrchestrator(
            ingestor=self.ingestor,
            model_cache=self.model_cache,
            status_sink=status_sink,
            options=self.config.transcription.options(),
            clipboard=self.clipboard if self.config.ui.auto_copy else None,
            error_reset_delay=self.config.ui.error_reset_delay,
        )
