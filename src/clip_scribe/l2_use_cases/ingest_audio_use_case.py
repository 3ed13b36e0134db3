"""Use case: turn an opaque audio file into model-ready 16 kHz mono samples."""

from __future__ import annotations

import logging
import math

from clip_scribe.l1_entities.audio import ResampledSamples
from clip_scribe.l1_entities.audio_constants import CHANNELS, SAMPLE_RATE
from clip_scribe.l1_entities.errors import DecodeError
from clip_scribe.l2_use_cases.duration_guard import DurationGuard
from clip_scribe.l2_use_cases.ports.audio_codec import AudioCodecFactory

log = logging.getLogger('cs.ingest')


class AudioIngestor:
    """Decode, validate duration, and resample — one codec session per call.

    The codec session is opened at the start of ``ingest()`` and closed on
    every exit path, including decode and validation failures.
    """

    def __init__(self, codec_factory: AudioCodecFactory, guard: DurationGuard | None = None) -> None:
        self._codec_factory = codec_factory
        self._guard = guard or DurationGuard()

    async def ingest(self, data: bytes) -> ResampledSamples:
        codec = self._codec_factory()
        try:
            decoded = await codec.decode(data)
            log.debug(
                'Decoded %.2fs @ %d Hz, %d channel(s)',
                decoded.duration_seconds,
                decoded.sample_rate,
                decoded.channel_count,
            )

            if decoded.duration_seconds <= 0:
                raise DecodeError('Audio file appears to be empty')
            self._guard.check(decoded.duration_seconds)

            target_length = math.ceil(decoded.duration_seconds * SAMPLE_RATE)
            rendered = await codec.render_offline(
                decoded,
                target_rate=SAMPLE_RATE,
                target_channels=CHANNELS,
                target_length=target_length,
            )
            return ResampledSamples(samples=rendered.reshape(-1))
        finally:
            await codec.close()
