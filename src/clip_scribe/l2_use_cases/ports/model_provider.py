"""Port: speech recognition model — load once, invoke many."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from clip_scribe.l1_entities.audio import ResampledSamples
from clip_scribe.l1_entities.transcript import TranscriptionOptions, TranscriptionResult

ModelHandle = Any
ProgressCallback = Callable[[int], None]  # percent 0-100; may be called from a worker thread


class ModelProvider(Protocol):
    """Abstract inference engine. Zero framework types leak through."""

    async def load(self, model_identifier: str, on_progress: ProgressCallback | None = None) -> ModelHandle:
        """Acquire the model, reporting download progress to *on_progress*. Raises ModelLoadError on failure."""
        ...

    async def invoke(
        self,
        handle: ModelHandle,
        samples: ResampledSamples,
        options: TranscriptionOptions,
    ) -> TranscriptionResult:
        """Transcribe *samples*. Raises TranscriptionError on failure."""
        ...
