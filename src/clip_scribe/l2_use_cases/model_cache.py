"""Use case: process-wide, write-once holder for the loaded model."""

from __future__ import annotations

import asyncio
import logging

from clip_scribe.l1_entities.errors import ModelLoadError
from clip_scribe.l2_use_cases.ports.model_provider import ModelHandle, ModelProvider, ProgressCallback

log = logging.getLogger('cs.model')


class ModelCache:
    """Single-flight model loading.

    The first caller loads; concurrent callers wait on the same lock and reuse
    the result. Once set, the handle is returned without suspending. A failed
    load leaves the cache empty so a later submission can try again.
    """

    def __init__(self, provider: ModelProvider, model_identifier: str) -> None:
        self._provider = provider
        self._model_identifier = model_identifier
        self._handle: ModelHandle | None = None
        self._lock = asyncio.Lock()

    @property
    def provider(self) -> ModelProvider:
        return self._provider

    @property
    def model_identifier(self) -> str:
        return self._model_identifier

    @property
    def is_loaded(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> ModelHandle | None:
        return self._handle

    async def get(self, on_progress: ProgressCallback | None = None) -> ModelHandle:
        """Return the model, loading it on first use. *on_progress* only sees the load it triggers."""
        if self._handle is not None:
            return self._handle

        async with self._lock:
            if self._handle is None:
                log.info('Loading model %s', self._model_identifier)
                try:
                    handle = await self._provider.load(self._model_identifier, on_progress=on_progress)
                except ModelLoadError:
                    raise
                except Exception as exc:
                    raise ModelLoadError(f'Failed to load model {self._model_identifier}: {exc}') from exc
                self._handle = handle
                log.info('Model %s ready', self._model_identifier)
        return self._handle
