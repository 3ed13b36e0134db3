"""Use case: transcription workflow — ingest, lazy model load, single inference pass."""

from __future__ import annotations

import asyncio
import logging

from clip_scribe.l1_entities.errors import ModelLoadError, TranscriptionError
from clip_scribe.l1_entities.transcript import TranscriptionOptions, TranscriptionResult
from clip_scribe.l1_entities.workflow import WorkflowEvent, WorkflowState
from clip_scribe.l2_use_cases.ingest_audio_use_case import AudioIngestor
from clip_scribe.l2_use_cases.model_cache import ModelCache
from clip_scribe.l2_use_cases.ports.clipboard import Clipboard
from clip_scribe.l2_use_cases.ports.model_provider import ProgressCallback
from clip_scribe.l2_use_cases.ports.status_sink import StatusSink

log = logging.getLogger('cs.workflow')

STATUS_PROCESSING = 'Processing audio locally...'
STATUS_LOADING = 'Loading model...'
STATUS_TRANSCRIBING = 'Transcribing...'
STATUS_DONE = 'Done'
STATUS_DOWNLOADING = 'Downloading model {model}... {percent}%'
STATUS_COPIED = 'Copied!'
DEFAULT_ERROR_MESSAGE = 'An error occurred'
ERROR_RESET_DELAY = 4.0  # seconds the sink keeps an error on screen


class _StaleRequest(Exception):
    """A newer submission started while this one was suspended."""


class TranscriptionOrchestrator:
    """Per-session workflow: Processing → (Loading) → Transcribing → Done | Error.

    Every failure is caught here and reported to the sink as an ERROR event;
    ``submit()`` never raises. The session state returns to IDLE as soon as a
    workflow ends; how long the error stays visible is the sink's concern.

    Overlapping submissions are not serialised. Each ``submit()`` takes a new
    request epoch, and a workflow that finds a newer epoch after resuming
    drops its remaining notifications and its result.

    While a first-time model download runs, LOADING events carry its progress.
    A successful auto-copy is followed by an IDLE event with ``copied`` set.
    """

    def __init__(
        self,
        ingestor: AudioIngestor,
        model_cache: ModelCache,
        status_sink: StatusSink,
        options: TranscriptionOptions | None = None,
        clipboard: Clipboard | None = None,
        error_reset_delay: float = ERROR_RESET_DELAY,
    ) -> None:
        self._ingestor = ingestor
        self._model_cache = model_cache
        self._sink = status_sink
        self._options = options or TranscriptionOptions()
        self._clipboard = clipboard
        self._error_reset_delay = error_reset_delay

        self._state = WorkflowState.IDLE
        self._epoch = 0

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def options(self) -> TranscriptionOptions:
        return self._options

    async def submit(self, data: bytes) -> TranscriptionResult | None:
        """Run one file through the workflow. Returns the trimmed result, or None on error."""
        self._epoch += 1
        epoch = self._epoch

        try:
            result = await self._run(data, epoch)
        except _StaleRequest:
            log.info('Request %d superseded by %d; result discarded', epoch, self._epoch)
            return None
        except Exception as exc:
            log.error('Transcription workflow failed: %s', exc, exc_info=True)
            if self._is_current(epoch):
                self._fail(exc)
            return None

        if not self._is_current(epoch):
            log.info('Request %d superseded by %d; result discarded', epoch, self._epoch)
            return None

        self._transition(WorkflowState.DONE, STATUS_DONE, text=result.text)
        self._state = WorkflowState.IDLE
        if await self._copy_to_clipboard(result.text) and self._is_current(epoch):
            self._transition(WorkflowState.IDLE, STATUS_COPIED, copied=True)
        return result

    async def _run(self, data: bytes, epoch: int) -> TranscriptionResult:
        self._transition(WorkflowState.PROCESSING, STATUS_PROCESSING)
        samples = await self._ingestor.ingest(data)
        self._ensure_current(epoch)
        log.info('Audio ready: %.2fs, %d samples', samples.duration_seconds, len(samples))

        if self._model_cache.is_loaded:
            handle = await self._model_cache.get()
        else:
            self._transition(WorkflowState.LOADING, STATUS_LOADING)
            handle = await self._model_cache.get(on_progress=self._download_progress(epoch))
            self._ensure_current(epoch)

        self._transition(WorkflowState.TRANSCRIBING, STATUS_TRANSCRIBING)
        try:
            raw = await self._model_cache.provider.invoke(handle, samples, self._options)
        except TranscriptionError:
            raise
        except Exception as exc:
            raise TranscriptionError(f'Transcription failed: {exc}') from exc
        self._ensure_current(epoch)

        return TranscriptionResult(text=raw.text.strip())

    def _download_progress(self, epoch: int) -> ProgressCallback:
        """Progress hook for the model download; safe to call from a worker thread."""
        loop = asyncio.get_running_loop()
        last = -1

        def report(percent: int) -> None:
            nonlocal last
            if percent == last or self._state != WorkflowState.LOADING or not self._is_current(epoch):
                return
            last = percent
            message = STATUS_DOWNLOADING.format(model=self._model_cache.model_identifier, percent=percent)
            self._transition(WorkflowState.LOADING, message)

        def on_progress(percent: int) -> None:
            loop.call_soon_threadsafe(report, percent)

        return on_progress

    async def _copy_to_clipboard(self, text: str) -> bool:
        if self._clipboard is None or not text:
            return False
        try:
            await self._clipboard.copy(text)
        except Exception as exc:
            log.warning('Clipboard copy failed: %s', exc)
            return False
        return True

    def _fail(self, exc: BaseException) -> None:
        message = str(exc) or DEFAULT_ERROR_MESSAGE
        if isinstance(exc, ModelLoadError):
            log.warning('Model not loaded; the next submission will retry')
        self._transition(WorkflowState.ERROR, message, reset_after=self._error_reset_delay)
        self._state = WorkflowState.IDLE

    def _transition(
        self,
        state: WorkflowState,
        message: str,
        *,
        text: str = '',
        reset_after: float | None = None,
        copied: bool = False,
    ) -> None:
        self._state = state
        log.debug('-> %s: %s', state.value, message)
        self._sink.post(WorkflowEvent(state=state, message=message, text=text, reset_after=reset_after, copied=copied))

    def _is_current(self, epoch: int) -> bool:
        return epoch == self._epoch

    def _ensure_current(self, epoch: int) -> None:
        if not self._is_current(epoch):
            raise _StaleRequest
