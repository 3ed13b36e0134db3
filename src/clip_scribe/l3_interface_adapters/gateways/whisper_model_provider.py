"""Gateway: whisper.cpp model provider — implements ModelProvider port."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os

from pywhispercpp.model import Model

from clip_scribe.l1_entities.audio import ResampledSamples
from clip_scribe.l1_entities.errors import ModelLoadError, TranscriptionError
from clip_scribe.l1_entities.transcript import TranscriptionOptions, TranscriptionResult, TranscriptSegment
from clip_scribe.l2_use_cases.ports.model_provider import ProgressCallback
from clip_scribe.l2_use_cases.ports.model_resolver import ModelResolver
from clip_scribe.l2_use_cases.utils.chunk_planner import join_segments, merge_window_segments, plan_windows
from clip_scribe.l3_interface_adapters.gateways.hf_model_resolver import HfModelResolver

log = logging.getLogger('cs.model')

# whisper.cpp takes ISO codes; the fixed target language is configured by name.
_LANGUAGE_CODES = {
    'english': 'en',
}


@contextlib.contextmanager
def _suppress_c_stdout():
    """Redirect C-level stdout and stderr to /dev/null.

    whisper.cpp prints init/progress messages directly via C fprintf,
    bypassing Python's sys.stdout. This corrupts the TUI.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    old_stdout = os.dup(1)
    old_stderr = os.dup(2)
    try:
        os.dup2(devnull, 1)
        os.dup2(devnull, 2)
        yield
    finally:
        os.dup2(old_stdout, 1)
        os.dup2(old_stderr, 2)
        os.close(devnull)
        os.close(old_stdout)
        os.close(old_stderr)


def language_code(language: str) -> str:
    key = language.strip().lower()
    return _LANGUAGE_CODES.get(key, key)


class WhisperModelProvider:
    """pywhispercpp adapter. Resolves and loads the ggml model, then transcribes
    strided windows of the clip and stitches the segments back together.

    Blocking whisper.cpp calls run in a worker thread so the event loop keeps
    rendering status updates.
    """

    def __init__(self, resolver: ModelResolver | None = None, n_threads: int | None = None) -> None:
        self._resolver = resolver or HfModelResolver()
        self._n_threads = n_threads

    async def load(self, model_identifier: str, on_progress: ProgressCallback | None = None) -> Model:
        return await asyncio.to_thread(self._load_sync, model_identifier, on_progress)

    async def invoke(
        self,
        handle: Model,
        samples: ResampledSamples,
        options: TranscriptionOptions,
    ) -> TranscriptionResult:
        return await asyncio.to_thread(self._invoke_sync, handle, samples, options)

    def _load_sync(self, model_identifier: str, on_progress: ProgressCallback | None = None) -> Model:
        model_path = self._resolver.resolve(model_identifier, on_progress=on_progress)
        kwargs: dict = {'print_progress': False, 'print_realtime': False}
        if self._n_threads:
            kwargs['n_threads'] = self._n_threads
        try:
            with _suppress_c_stdout():
                return Model(model_path, **kwargs)
        except Exception as exc:
            raise ModelLoadError(f'Failed to load model {model_identifier}: {exc}') from exc

    def _invoke_sync(
        self,
        handle: Model,
        samples: ResampledSamples,
        options: TranscriptionOptions,
    ) -> TranscriptionResult:
        language = language_code(options.language)
        windows = plan_windows(len(samples), samples.sample_rate, options)
        log.debug('Transcribing %d window(s), language=%s', len(windows), language)

        segments: list[TranscriptSegment] = []
        for window in windows:
            audio = samples.samples[window.start : window.end]
            try:
                with _suppress_c_stdout():
                    raw_segments = handle.transcribe(audio, language=language)
            except Exception as exc:
                raise TranscriptionError(f'Transcription failed: {exc}') from exc

            # pywhispercpp timestamps are centiseconds
            relative = [
                TranscriptSegment(text=seg.text.strip(), start=seg.t0 / 100.0, end=seg.t1 / 100.0)
                for seg in raw_segments
                if seg.text.strip()
            ]
            segments.extend(merge_window_segments(window, relative, samples.sample_rate))

        return TranscriptionResult(text=join_segments(segments))
