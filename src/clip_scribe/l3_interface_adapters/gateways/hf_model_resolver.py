"""Gateway: HuggingFace model resolver — implements ModelResolver port."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from huggingface_hub import hf_hub_download
from huggingface_hub.errors import HfHubHTTPError
from pywhispercpp.constants import MODELS_DIR

from clip_scribe.l1_entities.errors import ModelResolutionError

log = logging.getLogger('cs.model')

WHISPER_CPP_REPO = 'ggerganov/whisper.cpp'
WHISPER_CPP_MODELS = {
    'tiny': 'ggml-tiny.bin',
    'tiny.en': 'ggml-tiny.en.bin',
    'tiny-q5_1': 'ggml-tiny-q5_1.bin',
    'tiny.en-q5_1': 'ggml-tiny.en-q5_1.bin',
    'base': 'ggml-base.bin',
    'base.en': 'ggml-base.en.bin',
    'base.en-q5_1': 'ggml-base.en-q5_1.bin',
    'small': 'ggml-small.bin',
    'small.en': 'ggml-small.en.bin',
    'small-q8_0': 'ggml-small-q8_0.bin',
    'small-q5_1': 'ggml-small-q5_1.bin',
}


def _make_progress_class(callback: Callable[[int], None]) -> type:
    """Create a tqdm-compatible class that reports download progress via *callback*."""

    class _ProgressReporter:
        def __init__(self, *args, **kwargs):
            self.total: int = kwargs.get('total', 0) or 0
            self.n: int = 0
            if self.total > 0:
                callback(0)

        def update(self, n: int = 1) -> None:
            self.n += n
            if self.total > 0:
                callback(min(int(self.n / self.total * 100), 100))

        def close(self) -> None:
            pass

        def set_description(self, *a, **kw) -> None:
            pass

        def set_description_str(self, *a, **kw) -> None:
            pass

        def refresh(self) -> None:
            pass

        def __enter__(self):
            return self

        def __exit__(self, *args):
            self.close()

    return _ProgressReporter


class HfModelResolver:
    """Resolves whisper model names to local ggml files, downloading from HF on first use.

    Absolute paths must exist. Names outside ``WHISPER_CPP_MODELS`` pass
    through unchanged and are left to pywhispercpp. *on_progress* receives
    download percentages and is not called for cached files.
    """

    def resolve(self, model_name: str, on_progress: Callable[[int], None] | None = None) -> str:
        if Path(model_name).is_absolute():
            if not Path(model_name).exists():
                raise ModelResolutionError(f'Model file not found: {model_name}')
            return model_name

        if model_name not in WHISPER_CPP_MODELS:
            return model_name

        tqdm_class = _make_progress_class(on_progress) if on_progress else None
        try:
            return _download_whisper_cpp(model_name, tqdm_class=tqdm_class)
        except (HfHubHTTPError, OSError) as exc:
            raise ModelResolutionError(f'Failed to download model {model_name}: {exc}') from exc


def _download_whisper_cpp(name: str, *, tqdm_class: type | None = None) -> str:
    filename = WHISPER_CPP_MODELS[name]
    cache_dir = Path(MODELS_DIR) / 'whisper-cpp'
    cache_dir.mkdir(parents=True, exist_ok=True)
    local_path = cache_dir / filename
    if local_path.exists():
        return str(local_path)
    log.info('Downloading %s from %s', filename, WHISPER_CPP_REPO)
    kwargs: dict = dict(repo_id=WHISPER_CPP_REPO, filename=filename, local_dir=cache_dir)
    if tqdm_class is not None:
        kwargs['tqdm_class'] = tqdm_class
    return hf_hub_download(**kwargs)
