"""Gateway: ffmpeg audio codec — decodes any container and renders 16 kHz mono via subprocess."""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import subprocess  # noqa: S404 -- intentional: shells out to ffmpeg with a fixed arg list, not shell=True
import tempfile
from pathlib import Path

import numpy as np

from clip_scribe.l1_entities.audio import DecodedAudio
from clip_scribe.l1_entities.errors import DecodeError

log = logging.getLogger('cs.ffmpeg')

_FFMPEG_TIMEOUT = 300  # seconds


def _require(tool: str) -> str:
    path = shutil.which(tool)
    if path is None:
        raise DecodeError(
            f'{tool} is required but not found on PATH.\n  macOS:  brew install ffmpeg\n  Debian: apt install ffmpeg'
        )
    return path


def _run(cmd: list[str], *, timeout: float, stdin: bytes | None = None) -> subprocess.CompletedProcess:
    tool = Path(cmd[0]).name
    try:
        result = subprocess.run(cmd, input=stdin, capture_output=True, timeout=timeout)  # noqa: S603
    except subprocess.TimeoutExpired as exc:
        raise DecodeError(f'{tool} timed out after {timeout:g}s') from exc
    except OSError as exc:
        raise DecodeError(f'Failed to launch {tool}: {exc}') from exc

    if result.returncode != 0:
        stderr = result.stderr.decode('utf-8', errors='replace').strip()
        message = stderr.splitlines()[-1] if stderr else f'{tool} exited with code {result.returncode}'
        raise DecodeError(f'Unable to decode audio data: {message}')
    return result


class FfmpegAudioCodec:
    """One decode/render session backed by a private scratch directory.

    The input bytes are spooled to a temp file so ffmpeg can seek containers
    that need it (MP4/M4A). ``close()`` removes the directory.
    """

    def __init__(self, timeout: float = _FFMPEG_TIMEOUT) -> None:
        self._timeout = timeout
        self._workdir: tempfile.TemporaryDirectory | None = tempfile.TemporaryDirectory(prefix='clip-scribe-')

    @property
    def closed(self) -> bool:
        return self._workdir is None

    async def decode(self, data: bytes) -> DecodedAudio:
        return await asyncio.to_thread(self._decode_sync, data)

    async def render_offline(
        self,
        decoded: DecodedAudio,
        target_rate: int,
        target_channels: int,
        target_length: int,
    ) -> np.ndarray:
        return await asyncio.to_thread(
            self._render_sync,
            decoded,
            target_rate,
            target_channels,
            target_length,
        )

    async def close(self) -> None:
        if self._workdir is not None:
            self._workdir.cleanup()
            self._workdir = None

    # --- blocking helpers (run off the event loop) ---

    def _decode_sync(self, data: bytes) -> DecodedAudio:
        if self._workdir is None:
            raise DecodeError('Codec session already closed')
        if not data:
            raise DecodeError('Unable to decode audio data: input is empty')

        ffmpeg = _require('ffmpeg')
        ffprobe = _require('ffprobe')

        source = Path(self._workdir.name) / 'input'
        source.write_bytes(data)

        sample_rate, channels = self._probe(source, ffprobe)

        cmd = [
            ffmpeg,
            '-i',
            str(source),
            '-vn',
            '-ar',
            str(sample_rate),
            '-ac',
            str(channels),
            '-f',
            'f32le',
            '-v',
            'error',
            'pipe:1',
        ]
        result = _run(cmd, timeout=self._timeout)
        if not result.stdout:
            raise DecodeError('Unable to decode audio data: no audio samples')

        interleaved = np.frombuffer(result.stdout, dtype=np.float32)
        frames = len(interleaved) // channels
        channel_data = interleaved[: frames * channels].reshape(frames, channels).T.copy()
        log.debug('Decoded %d frames x %d channels @ %d Hz', frames, channels, sample_rate)
        return DecodedAudio(
            duration_seconds=frames / sample_rate,
            sample_rate=sample_rate,
            channel_data=channel_data,
        )

    def _probe(self, source: Path, ffprobe: str) -> tuple[int, int]:
        cmd = [
            ffprobe,
            '-v',
            'error',
            '-select_streams',
            'a:0',
            '-show_entries',
            'stream=sample_rate,channels',
            '-of',
            'json',
            str(source),
        ]
        result = _run(cmd, timeout=self._timeout)
        try:
            streams = json.loads(result.stdout or b'{}').get('streams') or []
        except json.JSONDecodeError as exc:
            raise DecodeError(f'Unable to decode audio data: unreadable probe output ({exc})') from exc
        if not streams:
            raise DecodeError('Unable to decode audio data: no audio stream found')
        stream = streams[0]
        try:
            sample_rate, channels = int(stream['sample_rate']), int(stream['channels'])
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f'Unable to decode audio data: incomplete stream info {stream}') from exc
        if sample_rate <= 0 or channels <= 0:
            raise DecodeError(f'Unable to decode audio data: invalid stream info {stream}')
        return sample_rate, channels

    def _render_sync(
        self,
        decoded: DecodedAudio,
        target_rate: int,
        target_channels: int,
        target_length: int,
    ) -> np.ndarray:
        if self._workdir is None:
            raise DecodeError('Codec session already closed')

        ffmpeg = _require('ffmpeg')
        interleaved = np.ascontiguousarray(decoded.channel_data.T, dtype=np.float32)
        cmd = [
            ffmpeg,
            '-f',
            'f32le',
            '-ar',
            str(decoded.sample_rate),
            '-ac',
            str(decoded.channel_count),
            '-i',
            'pipe:0',
            '-ar',
            str(target_rate),
            '-ac',
            str(target_channels),
            '-f',
            'f32le',
            '-v',
            'error',
            'pipe:1',
        ]
        result = _run(cmd, timeout=self._timeout, stdin=interleaved.tobytes())
        rendered = np.frombuffer(result.stdout, dtype=np.float32)
        frames = len(rendered) // target_channels
        rendered = _fit_length(rendered[: frames * target_channels].reshape(frames, target_channels).T, target_length)
        return rendered[0] if target_channels == 1 else rendered


def _fit_length(channels: np.ndarray, length: int) -> np.ndarray:
    """Zero-pad or truncate each channel to exactly *length* frames."""
    out = np.zeros((channels.shape[0], length), dtype=np.float32)
    n = min(length, channels.shape[1])
    out[:, :n] = channels[:, :n]
    return out
