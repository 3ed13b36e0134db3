"""Strided windowing for clips longer than one model chunk."""

from __future__ import annotations

from dataclasses import dataclass

from clip_scribe.l1_entities.transcript import TranscriptionOptions, TranscriptSegment


@dataclass(frozen=True)
class Window:
    """A slice of the clip plus the region whose segments belong to it.

    Offsets are in samples. ``keep_start``/``keep_end`` are absolute: segments
    whose midpoint falls outside them are owned by a neighbouring window.
    """

    start: int
    end: int
    keep_start: int
    keep_end: int


def plan_windows(n_samples: int, sample_rate: int, options: TranscriptionOptions) -> list[Window]:
    """Split *n_samples* into overlapping windows of ``chunk_length_s``.

    Consecutive windows overlap by ``2 * stride_length_s``; each keeps the middle
    of that overlap so every instant is owned by exactly one window. The first
    and last windows keep everything up to the clip edges.
    """
    chunk = int(options.chunk_length_s * sample_rate)
    stride = int(options.stride_length_s * sample_rate)
    step = options.step_samples(sample_rate)
    if step < 1:
        raise ValueError(f'Window step is {step} samples at {sample_rate} Hz; stride too large for chunk')

    if n_samples <= chunk:
        return [Window(start=0, end=n_samples, keep_start=0, keep_end=n_samples)]

    windows: list[Window] = []
    start = 0
    while True:
        end = min(start + chunk, n_samples)
        is_first = start == 0
        is_last = end == n_samples
        windows.append(
            Window(
                start=start,
                end=end,
                keep_start=start if is_first else start + stride,
                keep_end=end if is_last else end - stride,
            )
        )
        if is_last:
            return windows
        start += step


def merge_window_segments(
    window: Window,
    segments: list[TranscriptSegment],
    sample_rate: int,
) -> list[TranscriptSegment]:
    """Shift window-relative segments to clip time and drop those outside the keep region."""
    offset = window.start / sample_rate
    keep_start = window.keep_start / sample_rate
    keep_end = window.keep_end / sample_rate

    kept: list[TranscriptSegment] = []
    for seg in segments:
        start = offset + seg.start
        end = offset + seg.end
        midpoint = (start + end) / 2
        if keep_start <= midpoint < keep_end or (window.keep_end == window.end and midpoint >= keep_end):
            kept.append(TranscriptSegment(text=seg.text, start=start, end=end))
    return kept


def join_segments(segments: list[TranscriptSegment]) -> str:
    return ' '.join(seg.text.strip() for seg in segments if seg.text.strip())
